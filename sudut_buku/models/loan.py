from datetime import datetime

from sudut_buku.extensions import db
from sudut_buku.utils.clock import utcnow


class Loan(db.Model):
    __tablename__ = "loans"

    id = db.Column(db.Integer, primary_key=True)

    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)
    member_id = db.Column(db.Integer, db.ForeignKey("members.id"), nullable=False, index=True)

    borrowed_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    due_at = db.Column(db.DateTime, nullable=False)
    returned_at = db.Column(db.DateTime, nullable=True)  # NULL = open loan

    book = db.relationship("Book", back_populates="loans")
    member = db.relationship("Member", back_populates="loans")

    @property
    def is_open(self) -> bool:
        return self.returned_at is None

    def status(self, now: datetime | None = None) -> str:
        if not self.is_open:
            return "returned"
        now = now or utcnow()
        if self.due_at.date() < now.date():
            return "overdue"
        return "active"

    def to_dict(self, now: datetime | None = None) -> dict:
        return {
            "id": self.id,
            "book_id": self.book_id,
            "member_id": self.member_id,
            "borrowed_at": self.borrowed_at.isoformat() if self.borrowed_at else None,
            "due_at": self.due_at.isoformat() if self.due_at else None,
            "returned_at": self.returned_at.isoformat() if self.returned_at else None,
            "status": self.status(now),
        }
