from sudut_buku.extensions import db


class Book(db.Model):
    __tablename__ = "books"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    author = db.Column(db.String(200), nullable=False)
    category = db.Column(db.String(100), nullable=False, default="")
    year = db.Column(db.Integer, nullable=True)

    total_copies = db.Column(db.Integer, nullable=False, default=0)
    # only LendingService moves this after insert
    available_copies = db.Column(db.Integer, nullable=False, default=0)

    loans = db.relationship("Loan", back_populates="book", cascade="all, delete-orphan")

    __table_args__ = (
        db.CheckConstraint("total_copies >= 0", name="ck_books_total_copies"),
        db.CheckConstraint(
            "available_copies >= 0 AND available_copies <= total_copies",
            name="ck_books_available_copies",
        ),
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "category": self.category,
            "year": self.year,
            "total_copies": self.total_copies,
            "available_copies": self.available_copies,
        }
