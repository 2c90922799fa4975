from sqlalchemy import func, select

from sudut_buku.models.loan import Loan
from sudut_buku.models.member import Member


class MemberRepo:
    def __init__(self, session):
        self.session = session

    def list_all(self):
        return self.session.scalars(select(Member).order_by(Member.id)).all()

    def get(self, member_id: int):
        return self.session.get(Member, member_id)

    def get_for_update(self, member_id: int):
        stmt = select(Member).where(Member.id == member_id).with_for_update()
        return self.session.scalars(stmt).first()

    def add(self, member: Member):
        self.session.add(member)
        self.session.flush()
        return member

    def delete(self, member: Member):
        self.session.delete(member)
        self.session.flush()

    def count_open_loans(self, member_id: int) -> int:
        stmt = select(func.count(Loan.id)).where(Loan.member_id == member_id, Loan.returned_at.is_(None))
        return self.session.scalar(stmt)
