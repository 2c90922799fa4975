from datetime import datetime

from sqlalchemy import select, update

from sudut_buku.models.loan import Loan


class LoanRepo:
    def __init__(self, session):
        self.session = session

    def get(self, loan_id: int):
        return self.session.get(Loan, loan_id)

    def get_for_update(self, loan_id: int):
        stmt = select(Loan).where(Loan.id == loan_id).with_for_update()
        return self.session.scalars(stmt).first()

    def list_all(self):
        return self.session.scalars(select(Loan).order_by(Loan.id)).all()

    def list_open(self):
        stmt = select(Loan).where(Loan.returned_at.is_(None)).order_by(Loan.id)
        return self.session.scalars(stmt).all()

    def list_returned(self):
        stmt = select(Loan).where(Loan.returned_at.is_not(None)).order_by(Loan.id)
        return self.session.scalars(stmt).all()

    def add(self, loan: Loan):
        self.session.add(loan)
        self.session.flush()
        return loan

    def mark_returned(self, loan_id: int, returned_at: datetime) -> bool:
        """Close the loan only if it is still open. False means it was already returned."""
        stmt = (
            update(Loan)
            .where(Loan.id == loan_id, Loan.returned_at.is_(None))
            .values(returned_at=returned_at)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    def find_overdue(self, now: datetime):
        # due_at is stored at midnight, so anything before today's midnight is late
        day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
        stmt = (
            select(Loan)
            .where(Loan.returned_at.is_(None), Loan.due_at < day_start)
            .order_by(Loan.due_at, Loan.id)
        )
        return self.session.scalars(stmt).all()
