from datetime import date, datetime, time

from flask import current_app

from sudut_buku.errors import (
    BookNotFoundError,
    LoanNotActiveError,
    LoanNotFoundError,
    MemberNotFoundError,
    OutOfStockError,
    PersistenceError,
    ValidationError,
)
from sudut_buku.models.loan import Loan
from sudut_buku.repositories.book_repo import BookRepo
from sudut_buku.repositories.loan_repo import LoanRepo
from sudut_buku.repositories.member_repo import MemberRepo
from sudut_buku.repositories.transaction import atomic
from sudut_buku.utils.clock import utcnow

DUE_DATE_FORMAT = "%Y-%m-%d"


def parse_due_date(raw, today: date) -> date:
    if isinstance(raw, datetime):
        due = raw.date()
    elif isinstance(raw, date):
        due = raw
    else:
        try:
            due = datetime.strptime(str(raw or "").strip(), DUE_DATE_FORMAT).date()
        except ValueError:
            raise ValidationError(f"due_date must be YYYY-MM-DD, got {raw!r}")

    if due < today:
        raise ValidationError(f"due_date {due.isoformat()} is before today ({today.isoformat()})")
    return due


def parse_id(raw, name: str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(f"{name} must be an integer")
    if isinstance(raw, float) and not raw.is_integer():
        raise ValidationError(f"{name} must be an integer")
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer")
    if value <= 0:
        raise ValidationError(f"{name} must be positive")
    return value


class LendingService:
    """
    Borrow and return, each as a single transaction.

    available_copies is the authoritative stock counter. Loan rows are the
    history and are never counted to derive stock. Both operations either
    change the loan row and the counter together or change nothing.
    """

    def __init__(self, session, clock=utcnow):
        self.session = session
        self.clock = clock
        self.books = BookRepo(session)
        self.members = MemberRepo(session)
        self.loans = LoanRepo(session)

    def borrow(self, book_id, member_id, due_date) -> Loan:
        now = self.clock()
        # validation happens before the session is touched
        book_id = parse_id(book_id, "book_id")
        member_id = parse_id(member_id, "member_id")
        due = parse_due_date(due_date, now.date())

        with atomic(self.session, "borrow"):
            book = self.books.get_for_update(book_id)
            if book is None:
                raise BookNotFoundError(f"Book {book_id} not found")
            if self.members.get(member_id) is None:
                raise MemberNotFoundError(f"Member {member_id} not found")

            if book.available_copies <= 0 or not self.books.take_copy(book_id):
                current_app.logger.info(f"[borrow] out of stock book_id={book_id} member_id={member_id}")
                raise OutOfStockError(f"No copies of book {book_id} available")

            loan = self.loans.add(Loan(
                book_id=book_id,
                member_id=member_id,
                borrowed_at=now,
                due_at=datetime.combine(due, time.min),
                returned_at=None,
            ))
            loan_id = loan.id

        current_app.logger.info(f"[borrow] loan_id={loan_id} book_id={book_id} member_id={member_id} due={due}")
        return loan

    def return_loan(self, loan_id) -> bool:
        loan_id = parse_id(loan_id, "loan_id")
        now = self.clock()

        with atomic(self.session, "return"):
            loan = self.loans.get_for_update(loan_id)
            if loan is None:
                raise LoanNotFoundError(f"Loan {loan_id} not found")

            if not self.loans.mark_returned(loan_id, now):
                raise LoanNotActiveError(f"Loan {loan_id} was already returned")

            book_id = loan.book_id

            if not self.books.put_back_copy(book_id):
                # FK makes this unreachable unless the row vanished mid-transaction
                current_app.logger.error(f"[return] book_id={book_id} of loan_id={loan_id} missing, rolled back")
                raise PersistenceError(f"Book {book_id} of loan {loan_id} is missing")

        current_app.logger.info(f"[return] loan_id={loan_id} book_id={book_id}")
        return True
