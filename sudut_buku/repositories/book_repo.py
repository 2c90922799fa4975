from sqlalchemy import func, select, update

from sudut_buku.models.book import Book
from sudut_buku.models.loan import Loan


class BookRepo:
    def __init__(self, session):
        self.session = session

    def list_all(self):
        return self.session.scalars(select(Book).order_by(Book.id)).all()

    def get(self, book_id: int):
        return self.session.get(Book, book_id)

    def get_for_update(self, book_id: int):
        # row lock on MySQL/PostgreSQL/MSSQL; SQLite holds the write lock via BEGIN IMMEDIATE
        stmt = select(Book).where(Book.id == book_id).with_for_update()
        return self.session.scalars(stmt).first()

    def add(self, book: Book):
        self.session.add(book)
        self.session.flush()
        return book

    def delete(self, book: Book):
        self.session.delete(book)
        self.session.flush()

    def count_open_loans(self, book_id: int) -> int:
        stmt = select(func.count(Loan.id)).where(Loan.book_id == book_id, Loan.returned_at.is_(None))
        return self.session.scalar(stmt)

    def take_copy(self, book_id: int) -> bool:
        """Decrement available_copies unless it is already 0. False when nothing was taken."""
        stmt = (
            update(Book)
            .where(Book.id == book_id, Book.available_copies > 0)
            .values(available_copies=Book.available_copies - 1)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1

    def put_back_copy(self, book_id: int) -> bool:
        stmt = (
            update(Book)
            .where(Book.id == book_id)
            .values(available_copies=Book.available_copies + 1)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1
