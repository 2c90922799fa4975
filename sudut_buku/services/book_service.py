from sudut_buku.errors import BookNotFoundError, HasOpenLoansError, ValidationError
from sudut_buku.models.book import Book
from sudut_buku.repositories.book_repo import BookRepo
from sudut_buku.repositories.transaction import atomic


def _required_text(data: dict, key: str) -> str:
    value = (data.get(key) or "")
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} is required")
    return value.strip()


def _int_field(data: dict, key: str, default=None):
    raw = data.get(key, default)
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"{key} must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer")


class BookService:
    def __init__(self, session):
        self.session = session
        self.books = BookRepo(session)

    def list_books(self):
        return self.books.list_all()

    def get_book(self, book_id: int):
        book = self.books.get(book_id)
        if not book:
            raise BookNotFoundError(f"Book {book_id} not found")
        return book

    def create_book(self, data: dict):
        total = _int_field(data, "total_copies", 1)
        if total is None or total < 0:
            raise ValidationError("total_copies cannot be negative")

        book = Book(
            title=_required_text(data, "title"),
            author=_required_text(data, "author"),
            category=_required_text(data, "category"),
            year=_int_field(data, "year"),
            total_copies=total,
            available_copies=total,  # new stock is all on the shelf
        )
        with atomic(self.session, "create_book"):
            self.books.add(book)
        return book

    def delete_book(self, book_id: int) -> bool:
        with atomic(self.session, "delete_book"):
            book = self.books.get_for_update(book_id)
            if book is None:
                return False
            open_loans = self.books.count_open_loans(book_id)
            if open_loans:
                raise HasOpenLoansError(f"Book {book_id} has {open_loans} open loan(s)")
            self.books.delete(book)
        return True
