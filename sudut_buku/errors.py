"""
Error taxonomy of the lending service.

Everything the core rejects on purpose is a LibraryError; controllers turn
it into the JSON error envelope using `error_code` and `status_code`.
Raw SQLAlchemy errors never leave the service layer, they are wrapped in
PersistenceError by `repositories.transaction.atomic`.
"""


class LibraryError(Exception):
    error_code = "library_error"
    status_code = 400
    default_message = "Request rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(LibraryError):
    error_code = "validation_error"
    status_code = 400
    default_message = "Invalid input"


class NotFoundError(LibraryError):
    error_code = "not_found"
    status_code = 404
    default_message = "Not found"


class BookNotFoundError(NotFoundError):
    error_code = "book_not_found"
    default_message = "Book not found"


class MemberNotFoundError(NotFoundError):
    error_code = "member_not_found"
    default_message = "Member not found"


class LoanNotFoundError(NotFoundError):
    error_code = "loan_not_found"
    default_message = "Loan not found"


class OutOfStockError(LibraryError):
    error_code = "out_of_stock"
    status_code = 409
    default_message = "No copies available"


class LoanNotActiveError(LibraryError):
    error_code = "loan_not_active"
    status_code = 409
    default_message = "Loan already returned"


class HasOpenLoansError(LibraryError):
    error_code = "has_open_loans"
    status_code = 409
    default_message = "Record still has open loans"


class PersistenceError(LibraryError):
    error_code = "persistence_error"
    status_code = 500
    default_message = "Storage failure, nothing was changed"


class DatabaseUnavailableError(RuntimeError):
    """Raised by the app factory when the database cannot be reached."""
