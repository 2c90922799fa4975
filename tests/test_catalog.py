import pytest

from sudut_buku.errors import BookNotFoundError, HasOpenLoansError, MemberNotFoundError, ValidationError
from sudut_buku.extensions import db
from sudut_buku.models.loan import Loan
from sudut_buku.services.book_service import BookService
from sudut_buku.services.member_service import MemberService


def test_create_book_puts_all_copies_on_the_shelf(app):
    book = BookService(db.session).create_book({
        "title": "Laskar Pelangi",
        "author": "Andrea Hirata",
        "category": "Novel",
        "year": "2005",
        "total_copies": 3,
        "available_copies": 1,
    })

    assert book.id is not None
    assert book.year == 2005
    assert book.total_copies == 3
    assert book.available_copies == 3


@pytest.mark.parametrize("payload", [
    {"author": "A", "category": "C", "total_copies": 1},
    {"title": "  ", "author": "A", "category": "C", "total_copies": 1},
    {"title": "T", "author": "A", "category": "C", "total_copies": -1},
    {"title": "T", "author": "A", "category": "C", "total_copies": "many"},
    {"title": "T", "author": "A", "category": "C", "year": "soon"},
])
def test_create_book_validation(app, payload):
    with pytest.raises(ValidationError):
        BookService(db.session).create_book(payload)


def test_get_missing_book(app):
    with pytest.raises(BookNotFoundError):
        BookService(db.session).get_book(7)


def test_delete_book_with_open_loan_is_refused(app, seed):
    book_id = seed.book()
    member_id = seed.member()
    seed.loan(book_id, member_id)

    with pytest.raises(HasOpenLoansError):
        BookService(db.session).delete_book(book_id)

    assert BookService(db.session).get_book(book_id) is not None


def test_delete_book_removes_returned_loans(app, seed):
    book_id = seed.book()
    member_id = seed.member()
    seed.loan(book_id, member_id, returned=True)

    assert BookService(db.session).delete_book(book_id) is True
    assert BookService(db.session).delete_book(book_id) is False
    assert db.session.query(Loan).count() == 0


def test_member_lifecycle(app, seed):
    service = MemberService(db.session)
    member = service.create_member({"name": "Budi", "email": "budi@example.com"})
    member_id = member.id

    assert service.get_member(member_id).joined_at is not None
    assert [m.name for m in service.list_members()] == ["Budi"]
    assert service.delete_member(member_id) is True

    with pytest.raises(MemberNotFoundError):
        service.get_member(member_id)


@pytest.mark.parametrize("payload", [
    {"email": "x@example.com"},
    {"name": "X"},
    {"name": "X", "email": "not-an-email"},
])
def test_member_validation(app, payload):
    with pytest.raises(ValidationError):
        MemberService(db.session).create_member(payload)


def test_delete_member_with_open_loan_is_refused(app, seed):
    book_id = seed.book()
    member_id = seed.member()
    seed.loan(book_id, member_id)

    with pytest.raises(HasOpenLoansError):
        MemberService(db.session).delete_member(member_id)


def test_delete_member_locks_the_member_row(app, seed, monkeypatch):
    member_id = seed.member()
    service = MemberService(db.session)
    locked = []
    original = service.members.get_for_update

    def spy(member_id):
        locked.append(member_id)
        return original(member_id)

    monkeypatch.setattr(service.members, "get_for_update", spy)

    assert service.delete_member(member_id) is True
    assert locked == [member_id]
    assert service.delete_member(member_id) is False
