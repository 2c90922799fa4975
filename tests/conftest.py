from datetime import timedelta

import pytest

from sudut_buku import create_app
from sudut_buku.config import TestConfig
from sudut_buku.extensions import db
from sudut_buku.models.book import Book
from sudut_buku.models.loan import Loan
from sudut_buku.models.member import Member
from sudut_buku.utils.clock import utcnow


@pytest.fixture
def app(tmp_path):
    # file database so worker threads get their own connections
    db_uri = f"sqlite:///{tmp_path / 'library_test.db'}"
    app = create_app(
        TestConfig,
        SQLALCHEMY_DATABASE_URI=db_uri,
        DB_CONNECT_TIMEOUT=10,
    )
    with app.app_context():
        yield app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


class Seed:
    """Inserts rows directly, bypassing the services. Returns ids only."""

    def book(self, title="Rust Book", author="Steve Klabnik", category="Programming",
             year=2019, total=1, available=None):
        book = Book(
            title=title,
            author=author,
            category=category,
            year=year,
            total_copies=total,
            available_copies=total if available is None else available,
        )
        db.session.add(book)
        db.session.flush()
        book_id = book.id
        db.session.commit()
        return book_id

    def member(self, name="Ayu", email="ayu@example.com"):
        member = Member(name=name, email=email)
        db.session.add(member)
        db.session.flush()
        member_id = member.id
        db.session.commit()
        return member_id

    def loan(self, book_id, member_id, due_in_days=7, returned=False):
        now = utcnow()
        due = (now + timedelta(days=due_in_days)).replace(hour=0, minute=0, second=0, microsecond=0)
        loan = Loan(
            book_id=book_id,
            member_id=member_id,
            borrowed_at=now,
            due_at=due,
            returned_at=now if returned else None,
        )
        db.session.add(loan)
        db.session.flush()
        loan_id = loan.id
        db.session.commit()
        return loan_id

    def stock(self, book_id):
        value = db.session.get(Book, book_id).available_copies
        db.session.commit()
        return value

    def loan_count(self):
        value = db.session.query(Loan).count()
        db.session.commit()
        return value


@pytest.fixture
def seed(app):
    return Seed()


@pytest.fixture
def tomorrow():
    return (utcnow() + timedelta(days=1)).date().isoformat()
