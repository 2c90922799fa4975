from flask import Blueprint, request

from sudut_buku.errors import BookNotFoundError, LibraryError
from sudut_buku.extensions import db
from sudut_buku.services.book_service import BookService
from sudut_buku.utils.responses import json_error, json_ok

book_bp = Blueprint("books", __name__, url_prefix="/books")


@book_bp.get("")
def list_books():
    books = BookService(db.session).list_books()
    return json_ok([b.to_dict() for b in books])


@book_bp.get("/<int:book_id>")
def get_book(book_id: int):
    try:
        return json_ok(BookService(db.session).get_book(book_id).to_dict())
    except LibraryError as e:
        return json_error(e)


@book_bp.post("")
def create_book():
    data = request.get_json(silent=True) or {}
    try:
        b = BookService(db.session).create_book(data)
        return json_ok(b.to_dict(), 201)
    except LibraryError as e:
        return json_error(e)


@book_bp.delete("/<int:book_id>")
def delete_book(book_id: int):
    try:
        if not BookService(db.session).delete_book(book_id):
            raise BookNotFoundError(f"Book {book_id} not found")
        return json_ok(True)
    except LibraryError as e:
        return json_error(e)
