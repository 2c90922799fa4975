from flask import Blueprint, jsonify, request

from sudut_buku.errors import LibraryError, LoanNotFoundError, ValidationError
from sudut_buku.extensions import db
from sudut_buku.repositories.loan_repo import LoanRepo
from sudut_buku.services.lending_service import LendingService
from sudut_buku.utils.clock import utcnow
from sudut_buku.utils.responses import json_error, json_ok

loan_bp = Blueprint("loans", __name__, url_prefix="/loans")


@loan_bp.get("")
def list_loans():
    repo = LoanRepo(db.session)
    status = (request.args.get("status") or "").lower()
    now = utcnow()

    if status == "open":
        loans = repo.list_open()
    elif status == "returned":
        loans = repo.list_returned()
    elif status == "overdue":
        loans = repo.find_overdue(now)
    elif status:
        return json_error(ValidationError("status must be open, returned or overdue"))
    else:
        loans = repo.list_all()

    return json_ok([x.to_dict(now) for x in loans])


@loan_bp.get("/<int:loan_id>")
def get_loan(loan_id: int):
    loan = LoanRepo(db.session).get(loan_id)
    if loan is None:
        return json_error(LoanNotFoundError(f"Loan {loan_id} not found"))
    return json_ok(loan.to_dict())


@loan_bp.post("")
def borrow_book():
    data = request.get_json(silent=True) or {}
    try:
        loan = LendingService(db.session).borrow(
            data.get("book_id"),
            data.get("member_id"),
            data.get("due_date"),
        )
        return json_ok(loan.to_dict(), 201)
    except LibraryError as e:
        return json_error(e)


@loan_bp.post("/<int:loan_id>/return")
def return_book(loan_id: int):
    try:
        LendingService(db.session).return_loan(loan_id)
        return jsonify({"success": True})
    except LibraryError as e:
        return json_error(e)
