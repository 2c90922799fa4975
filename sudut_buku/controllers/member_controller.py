from flask import Blueprint, request

from sudut_buku.errors import LibraryError, MemberNotFoundError
from sudut_buku.extensions import db
from sudut_buku.services.member_service import MemberService
from sudut_buku.utils.responses import json_error, json_ok

member_bp = Blueprint("members", __name__, url_prefix="/members")


@member_bp.get("")
def list_members():
    members = MemberService(db.session).list_members()
    return json_ok([m.to_dict() for m in members])


@member_bp.get("/<int:member_id>")
def get_member(member_id: int):
    try:
        return json_ok(MemberService(db.session).get_member(member_id).to_dict())
    except LibraryError as e:
        return json_error(e)


@member_bp.post("")
def create_member():
    data = request.get_json(silent=True) or {}
    try:
        m = MemberService(db.session).create_member(data)
        return json_ok(m.to_dict(), 201)
    except LibraryError as e:
        return json_error(e)


@member_bp.delete("/<int:member_id>")
def delete_member(member_id: int):
    try:
        if not MemberService(db.session).delete_member(member_id):
            raise MemberNotFoundError(f"Member {member_id} not found")
        return json_ok(True)
    except LibraryError as e:
        return json_error(e)
