from sudut_buku.errors import HasOpenLoansError, MemberNotFoundError, ValidationError
from sudut_buku.models.member import Member
from sudut_buku.repositories.member_repo import MemberRepo
from sudut_buku.repositories.transaction import atomic


class MemberService:
    def __init__(self, session):
        self.session = session
        self.members = MemberRepo(session)

    def list_members(self):
        return self.members.list_all()

    def get_member(self, member_id: int):
        member = self.members.get(member_id)
        if not member:
            raise MemberNotFoundError(f"Member {member_id} not found")
        return member

    def create_member(self, data: dict):
        name = str(data.get("name") or "").strip()
        email = str(data.get("email") or "").strip()
        if not name:
            raise ValidationError("name is required")
        if "@" not in email:
            raise ValidationError("email is invalid")

        member = Member(name=name, email=email)
        with atomic(self.session, "create_member"):
            self.members.add(member)
        return member

    def delete_member(self, member_id: int) -> bool:
        with atomic(self.session, "delete_member"):
            member = self.members.get_for_update(member_id)
            if member is None:
                return False
            open_loans = self.members.count_open_loans(member_id)
            if open_loans:
                raise HasOpenLoansError(f"Member {member_id} has {open_loans} open loan(s)")
            self.members.delete(member)
        return True
