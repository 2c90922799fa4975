# sudut_buku/tasks/overdue_check.py
from flask import current_app

from sudut_buku.extensions import db
from sudut_buku.repositories.loan_repo import LoanRepo
from sudut_buku.utils.clock import utcnow


def run_overdue_check_job(app, now=None):
    """
    Logs the open loans whose due date has passed.
    Read-only: loans and stock are never touched here.
    Returns the overdue loan ids.
    """
    with app.app_context():
        try:
            now = now or utcnow()
            overdue = LoanRepo(db.session).find_overdue(now)
            ids = [x.id for x in overdue]

            if ids:
                current_app.logger.warning(f"[overdue_check] overdue={len(ids)} loan_ids={ids}")
            else:
                current_app.logger.info("[overdue_check] overdue=0")
            return ids
        finally:
            db.session.rollback()
