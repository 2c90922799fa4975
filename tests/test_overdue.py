import logging
from datetime import timedelta

from sudut_buku.extensions import db
from sudut_buku.repositories.loan_repo import LoanRepo
from sudut_buku.tasks.overdue_check import run_overdue_check_job
from sudut_buku.tasks.scheduler import start_scheduler
from sudut_buku.utils.clock import utcnow


def test_find_overdue_only_returns_open_loans_past_due(app, seed):
    book_id = seed.book(total=5)
    member_id = seed.member()
    late = seed.loan(book_id, member_id, due_in_days=-3)
    seed.loan(book_id, member_id, due_in_days=0)
    seed.loan(book_id, member_id, due_in_days=5)
    seed.loan(book_id, member_id, due_in_days=-10, returned=True)

    overdue = LoanRepo(db.session).find_overdue(utcnow())

    assert [x.id for x in overdue] == [late]
    assert overdue[0].status() == "overdue"


def test_overdue_job_logs_late_loans(app, seed, caplog):
    book_id = seed.book(total=2)
    member_id = seed.member()
    late = seed.loan(book_id, member_id, due_in_days=-1)

    with caplog.at_level(logging.INFO):
        ids = run_overdue_check_job(app)

    assert ids == [late]
    assert "[overdue_check] overdue=1" in caplog.text


def test_overdue_job_with_explicit_now(app, seed):
    book_id = seed.book()
    member_id = seed.member()
    loan_id = seed.loan(book_id, member_id, due_in_days=2)

    assert run_overdue_check_job(app) == []
    assert run_overdue_check_job(app, now=utcnow() + timedelta(days=3)) == [loan_id]


def test_scheduler_is_off_in_tests(app):
    assert start_scheduler(app) is None
    assert "apscheduler" not in app.extensions


def test_scheduler_registers_job_when_enabled(app):
    app.config["SCHEDULER_ENABLED"] = True
    app.config["OVERDUE_CHECK_MINUTES"] = 15
    scheduler = start_scheduler(app)
    try:
        job = scheduler.get_job("overdue_check_job")
        assert job is not None
        assert app.extensions["apscheduler"] is scheduler
    finally:
        scheduler.shutdown(wait=False)
