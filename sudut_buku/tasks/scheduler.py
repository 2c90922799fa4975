# sudut_buku/tasks/scheduler.py
import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Starts the overdue report job.
    - Skipped when SCHEDULER_ENABLED is off (tests, one-off CLI commands).
    - Debug reloader runs two processes; only the real one (WERKZEUG_RUN_MAIN=true) schedules.
    - Job exceptions are logged and do not stop the scheduler.
    """
    if not app.config.get("SCHEDULER_ENABLED", True):
        app.logger.info("[scheduler] disabled by config.")
        return None

    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    # late import keeps tasks -> app imports one-directional
    from sudut_buku.tasks.overdue_check import run_overdue_check_job

    minutes = int(app.config.get("OVERDUE_CHECK_MINUTES", 60))
    scheduler = BackgroundScheduler(timezone="UTC")

    def _job_wrapper():
        try:
            run_overdue_check_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] overdue_check_job error: {ex}")

    scheduler.add_job(
        func=_job_wrapper,
        trigger=IntervalTrigger(minutes=minutes),
        id="overdue_check_job",
        replace_existing=True,
        max_instances=1,        # no overlapping runs
        coalesce=True,          # collapse missed runs into one
        misfire_grace_time=120,
    )
    scheduler.start()
    app.logger.info(f"[scheduler] Overdue check job started (every {minutes} minutes).")

    app.extensions["apscheduler"] = scheduler
    atexit.register(lambda: scheduler.shutdown(wait=False) if scheduler.running else None)
    return scheduler
