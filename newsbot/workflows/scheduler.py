from __future__ import annotations

import logging
import time

import schedule

from newsbot.config.settings import get_settings
from newsbot.db.database import init_db
from newsbot.tools.lock import RunLock, RunInProgressError
from newsbot.workflows.run_newsbot import RunResult, run_newsbot

logger = logging.getLogger(__name__)

JOB_TAG = "post_security_news"


def run_locked() -> RunResult | None:
    """
    One pipeline run guarded by the run lock. Returns None when another
    run holds the lock.
    """
    try:
        with RunLock():
            init_db()
            return run_newsbot()
    except RunInProgressError as e:
        logger.warning("Skipping run: %s", e)
        return None


def scheduled_run() -> RunResult | None:
    """Scheduler tick; a failing run is logged and the schedule keeps going."""
    try:
        return run_locked()
    except Exception:
        logger.exception("Scheduled run failed")
        return None


def register_job(scheduler: schedule.Scheduler, interval_hours: int) -> schedule.Job:
    scheduler.clear(JOB_TAG)
    return scheduler.every(interval_hours).hours.do(scheduled_run).tag(JOB_TAG)


def run_scheduled(scheduler: schedule.Scheduler | None = None, poll_seconds: int = 30) -> None:
    s = get_settings()
    scheduler = scheduler or schedule.Scheduler()
    job = register_job(scheduler, s.schedule_interval_hours)
    logger.info(
        "Security bot started (runs every %d hours, next run at %s)",
        s.schedule_interval_hours, job.next_run,
    )
    while True:
        scheduler.run_pending()
        time.sleep(poll_seconds)
