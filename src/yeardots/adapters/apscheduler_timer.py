"""APScheduler-backed timer adapter."""

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from apscheduler.job import Job
from apscheduler.jobstores.base import JobLookupError
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.date import DateTrigger

logger = logging.getLogger(__name__)


class APSchedulerHandle:
    """Handle for a one-shot job. Implements TimerHandle protocol."""

    def __init__(self, job: Job):
        self._job = job

    def cancel(self) -> None:
        try:
            self._job.remove()
        except JobLookupError:
            # Already ran or already cancelled
            pass


class APSchedulerTimer:
    """
    One-shot callbacks on a background APScheduler.

    Implements TimerScheduler protocol. The scheduler thread is started on
    first use and stopped by shutdown().
    """

    def __init__(self, scheduler: BackgroundScheduler | None = None):
        self._scheduler = scheduler or BackgroundScheduler(timezone=timezone.utc)
        self._lock = threading.Lock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> APSchedulerHandle:
        with self._lock:
            if not self._scheduler.running:
                self._scheduler.start()
                logger.info("Timer scheduler started")
        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay)
        job = self._scheduler.add_job(
            callback,
            DateTrigger(run_date=run_date, timezone=timezone.utc),
            misfire_grace_time=None,
        )
        logger.debug(f"Scheduled {job.id} in {delay:.2f}s")
        return APSchedulerHandle(job)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            if self._scheduler.running:
                self._scheduler.shutdown(wait=wait)
                logger.info("Timer scheduler stopped")
