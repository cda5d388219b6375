import time

import psycopg

from app.config.settings import Settings
from app.database.connection import get_connection
from app.database.models import JobRecord
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.worker.job_runner import JobRunner


class Worker:
    """Polls analysis_jobs and hands each claimed job to the runner."""

    def __init__(
        self,
        job_repo: JobRepository,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner
        self._poll_interval = settings.job_poll_interval_seconds

    def run(self, max_jobs: int | None = None) -> None:
        """Poll until interrupted, or until ``max_jobs`` jobs have run."""
        Log.info(f"Worker started, polling every {self._poll_interval}s")
        handled = 0
        try:
            while max_jobs is None or handled < max_jobs:
                job = self._claim()
                if job is None:
                    Log.debug("Queue empty, sleeping")
                    time.sleep(self._poll_interval)
                    continue
                self._job_runner.run(job)
                handled += 1
        except KeyboardInterrupt:
            Log.info("Worker interrupted, shutting down")
        Log.info(f"Worker stopped after {handled} jobs")

    def _claim(self) -> JobRecord | None:
        try:
            with get_connection() as conn:
                return self._job_repo.claim_next_job(conn)
        except psycopg.Error as exc:
            Log.warning(f"Could not claim a job, retrying after sleep: {exc}")
            return None
