from app.analysis.exceptions import InvalidSymptomInputError
from app.config.settings import Settings
from app.database.models import JobRecord
from app.database.repositories.job_repository import JobRepository
from app.logging.logger import Log
from app.processor.processor import Processor


class JobRunner:
    """Run one analysis job and apply retry accounting on failure."""

    def __init__(
        self,
        processor: Processor,
        job_repo: JobRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._max_attempts = settings.max_job_attempts

    def run(self, job: JobRecord) -> None:
        attempt = job.attempts + 1
        Log.info(
            f"Running job {job.id}", analysis_id=job.symptom_analysis_id, attempt=attempt
        )
        try:
            self._processor.process(job.symptom_analysis_id, job.id)
        except InvalidSymptomInputError as exc:
            # the stored submission will not change between attempts
            Log.error(f"Job {job.id} has invalid input, marking failed: {exc}")
            self._job_repo.mark_failed(job.id, str(exc))
            return
        except Exception as exc:
            self._handle_failure(job, exc)
            return
        self._job_repo.mark_done(job.id)
        Log.info(f"Job {job.id} done")

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        """Back to pending while attempts remain, otherwise failed for good."""
        attempt = job.attempts + 1
        Log.error(f"Job {job.id} failed on attempt {attempt}: {exc}")
        if attempt >= self._max_attempts:
            self._job_repo.mark_failed(job.id, str(exc))
            Log.error(f"Job {job.id} marked failed after {attempt} attempts")
        else:
            self._job_repo.increment_attempts(job.id, str(exc))
            Log.warning(
                f"Job {job.id} requeued", attempts=attempt, max_attempts=self._max_attempts
            )
