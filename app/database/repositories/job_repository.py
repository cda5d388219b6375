from typing import Any

import psycopg
from psycopg.rows import dict_row

from app.database.connection import get_connection
from app.database.models import JobRecord


class JobRepository:
    """Queue operations on the analysis_jobs table.

    Status moves pending -> processing -> done, or back to pending while
    attempts remain, or to failed once they are used up.
    """

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Lock the oldest claimable pending job and flip it to processing.

        Uses SELECT ... FOR UPDATE SKIP LOCKED so concurrent workers never
        claim the same row.
        """
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, symptom_analysis_id, attempts
                FROM analysis_jobs
                WHERE status = 'pending' AND attempts < %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()
            if row is None:
                conn.rollback()
                return None
            cur.execute(
                """
                UPDATE analysis_jobs
                SET status = 'processing', locked_at = NOW(), updated_at = NOW()
                WHERE id = %s
                """,
                (row["id"],),
            )
        conn.commit()
        return self._to_record({**row, "status": "processing"})

    def mark_done(self, job_id: int) -> None:
        self._update(
            job_id,
            "status = 'done', error_message = NULL",
        )

    def mark_failed(self, job_id: int, error: str) -> None:
        """Record the final error; the job is never claimed again."""
        self._update(
            job_id,
            "status = 'failed', attempts = attempts + 1, error_message = %s",
            error,
        )

    def increment_attempts(self, job_id: int, error: str | None = None) -> None:
        """Count a failed attempt and put the job back in the queue."""
        self._update(
            job_id,
            "status = 'pending', attempts = attempts + 1, error_message = %s, locked_at = NULL",
            error,
        )

    def find_by_id(self, job_id: int) -> JobRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, symptom_analysis_id, status, attempts,
                           error_message, locked_at, created_at, updated_at
                    FROM analysis_jobs
                    WHERE id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()
        return self._to_record(row) if row is not None else None

    @staticmethod
    def _update(job_id: int, assignments: str, *params: object) -> None:
        # assignments are fixed strings from this class, never user input
        query = f"UPDATE analysis_jobs SET {assignments}, updated_at = NOW() WHERE id = %s"
        with get_connection() as conn:
            conn.execute(query, (*params, job_id))  # type: ignore[arg-type]
            conn.commit()

    @staticmethod
    def _to_record(row: dict[str, Any]) -> JobRecord:
        return JobRecord(
            id=row["id"],
            symptom_analysis_id=str(row["symptom_analysis_id"]),
            status=row["status"],
            attempts=row["attempts"],
            error_message=row.get("error_message"),
            locked_at=row.get("locked_at"),
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )
