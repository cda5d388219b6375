import os
import uuid
from collections.abc import Generator
from typing import Any

import psycopg
import pytest
from psycopg.rows import dict_row

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool
from app.database.models import JobRecord


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "symptom_analysis_test")
    return Settings(analysis_provider="example")


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1 FROM symptom_analyses LIMIT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[tuple[str, Any]], None, None]:
    cleanup: list[tuple[str, Any]] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        with conn.cursor() as cur:
            for table, row_id in cleanup:
                if table == "analysis_jobs":
                    cur.execute("DELETE FROM analysis_jobs WHERE id = %s", (row_id,))
            for table, row_id in cleanup:
                if table == "symptom_analyses":
                    cur.execute("DELETE FROM symptom_analyses WHERE id = %s", (row_id,))
        conn.commit()


@pytest.fixture
def seed_analysis(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, Any]],
) -> str:
    analysis_id = str(uuid.uuid4())
    with db_conn.cursor() as cur:
        cur.execute(
            """
            INSERT INTO symptom_analyses
            (id, user_id, primary_symptom, duration, severity,
             additional_symptoms, description, created_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, NOW())
            """,
            (
                analysis_id,
                str(uuid.uuid4()),
                "Headache",
                "1-3-days",
                "moderate",
                ["nausea"],
                "Throbbing pain",
            ),
        )
    db_conn.commit()
    integration_cleanup.append(("symptom_analyses", analysis_id))
    return analysis_id


@pytest.fixture
def seed_job(
    db_conn: psycopg.Connection[Any],
    integration_cleanup: list[tuple[str, Any]],
    seed_analysis: str,
) -> JobRecord:
    with db_conn.cursor(row_factory=dict_row) as cur:
        cur.execute(
            """
            INSERT INTO analysis_jobs (symptom_analysis_id, status, attempts)
            VALUES (%s, 'pending', 0)
            RETURNING id
            """,
            (seed_analysis,),
        )
        row = cur.fetchone()
        assert row is not None
        job_id = row["id"]
    db_conn.commit()
    integration_cleanup.append(("analysis_jobs", job_id))
    return JobRecord(
        id=job_id,
        symptom_analysis_id=seed_analysis,
        status="pending",
        attempts=0,
    )
