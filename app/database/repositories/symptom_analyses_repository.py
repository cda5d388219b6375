from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.analysis.models import AnalysisOutcome
from app.database.connection import get_connection
from app.database.models import SymptomAnalysisRecord
from app.processor.exceptions import AnalysisNotFoundError


class SymptomAnalysesRepository:
    """Database operations for the symptom_analyses table."""

    def find_by_id(self, analysis_id: str) -> SymptomAnalysisRecord:
        """Find a symptom analysis by ID.

        Raises:
            AnalysisNotFoundError: if no analysis with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, primary_symptom, duration, severity,
                           additional_symptoms, description, medications_context,
                           allergies_context, medical_history_context,
                           analysis_result, confidence_score, created_at
                    FROM symptom_analyses
                    WHERE id = %s
                    """,
                    (analysis_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise AnalysisNotFoundError(f"Analysis {analysis_id} not found")
        return self._to_record(row)

    def list_for_user(self, user_id: str) -> list[SymptomAnalysisRecord]:
        """Return a user's analyses, newest first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, user_id, primary_symptom, duration, severity,
                           additional_symptoms, description, medications_context,
                           allergies_context, medical_history_context,
                           analysis_result, confidence_score, created_at
                    FROM symptom_analyses
                    WHERE user_id = %s
                    ORDER BY created_at DESC
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    def save_result(self, analysis_id: str, outcome: AnalysisOutcome) -> None:
        """Persist the normalized result with the prompt and raw reply that produced it.

        Raises:
            AnalysisNotFoundError: if no analysis with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE symptom_analyses
                    SET analysis_result = %s,
                        confidence_score = %s,
                        api_prompt = %s,
                        api_response = %s
                    WHERE id = %s
                    """,
                    (
                        Jsonb(outcome.result.to_payload()),
                        outcome.result.confidence,
                        outcome.prompt,
                        outcome.raw_response,
                        analysis_id,
                    ),
                )
                if cur.rowcount == 0:
                    raise AnalysisNotFoundError(f"Analysis {analysis_id} not found")
            conn.commit()

    @staticmethod
    def _to_record(row: dict[str, Any]) -> SymptomAnalysisRecord:
        return SymptomAnalysisRecord(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            primary_symptom=row["primary_symptom"] or "",
            duration=row["duration"] or "",
            severity=row["severity"] or "",
            additional_symptoms=list(row["additional_symptoms"] or []),
            description=row["description"] or "",
            medications_context=row["medications_context"],
            allergies_context=row["allergies_context"],
            medical_history_context=row["medical_history_context"],
            analysis_result=row["analysis_result"],
            confidence_score=row["confidence_score"],
            created_at=row["created_at"],
        )
