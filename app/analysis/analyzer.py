"""AI-powered symptom analyzer."""

import json
import random
from pathlib import Path

from app.analysis.base import BaseAnalyzer
from app.analysis.client_base import BaseCompletionClient
from app.analysis.defaults import default_analysis
from app.analysis.exceptions import CompletionError
from app.analysis.models import AnalysisOutcome, ResultSource, SymptomInput
from app.analysis.normalizer import normalize_with_source
from app.analysis.prompt_loader import load_json_schema, load_prompt_template
from app.logging.logger import Log

_NOT_PROVIDED = "Not provided"


class SymptomAnalyzer(BaseAnalyzer):
    """Analyzes a symptom submission with one completion call plus normalization."""

    def __init__(
        self,
        *,
        client: BaseCompletionClient,
        model: str,
        temperature: float = 0.4,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(1.0, temperature))
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        schema_str = load_json_schema(json_schema_path)
        self._json_schema = schema_str
        self._json_schema_dict = json.loads(schema_str)
        self._rng = rng

    def analyze(self, symptom_input: SymptomInput) -> AnalysisOutcome:
        prompt = self.build_prompt(symptom_input)
        Log.debug(f"Analysis prompt:\n{prompt}")

        try:
            raw_response = self._call_ai(prompt)
        except CompletionError as exc:
            Log.warning(f"Completion service failed, using default analysis: {exc}")
            return AnalysisOutcome(
                result=default_analysis(symptom_input.primary_symptom),
                source=ResultSource.DEFAULT,
                prompt=prompt,
                raw_response=f"Error: {exc}",
            )
        Log.debug(f"AI raw response:\n{raw_response}")

        result, source = normalize_with_source(raw_response, symptom_input, rng=self._rng)
        return AnalysisOutcome(
            result=result,
            source=source,
            prompt=prompt,
            raw_response=raw_response,
        )

    def build_prompt(self, symptom_input: SymptomInput) -> str:
        return self._prompt_template.format(
            primary_symptom=symptom_input.primary_symptom,
            duration=symptom_input.duration,
            severity=symptom_input.severity,
            additional_symptoms=", ".join(symptom_input.additional_symptoms) or "None",
            description=symptom_input.description or _NOT_PROVIDED,
            medications_context=symptom_input.medications_context or _NOT_PROVIDED,
            allergies_context=symptom_input.allergies_context or _NOT_PROVIDED,
            medical_history_context=symptom_input.medical_history_context or _NOT_PROVIDED,
            json_schema=self._json_schema,
        )

    def close(self) -> None:
        self._client.close()

    def _call_ai(self, prompt: str) -> str:
        return self._client.generate(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=prompt,
            json_schema=self._json_schema_dict,
        )
