"""Tests for prompt template and JSON schema loading."""

import json
from pathlib import Path

import pytest

from app.analysis.exceptions import PromptTemplateError
from app.analysis.prompt_loader import load_json_schema, load_prompt_template


class TestLoadPromptTemplate:
    @pytest.mark.parametrize(
        "placeholder",
        [
            "{primary_symptom}",
            "{duration}",
            "{severity}",
            "{additional_symptoms}",
            "{description}",
            "{medications_context}",
            "{allergies_context}",
            "{medical_history_context}",
            "{json_schema}",
        ],
    )
    def test_default_template_has_placeholder(self, placeholder: str) -> None:
        assert placeholder in load_prompt_template()

    def test_loads_custom_template(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.txt"
        custom.write_text("Hello {primary_symptom}")
        assert load_prompt_template(custom) == "Hello {primary_symptom}"

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(PromptTemplateError, match="Failed to load prompt"):
            load_prompt_template(Path("/nonexistent/file.txt"))


class TestLoadJsonSchema:
    def test_default_schema_describes_result(self) -> None:
        schema = json.loads(load_json_schema())
        assert schema["required"] == [
            "confidence",
            "possibleConditions",
            "recommendations",
            "medications",
            "redFlags",
        ]

    def test_loads_custom_schema(self, tmp_path: Path) -> None:
        custom = tmp_path / "schema.json"
        custom.write_text('{"type": "object"}')
        assert load_json_schema(custom) == '{"type": "object"}'

    def test_missing_file_raises_error(self) -> None:
        with pytest.raises(PromptTemplateError, match="Failed to load JSON schema"):
            load_json_schema(Path("/nonexistent/schema.json"))
