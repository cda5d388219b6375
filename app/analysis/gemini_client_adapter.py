from typing import Any

import httpx

from app.analysis.client_base import BaseCompletionClient
from app.analysis.exceptions import CompletionError, CompletionNetworkError

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class GeminiClientAdapter(BaseCompletionClient):
    """Completion client for the Gemini ``generateContent`` REST endpoint."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str = DEFAULT_BASE_URL,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
        )

    def generate(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        _ = json_schema  # the prompt already embeds the schema
        payload: dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "responseMimeType": "application/json",
            },
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}

        try:
            response = self._client.post(
                f"/models/{model}:generateContent",
                json=payload,
                headers={"x-goog-api-key": self._api_key},
            )
        except httpx.HTTPError as exc:
            raise CompletionNetworkError(
                f"Completion service network error: {exc}"
            ) from exc

        if response.is_error:
            raise CompletionNetworkError(
                f"Completion service API error {response.status_code}: {response.text[:500]}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise CompletionError(f"Completion service returned invalid JSON: {exc}") from exc

        text = self._extract_text(data)
        if not text:
            raise CompletionError("Completion service returned empty response")
        return text

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _extract_text(data: Any) -> str:
        """Join the text parts of the first candidate; empty if the shape is unexpected."""
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        first = candidates[0]
        content = first.get("content") if isinstance(first, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        return "".join(texts).strip()
