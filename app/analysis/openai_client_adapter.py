import httpx
import openai

from app.analysis.client_base import BaseCompletionClient
from app.analysis.exceptions import CompletionError, CompletionNetworkError


class OpenAIClientAdapter(BaseCompletionClient):
    """Requests a symptom analysis from an OpenAI-compatible chat endpoint.

    The reply is constrained to the analysis JSON schema, so the JSON tier of
    the normalizer usually accepts it as is. OpenRouter and the other
    compatible providers go through this adapter with their own base URL.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
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
        messages = [{"role": "user", "content": user_prompt}]
        if system_prompt:
            messages.insert(0, {"role": "system", "content": system_prompt})
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "analysis_result",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=messages,  # type: ignore[arg-type]
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise CompletionNetworkError(
                f"Symptom analysis request to {model} failed with a network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise CompletionNetworkError(
                f"Symptom analysis request to {model} was rejected with an API error: {exc}"
            ) from exc

        if not response.choices:
            raise CompletionError(f"Symptom analysis reply from {model} had no choices")
        content = response.choices[0].message.content
        if not content:
            raise CompletionError(f"Symptom analysis reply from {model} was an empty response")
        return content

    def close(self) -> None:
        self._client.close()
