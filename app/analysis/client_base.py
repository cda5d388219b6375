from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific completion service clients."""

    @abstractmethod
    def generate(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider's reply text.

        Raises:
            CompletionNetworkError: on transport failure or a non-success status.
            CompletionError: when the reply envelope carries no text.
        """

    def close(self) -> None:
        """Release pooled connections. Clients without any keep the no-op."""
