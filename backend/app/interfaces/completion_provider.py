"""
Completion provider interface.

Defines the contract for the external language-model completion API.
"""

from abc import ABC, abstractmethod


class ICompletionProvider(ABC):
    """Abstract interface for completion providers."""

    @abstractmethod
    async def complete(self, messages: list[dict[str, str]]) -> str:
        """
        Generate the next assistant turn for a conversation.

        Args:
            messages: Full conversation as {"role", "content"} dicts, oldest first

        Returns:
            Completion text

        Raises:
            UpstreamError: On network failure, non-2xx status or malformed payload
        """
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        """
        Get the model identifier sent upstream.

        Returns:
            Model name string for logging/display
        """
        pass
