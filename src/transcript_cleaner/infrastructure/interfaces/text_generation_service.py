"""Abstract interface for streaming text generation."""

from abc import ABC, abstractmethod
from collections.abc import Iterator


class TextGenerationService(ABC):
    """Abstract base class for streaming LLM backends."""

    @abstractmethod
    def open_stream(self, system_prompt: str, content: str) -> Iterator[bytes]:
        """
        Starts a streamed generation.

        The request is sent before this method returns, so rate limiting
        surfaces here rather than while the stream is consumed.

        Args:
            system_prompt: Instructions for the model.
            content: The user message.

        Returns:
            An iterator of UTF-8 encoded JSON event envelopes. Text arrives in
            `content_block_delta` envelopes under `delta.text`.

        Raises:
            ThrottlingError: If the service is rate limiting the caller.
            LLMServiceError: If the call fails for any other reason.
        """
        pass
