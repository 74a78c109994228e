"""Gemini streaming text-generation implementation."""

import json
from collections.abc import Iterator

from google import genai
from google.genai import errors as genai_errors

from transcript_cleaner.exceptions import LLMServiceError, ThrottlingError
from transcript_cleaner.infrastructure.interfaces import TextGenerationService
from transcript_cleaner.logging import setup_logging

logger = setup_logging()

RATE_LIMIT_STATUS = 429


def encode_event(event_type: str, **fields) -> bytes:
    """Encodes one stream event envelope as UTF-8 JSON."""
    return json.dumps({"type": event_type, **fields}, ensure_ascii=False).encode("utf-8")


class GeminiTextGenerator(TextGenerationService):
    """
    Streams generations from Google Gemini.

    Gemini response chunks are re-encoded as event envelopes:
    `message_start`, one `content_block_delta` per non-empty chunk, then
    `message_stop`.
    """

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        max_output_tokens: int = 3000,
        temperature: float = 0.0,
    ):
        self._client = client
        self._model_name = model_name
        self._max_output_tokens = max_output_tokens
        self._temperature = temperature

    def open_stream(self, system_prompt: str, content: str) -> Iterator[bytes]:
        """
        Starts a Gemini streamed generation.

        The first response chunk is fetched before returning so that rate
        limiting is reported to the caller at stream initiation.

        Raises:
            ThrottlingError: If Gemini answers with HTTP 429.
            LLMServiceError: If the Gemini API call fails.
        """
        try:
            responses = self._client.models.generate_content_stream(
                model=self._model_name,
                contents=content,
                config={
                    "system_instruction": system_prompt,
                    "temperature": self._temperature,
                    "max_output_tokens": self._max_output_tokens,
                },
            )
            first = next(responses, None)
        except Exception as e:
            raise self._translate_error(e) from e

        logger.info("Generation stream opened", extra={"model": self._model_name})
        return self._events(first, responses)

    def _events(self, first, responses) -> Iterator[bytes]:
        yield encode_event("message_start", model=self._model_name)
        if first is not None and first.text:
            yield encode_event("content_block_delta", delta={"type": "text_delta", "text": first.text})

        try:
            for response in responses:
                if response.text:
                    yield encode_event(
                        "content_block_delta",
                        delta={"type": "text_delta", "text": response.text},
                    )
        except Exception as e:
            raise self._translate_error(e) from e

        yield encode_event("message_stop")
        logger.info("Generation stream completed", extra={"model": self._model_name})

    def _translate_error(self, error: Exception) -> LLMServiceError:
        if isinstance(error, genai_errors.APIError) and error.code == RATE_LIMIT_STATUS:
            logger.warning("Gemini rate limit hit", extra={"model": self._model_name})
            return ThrottlingError(f"Gemini throttled the request: {error}", cause=error)
        logger.exception("Gemini API call failed", extra={"model": self._model_name})
        return LLMServiceError(f"Gemini generation failed: {error}", cause=error)
