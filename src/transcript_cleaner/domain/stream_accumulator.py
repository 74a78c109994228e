"""Incremental assembly of a streamed text-generation response."""

import json
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from transcript_cleaner.exceptions import StreamDecodeError

CONTENT_BLOCK_DELTA = "content_block_delta"


def decode_envelope(fragment: bytes | str) -> dict[str, Any]:
    """
    Decodes one streamed fragment into its event envelope.

    Raises:
        StreamDecodeError: If the fragment is not UTF-8 encoded JSON object.
    """
    try:
        text = fragment.decode("utf-8") if isinstance(fragment, (bytes, bytearray)) else fragment
        envelope = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError) as e:
        raise StreamDecodeError(f"malformed chunk: {e}", cause=e) from e

    if not isinstance(envelope, dict):
        raise StreamDecodeError(f"chunk is not an event object: {envelope!r}")
    return envelope


def delta_text(envelope: dict[str, Any]) -> str | None:
    """
    Returns the text carried by a content delta envelope, or None for other kinds.

    Raises:
        StreamDecodeError: If a delta envelope carries no text.
    """
    if envelope.get("type") != CONTENT_BLOCK_DELTA:
        return None

    delta = envelope.get("delta")
    text = delta.get("text") if isinstance(delta, dict) else None
    if not isinstance(text, str):
        raise StreamDecodeError("content_block_delta without delta.text")
    return text


class StreamAccumulator:
    """
    Accumulates delta text from one streamed response.

    The accumulated text only ever grows, one delta at a time in arrival
    order, and is frozen once the stream completes.
    """

    def __init__(self):
        self._text = ""
        self._completed = False

    @property
    def text(self) -> str:
        return self._text

    @property
    def completed(self) -> bool:
        return self._completed

    def feed(self, fragment: bytes | str) -> str | None:
        """
        Consumes one fragment.

        Returns:
            The accumulated text if the fragment carried a delta, otherwise None.
        """
        if self._completed:
            raise RuntimeError("Cannot feed a completed stream")

        text = delta_text(decode_envelope(fragment))
        if text is None:
            return None

        self._text += text
        return self._text

    def complete(self) -> str:
        """Marks the stream as finished and returns the final text."""
        self._completed = True
        return self._text

    def iter_snapshots(self, chunks: Iterable[bytes | str]) -> Iterator[str]:
        """
        Yields the accumulated text after every delta fragment.

        Each snapshot is a prefix of every later snapshot. The accumulator is
        completed once the chunks are exhausted.
        """
        for fragment in chunks:
            snapshot = self.feed(fragment)
            if snapshot is not None:
                yield snapshot
        self.complete()

    def run(
        self,
        chunks: Iterable[bytes | str],
        on_progress: Callable[[str], None] | None = None,
    ) -> str:
        """
        Consumes all chunks, invoking on_progress after each delta.

        Returns:
            The final accumulated text.
        """
        for snapshot in self.iter_snapshots(chunks):
            if on_progress:
                on_progress(snapshot)
        return self._text
