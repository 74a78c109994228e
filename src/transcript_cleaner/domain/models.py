"""Domain models for transcript cleaning and summarization."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from transcript_cleaner.exceptions import InvalidTranscriptFormatError


def utc_timestamp() -> str:
    """Returns the current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class OverlapPolicy(str, Enum):
    """How replacement candidates that cover the same text are resolved."""

    KEEP_ALL = "keep_all"
    LONGEST_FIRST = "longest_first"


class PhraseDictionaryEntry(BaseModel, frozen=True):
    """A dictionary phrase and the display form that replaces it."""

    phrase: str | None = None
    display_as: str | None = None


class ReplacementRecord(BaseModel, frozen=True):
    """
    A single phrase replacement.

    Offsets are half-open and index into the original input text,
    so `original == text[start:end]` always holds.
    """

    start: int = Field(ge=0)
    end: int
    original: str
    replacement: str

    @model_validator(mode="after")
    def _check_span(self) -> "ReplacementRecord":
        if self.end <= self.start:
            raise ValueError("end must be greater than start")
        return self


class AnnotationResult(BaseModel, frozen=True):
    """Annotated HTML and the replacements applied to produce it."""

    html: str
    replacements: list[ReplacementRecord]


class CleanedText(BaseModel):
    """Persisted result of a cleaning run."""

    html: str
    raw: str
    replacements: list[ReplacementRecord]
    timestamp: str = Field(default_factory=utc_timestamp)


class SessionSummary(BaseModel):
    """Persisted result of a summarization run."""

    model_config = ConfigDict(populate_by_name=True)

    session_id: str = Field(alias="sessionId")
    timestamp: str = Field(default_factory=utc_timestamp)
    summary: str
    original_text: str = Field(alias="originalText")


class ProgressUpdate(BaseModel, frozen=True):
    """A snapshot of the text produced so far for a session."""

    text: str
    final: bool = False


def extract_transcript_content(document: Any, object_name: str) -> str:
    """
    Extracts the transcript text from a stored transcription document.

    Two layouts are supported: batch transcription output
    (`results.transcripts[0].transcript`) and real-time transcription
    output (`content`).

    Args:
        document: The parsed JSON document.
        object_name: The object path, used for error reporting.

    Returns:
        The transcript text, possibly empty.

    Raises:
        InvalidTranscriptFormatError: If neither layout is present, or the
            transcript text is not a string.
    """
    if not isinstance(document, dict):
        raise InvalidTranscriptFormatError(object_name, "document is not a JSON object")

    results = document.get("results")
    transcripts = results.get("transcripts") if isinstance(results, dict) else None
    # Any present container counts, even an empty one or a non-list.
    if isinstance(transcripts, (list, dict)) or transcripts:
        first = transcripts[0] if isinstance(transcripts, list) and transcripts else None
        transcript = first.get("transcript") if isinstance(first, dict) else None
        return _require_text(transcript, object_name, "transcript")

    content = document.get("content")
    if content:
        return _require_text(content, object_name, "content")

    raise InvalidTranscriptFormatError(
        object_name, "expected 'results.transcripts' or 'content'"
    )


def _require_text(value: Any, object_name: str, field: str) -> str:
    if not value:
        return ""
    if not isinstance(value, str):
        raise InvalidTranscriptFormatError(object_name, f"'{field}' is not a string")
    return value
