"""Domain layer exports."""

from transcript_cleaner.domain.models import (
    AnnotationResult,
    CleanedText,
    OverlapPolicy,
    PhraseDictionaryEntry,
    ProgressUpdate,
    ReplacementRecord,
    SessionSummary,
    extract_transcript_content,
)
from transcript_cleaner.domain.phrase_replacer import PhraseReplacer, build_replacement_map
from transcript_cleaner.domain.retry_policy import ThrottleRetryPolicy
from transcript_cleaner.domain.stream_accumulator import StreamAccumulator

__all__ = [
    "AnnotationResult",
    "CleanedText",
    "OverlapPolicy",
    "PhraseDictionaryEntry",
    "ProgressUpdate",
    "ReplacementRecord",
    "SessionSummary",
    "extract_transcript_content",
    "PhraseReplacer",
    "build_replacement_map",
    "ThrottleRetryPolicy",
    "StreamAccumulator",
]
