from transcript_cleaner.config import AppConfig, load_config
from transcript_cleaner.domain import PhraseReplacer, StreamAccumulator, ThrottleRetryPolicy
from transcript_cleaner.exceptions import (
    BlobNotFoundError,
    InvalidSessionIdError,
    SessionProcessingError,
    StreamDecodeError,
    ThrottledExhaustedError,
    ThrottlingError,
)
from transcript_cleaner.handlers import SessionTextHandler
from transcript_cleaner.logging import setup_logging

__all__ = [
    "setup_logging",
    "AppConfig",
    "load_config",
    "PhraseReplacer",
    "StreamAccumulator",
    "ThrottleRetryPolicy",
    "SessionTextHandler",
    "BlobNotFoundError",
    "InvalidSessionIdError",
    "SessionProcessingError",
    "StreamDecodeError",
    "ThrottledExhaustedError",
    "ThrottlingError",
]
