"""Custom exceptions for the transcript-cleaner service."""


class InvalidSessionIdError(Exception):
    """Raised when a clean or summarize request carries no session ID."""

    def __init__(self, session_id: str | None):
        self.session_id = session_id
        super().__init__("No session ID provided")


class BlobNotFoundError(Exception):
    """Raised when a requested object does not exist in storage."""

    def __init__(self, bucket_name: str, object_name: str, cause: Exception | None = None):
        self.bucket_name = bucket_name
        self.object_name = object_name
        self.cause = cause
        super().__init__(f"Object '{object_name}' not found in bucket '{bucket_name}'")


class EmptyContentError(Exception):
    """Raised when a session has no text to clean or summarize."""

    def __init__(self, session_id: str, source: str):
        self.session_id = session_id
        self.source = source
        super().__init__(f"No {source} content found for session '{session_id}'")


class InvalidTranscriptFormatError(Exception):
    """Raised when a transcript document has neither known content layout."""

    def __init__(self, object_name: str, reason: str):
        self.object_name = object_name
        self.reason = reason
        super().__init__(f"Invalid transcription format in '{object_name}': {reason}")


class UpstreamError(Exception):
    """Base class for failures propagated from an external collaborator."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.cause = cause
        super().__init__(message)


class StorageDownloadError(UpstreamError):
    """Raised when downloading an object from storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to download '{object_name}'", cause=cause)


class StorageUploadError(UpstreamError):
    """Raised when uploading an object to storage fails."""

    def __init__(self, object_name: str, cause: Exception | None = None):
        self.object_name = object_name
        super().__init__(f"Failed to upload '{object_name}'", cause=cause)


class DictionaryLoadError(UpstreamError):
    """Raised when the phrase dictionary cannot be read."""

    def __init__(self, table_name: str, cause: Exception | None = None):
        self.table_name = table_name
        super().__init__(f"Failed to load phrase dictionary from '{table_name}'", cause=cause)


class LLMServiceError(UpstreamError):
    """Raised when the text-generation service call fails."""


class ThrottlingError(LLMServiceError):
    """Raised when the text-generation service rejects a call due to rate limiting."""


class ThrottledExhaustedError(Exception):
    """Raised when a throttled operation keeps failing past its retry limit."""

    def __init__(self, attempts: int, cause: Exception | None = None):
        self.attempts = attempts
        self.cause = cause
        super().__init__(f"Operation still throttled after {attempts} attempts")


class StreamDecodeError(Exception):
    """Raised when a streamed response fragment cannot be decoded or parsed."""

    def __init__(self, reason: str, cause: Exception | None = None):
        self.reason = reason
        self.cause = cause
        super().__init__(f"Stream processing error: {reason}")


class SessionProcessingError(Exception):
    """Raised when cleaning or summarizing a session fails."""

    def __init__(self, session_id: str, operation: str, cause: Exception | None = None):
        self.session_id = session_id
        self.operation = operation
        self.cause = cause
        message = f"Failed to {operation} session '{session_id}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
