"""Repository for per-session documents kept in blob storage."""

import json

from pydantic import ValidationError

from transcript_cleaner.config import StoragePathsConfig
from transcript_cleaner.domain.models import (
    CleanedText,
    SessionSummary,
    extract_transcript_content,
)
from transcript_cleaner.exceptions import InvalidTranscriptFormatError
from transcript_cleaner.infrastructure.interfaces import StorageClient
from transcript_cleaner.logging import setup_logging

logger = setup_logging()

JSON_CONTENT_TYPE = "application/json"


class SessionDocumentRepository:
    """
    Reads and writes the documents belonging to a transcript session.

    Keeps object key layout and JSON (de)serialization out of the handler.
    """

    def __init__(self, storage: StorageClient, bucket_name: str, paths: StoragePathsConfig):
        self._storage = storage
        self._bucket_name = bucket_name
        self._paths = paths

    def transcription_key(self, session_id: str) -> str:
        return f"{self._paths.transcriptions_prefix}{session_id}.json"

    def cleaned_text_key(self, session_id: str) -> str:
        return f"{self._paths.clean_texts_prefix}{session_id}.json"

    def summary_key(self, session_id: str) -> str:
        return f"{self._paths.summaries_prefix}{session_id}.json"

    def get_instructions(self) -> str:
        """
        Reads the cleaning instructions.

        Raises:
            BlobNotFoundError: If no instructions are stored.
            StorageDownloadError: If the download fails.
        """
        data = self._storage.download(self._bucket_name, self._paths.instructions_key)
        return data.decode("utf-8").strip()

    def get_transcript_content(self, session_id: str) -> str:
        """
        Reads the transcript text of a session.

        Raises:
            BlobNotFoundError: If the transcription does not exist.
            InvalidTranscriptFormatError: If the document is not valid JSON or
                has no known content layout.
        """
        object_name = self.transcription_key(session_id)
        data = self._storage.download(self._bucket_name, object_name)
        try:
            document = json.loads(data)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise InvalidTranscriptFormatError(object_name, f"invalid JSON: {e}") from e

        content = extract_transcript_content(document, object_name)
        logger.info(
            "Transcript loaded",
            extra={"session_id": session_id, "characters": len(content)},
        )
        return content

    def get_cleaned_text(self, session_id: str) -> CleanedText:
        """
        Reads the cleaned text stored by the last cleaning run.

        Raises:
            BlobNotFoundError: If the session was never cleaned.
            InvalidTranscriptFormatError: If the stored document is malformed.
        """
        object_name = self.cleaned_text_key(session_id)
        data = self._storage.download(self._bucket_name, object_name)
        try:
            return CleanedText.model_validate_json(data)
        except ValidationError as e:
            raise InvalidTranscriptFormatError(object_name, str(e)) from e

    def save_cleaned_text(self, session_id: str, cleaned: CleanedText) -> None:
        """Stores the cleaned text, replacing any earlier run."""
        object_name = self.cleaned_text_key(session_id)
        self._storage.upload(
            self._bucket_name,
            object_name,
            cleaned.model_dump_json().encode("utf-8"),
            JSON_CONTENT_TYPE,
        )
        logger.info(
            "Cleaned text saved",
            extra={"session_id": session_id, "replacements": len(cleaned.replacements)},
        )

    def save_summary(self, summary: SessionSummary) -> None:
        """Stores a session summary as indented JSON."""
        object_name = self.summary_key(summary.session_id)
        payload = json.dumps(summary.model_dump(by_alias=True), ensure_ascii=False, indent=2)
        self._storage.upload(
            self._bucket_name,
            object_name,
            payload.encode("utf-8"),
            JSON_CONTENT_TYPE,
        )
        logger.info("Summary saved", extra={"session_id": summary.session_id})
