"""Handler for cleaning and summarizing transcript sessions."""

from collections.abc import Callable, Iterator
from concurrent.futures import ThreadPoolExecutor

from transcript_cleaner.domain import (
    CleanedText,
    PhraseReplacer,
    ProgressUpdate,
    SessionSummary,
    StreamAccumulator,
    ThrottleRetryPolicy,
    build_replacement_map,
)
from transcript_cleaner.exceptions import (
    BlobNotFoundError,
    EmptyContentError,
    InvalidSessionIdError,
    SessionProcessingError,
)
from transcript_cleaner.infrastructure.interfaces import (
    PhraseDictionarySource,
    TextGenerationService,
)
from transcript_cleaner.logging import setup_logging
from transcript_cleaner.repositories import SessionDocumentRepository

logger = setup_logging()

SUMMARY_REQUEST_TEMPLATE = (
    "Please provide a clear, structured summary of this medical conversation: \n\n{text}"
)

ProgressCallback = Callable[[str], None]


class SessionTextHandler:
    """Cleans and summarizes session transcripts with a streaming LLM."""

    def __init__(
        self,
        documents: SessionDocumentRepository,
        dictionary: PhraseDictionarySource,
        generator: TextGenerationService,
        replacer: PhraseReplacer,
        retry_policy: ThrottleRetryPolicy,
        summary_prompt: str,
    ):
        self._documents = documents
        self._dictionary = dictionary
        self._generator = generator
        self._replacer = replacer
        self._retry = retry_policy
        self._summary_prompt = summary_prompt

    def iter_clean_session(self, session_id: str) -> Iterator[ProgressUpdate]:
        """
        Cleans a session transcript, yielding progress as it streams.

        Yields one update per generated delta with the raw text so far, then
        a final update with the annotated HTML that was persisted.

        Raises:
            InvalidSessionIdError: If session_id is blank.
            SessionProcessingError: If any step fails.
        """
        _require_session_id(session_id)
        logger.info("Cleaning session", extra={"session_id": session_id})

        try:
            instructions, transcript = self._fetch_concurrently(
                self._documents.get_instructions,
                lambda: self._documents.get_transcript_content(session_id),
            )
            if not transcript:
                raise EmptyContentError(session_id, "transcription")

            chunks = self._retry.invoke(
                lambda: self._generator.open_stream(instructions, transcript)
            )
            accumulator = StreamAccumulator()
            for snapshot in accumulator.iter_snapshots(chunks):
                yield ProgressUpdate(text=snapshot)
            raw_text = accumulator.text

            logger.info(
                "Cleaning completed, applying phrase replacements",
                extra={"session_id": session_id, "characters": len(raw_text)},
            )
            replacement_map = build_replacement_map(self._dictionary.scan_all())
            annotated = self._replacer.annotate(raw_text, replacement_map)

            self._documents.save_cleaned_text(
                session_id,
                CleanedText(
                    html=annotated.html,
                    raw=raw_text,
                    replacements=annotated.replacements,
                ),
            )
        except Exception as e:
            logger.exception("Session cleaning failed", extra={"session_id": session_id})
            raise SessionProcessingError(session_id, "clean", cause=e) from e

        logger.info("Session cleaned", extra={"session_id": session_id})
        yield ProgressUpdate(text=annotated.html, final=True)

    def iter_summarize_session(self, session_id: str) -> Iterator[ProgressUpdate]:
        """
        Summarizes a session, yielding progress as it streams.

        The cleaned text is summarized when available, otherwise the original
        transcription. The last update is marked final and carries the
        persisted summary.

        Raises:
            InvalidSessionIdError: If session_id is blank.
            SessionProcessingError: If any step fails.
        """
        _require_session_id(session_id)
        logger.info("Summarizing session", extra={"session_id": session_id})

        try:
            text = self._load_text_to_summarize(session_id)
            request = SUMMARY_REQUEST_TEMPLATE.format(text=text)

            chunks = self._retry.invoke(
                lambda: self._generator.open_stream(self._summary_prompt, request)
            )
            accumulator = StreamAccumulator()
            for snapshot in accumulator.iter_snapshots(chunks):
                yield ProgressUpdate(text=snapshot)

            summary = SessionSummary(
                session_id=session_id,
                summary=accumulator.text,
                original_text=text,
            )
            self._documents.save_summary(summary)
        except Exception as e:
            logger.exception("Session summary failed", extra={"session_id": session_id})
            raise SessionProcessingError(session_id, "summarize", cause=e) from e

        logger.info("Session summarized", extra={"session_id": session_id})
        yield ProgressUpdate(text=summary.summary, final=True)

    def clean_session(
        self, session_id: str, on_progress: ProgressCallback | None = None
    ) -> str:
        """Cleans a session and returns the annotated HTML."""
        return _drain(self.iter_clean_session(session_id), on_progress)

    def summarize_session(
        self, session_id: str, on_progress: ProgressCallback | None = None
    ) -> str:
        """Summarizes a session and returns the summary text."""
        return _drain(self.iter_summarize_session(session_id), on_progress)

    def _load_text_to_summarize(self, session_id: str) -> str:
        try:
            cleaned = self._documents.get_cleaned_text(session_id)
            text = cleaned.raw or cleaned.html
        except BlobNotFoundError:
            logger.info(
                "Cleaned text not found, falling back to original transcription",
                extra={"session_id": session_id},
            )
            text = self._documents.get_transcript_content(session_id)

        if not text:
            raise EmptyContentError(session_id, "text")
        return text

    @staticmethod
    def _fetch_concurrently(*loaders: Callable[[], str]) -> list[str]:
        with ThreadPoolExecutor(max_workers=len(loaders)) as executor:
            futures = [executor.submit(loader) for loader in loaders]
            return [future.result() for future in futures]


def _require_session_id(session_id: str | None) -> None:
    if not session_id or not session_id.strip():
        raise InvalidSessionIdError(session_id)


def _drain(updates: Iterator[ProgressUpdate], on_progress: ProgressCallback | None) -> str:
    result = ""
    for update in updates:
        if on_progress:
            on_progress(update.text)
        result = update.text
    return result
