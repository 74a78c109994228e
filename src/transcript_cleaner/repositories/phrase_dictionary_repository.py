"""Repository for the medical phrase dictionary."""

from sqlmodel import select

from transcript_cleaner.db_models import MedicalPhrase
from transcript_cleaner.domain.models import PhraseDictionaryEntry
from transcript_cleaner.exceptions import DictionaryLoadError
from transcript_cleaner.infrastructure.interfaces import PhraseDictionarySource
from transcript_cleaner.logging import setup_logging

logger = setup_logging()


class PhraseDictionaryRepository(PhraseDictionarySource):
    """
    Reads the phrase dictionary table.

    The table is scanned in id order, one batch per query, so large
    dictionaries never require a single unbounded result set.
    """

    def __init__(self, session_factory, batch_size: int = 500):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
            batch_size: Number of rows fetched per query.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._session_factory = session_factory
        self._batch_size = batch_size

    def scan_all(self) -> list[PhraseDictionaryEntry]:
        """
        Reads every dictionary entry.

        Returns:
            All entries in id order.

        Raises:
            DictionaryLoadError: If the query fails.
        """
        table_name = MedicalPhrase.__tablename__
        entries: list[PhraseDictionaryEntry] = []
        try:
            with self._session_factory() as db_session:
                offset = 0
                while True:
                    statement = (
                        select(MedicalPhrase)
                        .order_by(MedicalPhrase.id)
                        .offset(offset)
                        .limit(self._batch_size)
                    )
                    rows = db_session.exec(statement).all()
                    entries.extend(
                        PhraseDictionaryEntry(phrase=row.phrase, display_as=row.display_as)
                        for row in rows
                    )
                    if len(rows) < self._batch_size:
                        break
                    offset += self._batch_size
        except Exception as e:
            logger.exception("Failed to load phrase dictionary", extra={"table": table_name})
            raise DictionaryLoadError(table_name, cause=e) from e

        logger.info("Phrase dictionary loaded", extra={"entries": len(entries)})
        return entries
