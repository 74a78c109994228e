"""Abstract interface for reading the phrase dictionary."""

from abc import ABC, abstractmethod

from transcript_cleaner.domain.models import PhraseDictionaryEntry


class PhraseDictionarySource(ABC):
    """Abstract base class for phrase dictionary stores."""

    @abstractmethod
    def scan_all(self) -> list[PhraseDictionaryEntry]:
        """
        Reads every entry of the phrase dictionary.

        Returns:
            All dictionary entries, in storage order.

        Raises:
            DictionaryLoadError: If the dictionary cannot be read.
        """
        pass
