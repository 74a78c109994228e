"""Infrastructure interface exports."""

from transcript_cleaner.infrastructure.interfaces.phrase_dictionary_source import (
    PhraseDictionarySource,
)
from transcript_cleaner.infrastructure.interfaces.storage_client import StorageClient
from transcript_cleaner.infrastructure.interfaces.text_generation_service import (
    TextGenerationService,
)

__all__ = [
    "PhraseDictionarySource",
    "StorageClient",
    "TextGenerationService",
]
