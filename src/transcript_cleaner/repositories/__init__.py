from transcript_cleaner.repositories.phrase_dictionary_repository import (
    PhraseDictionaryRepository,
)
from transcript_cleaner.repositories.session_document_repository import (
    SessionDocumentRepository,
)

__all__ = [
    "PhraseDictionaryRepository",
    "SessionDocumentRepository",
]
