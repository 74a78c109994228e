"""Infrastructure layer exports."""

from transcript_cleaner.infrastructure.gemini_text_generator import GeminiTextGenerator
from transcript_cleaner.infrastructure.minio_storage import MinioStorageClient

__all__ = [
    "GeminiTextGenerator",
    "MinioStorageClient",
]
