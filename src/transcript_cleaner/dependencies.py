"""Dependency injection configuration for the transcript-cleaner service."""

from contextlib import contextmanager
from pathlib import Path

from google import genai
from minio import Minio
from sqlmodel import Session, SQLModel, create_engine

from transcript_cleaner.config import AppConfig
from transcript_cleaner.domain import OverlapPolicy, PhraseReplacer, ThrottleRetryPolicy
from transcript_cleaner.handlers import SessionTextHandler
from transcript_cleaner.infrastructure import GeminiTextGenerator, MinioStorageClient
from transcript_cleaner.logging import setup_logging
from transcript_cleaner.repositories import (
    PhraseDictionaryRepository,
    SessionDocumentRepository,
)

logger = setup_logging()


def build_handler(config: AppConfig) -> SessionTextHandler:
    """Wires every component from a single configuration object."""
    # MinIO storage
    minio_client = Minio(
        endpoint=config.minio.endpoint,
        access_key=config.minio.user,
        secret_key=config.minio.password,
        secure=config.minio.secure,
    )
    storage = MinioStorageClient(minio_client)
    storage.ensure_bucket_exists(config.minio.bucket_name)
    documents = SessionDocumentRepository(storage, config.minio.bucket_name, config.paths)

    # PostgreSQL phrase dictionary
    db_engine = create_engine(config.postgres.url)
    SQLModel.metadata.create_all(db_engine)
    logger.info("Database initialized", extra={"host": config.postgres.host})

    @contextmanager
    def session_factory():
        with Session(db_engine) as session:
            yield session

    dictionary = PhraseDictionaryRepository(
        session_factory, batch_size=config.postgres.dictionary_batch_size
    )

    # Gemini text generation
    gemini_client = genai.Client(api_key=config.gemini.api_key)
    generator = GeminiTextGenerator(
        gemini_client,
        config.gemini.model_name,
        max_output_tokens=config.gemini.max_output_tokens,
        temperature=config.gemini.temperature,
    )
    summary_prompt_path = Path(__file__).parent / config.gemini.summary_prompt_path
    summary_prompt = summary_prompt_path.read_text(encoding="utf-8")

    replacer = PhraseReplacer(
        overlap_policy=OverlapPolicy(config.replacement.overlap_policy),
        highlight_style=config.replacement.highlight_style,
    )
    retry_policy = ThrottleRetryPolicy(
        max_attempts=config.retry.max_attempts,
        backoff_seconds=config.retry.backoff_seconds,
    )

    return SessionTextHandler(
        documents=documents,
        dictionary=dictionary,
        generator=generator,
        replacer=replacer,
        retry_policy=retry_policy,
        summary_prompt=summary_prompt,
    )
