"""Application configuration loaded from environment variables."""

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel


class MinioConfig(BaseModel, frozen=True):
    """MinIO connection configuration."""

    endpoint: str
    user: str
    password: str
    bucket_name: str = "transcripts"
    secure: bool = False


class StoragePathsConfig(BaseModel, frozen=True):
    """Object key layout inside the session bucket."""

    transcriptions_prefix: str = "transcriptions/"
    clean_texts_prefix: str = "clean-texts/"
    summaries_prefix: str = "ai-summaries/"
    instructions_key: str = "_config/ai-instructions.txt"


class GeminiConfig(BaseModel, frozen=True):
    """Gemini text-generation configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"
    max_output_tokens: int = 3000
    temperature: float = 0.0
    summary_prompt_path: Path = Path("prompts/summary.txt")


class PostgresConfig(BaseModel, frozen=True):
    """PostgreSQL connection configuration for the phrase dictionary."""

    host: str
    user: str
    password: str
    port: int
    database: str
    dictionary_batch_size: int = 500

    @property
    def url(self) -> str:
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


class RetryConfig(BaseModel, frozen=True):
    """Backoff settings for throttled text-generation calls."""

    max_attempts: int = 30
    backoff_seconds: float = 2.0


class ReplacementConfig(BaseModel, frozen=True):
    """Phrase replacement settings."""

    overlap_policy: Literal["keep_all", "longest_first"] = "longest_first"
    highlight_style: str = "color: red;"


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    minio: MinioConfig
    paths: StoragePathsConfig = StoragePathsConfig()
    gemini: GeminiConfig
    postgres: PostgresConfig
    retry: RetryConfig = RetryConfig()
    replacement: ReplacementConfig = ReplacementConfig()


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        minio=MinioConfig(
            endpoint=os.getenv("MINIO_ENDPOINT", "minio:9000"),
            user=os.getenv("MINIO_USER", ""),
            password=os.getenv("MINIO_PASSWORD", ""),
            bucket_name=os.getenv("MINIO_BUCKET", "transcripts"),
            secure=os.getenv("MINIO_SECURE", "false").lower() == "true",
        ),
        gemini=GeminiConfig(
            api_key=os.getenv("GEMINI_API_KEY", ""),
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        ),
        postgres=PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "postgres"),
            user=os.getenv("POSTGRES_USER", ""),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            port=int(os.getenv("POSTGRES_PORT", "5432")),
            database=os.getenv("POSTGRES_DB", ""),
            dictionary_batch_size=int(os.getenv("DICTIONARY_BATCH_SIZE", "500")),
        ),
        retry=RetryConfig(
            max_attempts=int(os.getenv("THROTTLE_MAX_ATTEMPTS", "30")),
            backoff_seconds=float(os.getenv("THROTTLE_BACKOFF_SECONDS", "2.0")),
        ),
        replacement=ReplacementConfig(
            overlap_policy=os.getenv("REPLACEMENT_OVERLAP_POLICY", "longest_first"),
            highlight_style=os.getenv("REPLACEMENT_HIGHLIGHT_STYLE", "color: red;"),
        ),
    )
