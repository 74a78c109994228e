"""Shared test fixtures: in-memory fakes for storage, dictionary and LLM."""

from __future__ import annotations

import json
from collections.abc import Iterator

import pytest

from transcript_cleaner.config import StoragePathsConfig
from transcript_cleaner.domain import (
    PhraseDictionaryEntry,
    PhraseReplacer,
    ThrottleRetryPolicy,
)
from transcript_cleaner.exceptions import BlobNotFoundError
from transcript_cleaner.handlers import SessionTextHandler
from transcript_cleaner.infrastructure.interfaces import (
    PhraseDictionarySource,
    StorageClient,
    TextGenerationService,
)
from transcript_cleaner.repositories import SessionDocumentRepository

BUCKET = "test-bucket"


def delta(text: str) -> bytes:
    return json.dumps(
        {"type": "content_block_delta", "index": 0, "delta": {"type": "text_delta", "text": text}}
    ).encode("utf-8")


def event(event_type: str) -> bytes:
    return json.dumps({"type": event_type}).encode("utf-8")


class FakeStorage(StorageClient):
    """Dict-backed blob store."""

    def __init__(self) -> None:
        self.objects: dict[tuple[str, str], bytes] = {}
        self.uploads: list[tuple[str, str, str]] = []

    def put_json(self, object_name: str, document: object) -> None:
        self.objects[(BUCKET, object_name)] = json.dumps(document).encode("utf-8")

    def get_json(self, object_name: str) -> object:
        return json.loads(self.objects[(BUCKET, object_name)])

    def download(self, bucket_name: str, object_name: str) -> bytes:
        try:
            return self.objects[(bucket_name, object_name)]
        except KeyError:
            raise BlobNotFoundError(bucket_name, object_name) from None

    def upload(self, bucket_name: str, object_name: str, data: bytes, content_type: str) -> None:
        self.objects[(bucket_name, object_name)] = data
        self.uploads.append((bucket_name, object_name, content_type))

    def ensure_bucket_exists(self, bucket_name: str) -> None:
        pass


class FakeDictionary(PhraseDictionarySource):
    def __init__(self, entries: list[PhraseDictionaryEntry] | None = None) -> None:
        self.entries = entries or []
        self.scans = 0

    def scan_all(self) -> list[PhraseDictionaryEntry]:
        self.scans += 1
        return list(self.entries)


class FakeGenerator(TextGenerationService):
    """Scripted stream: raises queued failures first, then streams the fragments."""

    def __init__(self, fragments: list[bytes] | None = None, failures: list[Exception] | None = None) -> None:
        self.fragments = fragments or []
        self.failures = list(failures or [])
        self.calls: list[tuple[str, str]] = []

    @classmethod
    def from_deltas(cls, *texts: str, failures: list[Exception] | None = None) -> FakeGenerator:
        fragments = [event("message_start"), *(delta(t) for t in texts), event("message_stop")]
        return cls(fragments, failures)

    def open_stream(self, system_prompt: str, content: str) -> Iterator[bytes]:
        self.calls.append((system_prompt, content))
        if self.failures:
            raise self.failures.pop(0)
        return iter(self.fragments)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def documents(storage: FakeStorage) -> SessionDocumentRepository:
    return SessionDocumentRepository(storage, BUCKET, StoragePathsConfig())


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def retry_policy(sleeps: list[float]) -> ThrottleRetryPolicy:
    return ThrottleRetryPolicy(max_attempts=3, backoff_seconds=2.0, sleep=sleeps.append)


@pytest.fixture
def make_handler(documents: SessionDocumentRepository, retry_policy: ThrottleRetryPolicy):
    def _make(
        generator: FakeGenerator,
        dictionary: FakeDictionary | None = None,
        replacer: PhraseReplacer | None = None,
    ) -> SessionTextHandler:
        return SessionTextHandler(
            documents=documents,
            dictionary=dictionary or FakeDictionary(),
            generator=generator,
            replacer=replacer or PhraseReplacer(),
            retry_policy=retry_policy,
            summary_prompt="Summarize the medical conversation.",
        )

    return _make
