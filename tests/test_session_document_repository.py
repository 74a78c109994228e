"""Tests for transcript_cleaner.repositories.session_document_repository."""

from __future__ import annotations

import pytest

from conftest import BUCKET, FakeStorage
from transcript_cleaner.config import StoragePathsConfig
from transcript_cleaner.domain import CleanedText, ReplacementRecord
from transcript_cleaner.exceptions import BlobNotFoundError, InvalidTranscriptFormatError
from transcript_cleaner.repositories import SessionDocumentRepository


class TestKeys:
    def test_default_layout(self, documents: SessionDocumentRepository) -> None:
        assert documents.transcription_key("abc") == "transcriptions/abc.json"
        assert documents.cleaned_text_key("abc") == "clean-texts/abc.json"
        assert documents.summary_key("abc") == "ai-summaries/abc.json"

    def test_custom_prefixes(self, storage: FakeStorage) -> None:
        paths = StoragePathsConfig(transcriptions_prefix="raw/", clean_texts_prefix="clean/")
        repository = SessionDocumentRepository(storage, BUCKET, paths)
        assert repository.transcription_key("abc") == "raw/abc.json"
        assert repository.cleaned_text_key("abc") == "clean/abc.json"


class TestReads:
    def test_instructions_are_stripped(self, documents: SessionDocumentRepository, storage: FakeStorage) -> None:
        storage.objects[(BUCKET, "_config/ai-instructions.txt")] = "\n נקה את הטקסט \n".encode("utf-8")
        assert documents.get_instructions() == "נקה את הטקסט"

    def test_transcript_content(self, documents: SessionDocumentRepository, storage: FakeStorage) -> None:
        storage.put_json("transcriptions/s1.json", {"content": "hello"})
        assert documents.get_transcript_content("s1") == "hello"

    def test_transcript_with_invalid_json(self, documents: SessionDocumentRepository, storage: FakeStorage) -> None:
        storage.objects[(BUCKET, "transcriptions/s1.json")] = b"{broken"
        with pytest.raises(InvalidTranscriptFormatError):
            documents.get_transcript_content("s1")

    def test_missing_cleaned_text(self, documents: SessionDocumentRepository) -> None:
        with pytest.raises(BlobNotFoundError):
            documents.get_cleaned_text("s1")

    def test_malformed_cleaned_text(self, documents: SessionDocumentRepository, storage: FakeStorage) -> None:
        storage.put_json("clean-texts/s1.json", {"html": "only html"})
        with pytest.raises(InvalidTranscriptFormatError):
            documents.get_cleaned_text("s1")


class TestWrites:
    def test_cleaned_text_round_trips(self, documents: SessionDocumentRepository) -> None:
        cleaned = CleanedText(
            html="<span>Blood Pressure</span>",
            raw="bp",
            replacements=[ReplacementRecord(start=0, end=2, original="bp", replacement="Blood Pressure")],
        )
        documents.save_cleaned_text("s1", cleaned)
        assert documents.get_cleaned_text("s1") == cleaned

    def test_cleaned_text_is_overwritten(self, documents: SessionDocumentRepository, storage: FakeStorage) -> None:
        documents.save_cleaned_text("s1", CleanedText(html="one", raw="one", replacements=[]))
        documents.save_cleaned_text("s1", CleanedText(html="two", raw="two", replacements=[]))
        assert storage.get_json("clean-texts/s1.json")["raw"] == "two"
        assert len(storage.uploads) == 2
