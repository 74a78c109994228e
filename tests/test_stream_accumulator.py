"""Tests for transcript_cleaner.domain.stream_accumulator."""

from __future__ import annotations

import json

import pytest

from conftest import delta, event
from transcript_cleaner.domain import StreamAccumulator
from transcript_cleaner.domain.stream_accumulator import decode_envelope, delta_text
from transcript_cleaner.exceptions import StreamDecodeError


class TestRun:
    def test_progress_is_monotonic(self) -> None:
        progress: list[str] = []
        result = StreamAccumulator().run([delta("a"), delta("b"), delta("c")], progress.append)
        assert progress == ["a", "ab", "abc"]
        assert result == "abc"

    def test_non_delta_envelopes_are_ignored(self) -> None:
        progress: list[str] = []
        chunks = [
            event("message_start"),
            event("content_block_start"),
            delta("Hello"),
            event("ping"),
            delta(", world"),
            event("content_block_stop"),
            event("message_stop"),
        ]
        result = StreamAccumulator().run(chunks, progress.append)
        assert progress == ["Hello", "Hello, world"]
        assert result == "Hello, world"

    def test_without_callback(self) -> None:
        assert StreamAccumulator().run([delta("x"), delta("y")]) == "xy"

    def test_empty_stream(self) -> None:
        accumulator = StreamAccumulator()
        assert accumulator.run([]) == ""
        assert accumulator.completed

    def test_accepts_str_fragments(self) -> None:
        fragment = json.dumps({"type": "content_block_delta", "delta": {"text": "שלום"}})
        assert StreamAccumulator().run([fragment]) == "שלום"

    def test_progress_is_delivered_before_next_fragment(self) -> None:
        log: list[str] = []

        def chunks():
            for text in ["a", "b"]:
                log.append(f"consume {text}")
                yield delta(text)

        StreamAccumulator().run(chunks(), lambda text: log.append(f"progress {text}"))
        assert log == ["consume a", "progress a", "consume b", "progress ab"]


class TestIterSnapshots:
    def test_snapshots_are_prefix_consistent(self) -> None:
        snapshots = list(StreamAccumulator().iter_snapshots([delta("The "), delta("patient "), delta("rests")]))
        assert snapshots == ["The ", "The patient ", "The patient rests"]
        for earlier, later in zip(snapshots, snapshots[1:]):
            assert later.startswith(earlier)

    def test_completes_after_exhaustion(self) -> None:
        accumulator = StreamAccumulator()
        snapshots = accumulator.iter_snapshots([delta("a")])
        assert next(snapshots) == "a"
        assert not accumulator.completed
        assert list(snapshots) == []
        assert accumulator.completed
        assert accumulator.text == "a"

    def test_feeding_a_completed_stream_fails(self) -> None:
        accumulator = StreamAccumulator()
        accumulator.run([delta("a")])
        with pytest.raises(RuntimeError):
            accumulator.feed(delta("b"))
        assert accumulator.text == "a"


class TestDecodeFailures:
    def test_invalid_json_aborts(self) -> None:
        progress: list[str] = []
        with pytest.raises(StreamDecodeError) as exc_info:
            StreamAccumulator().run([delta("a"), b"{not json", delta("b")], progress.append)
        assert isinstance(exc_info.value.cause, json.JSONDecodeError)
        assert progress == ["a"]

    def test_invalid_utf8_aborts(self) -> None:
        with pytest.raises(StreamDecodeError) as exc_info:
            StreamAccumulator().run([b"\xff\xfe"])
        assert isinstance(exc_info.value.cause, UnicodeDecodeError)

    def test_non_object_envelope_aborts(self) -> None:
        with pytest.raises(StreamDecodeError):
            StreamAccumulator().run([b"[1, 2]"])

    def test_delta_without_text_aborts(self) -> None:
        fragment = json.dumps({"type": "content_block_delta", "delta": {}}).encode()
        with pytest.raises(StreamDecodeError):
            StreamAccumulator().run([fragment])

    def test_error_message_names_stream_processing(self) -> None:
        with pytest.raises(StreamDecodeError, match="Stream processing error"):
            decode_envelope(b"oops")


class TestDeltaText:
    def test_returns_none_for_other_kinds(self) -> None:
        assert delta_text({"type": "message_stop"}) is None

    def test_returns_text_for_delta(self) -> None:
        assert delta_text({"type": "content_block_delta", "delta": {"text": "hi"}}) == "hi"
