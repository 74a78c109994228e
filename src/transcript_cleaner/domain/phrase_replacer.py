"""Dictionary-driven phrase replacement with inline highlight markup."""

import html
from collections.abc import Iterable, Mapping

from transcript_cleaner.domain.models import (
    AnnotationResult,
    OverlapPolicy,
    PhraseDictionaryEntry,
    ReplacementRecord,
)
from transcript_cleaner.logging import setup_logging

logger = setup_logging()


def lower_preserving_offsets(text: str) -> str:
    """Lower-cases text one character at a time, keeping every offset aligned."""
    lowered = text.lower()
    if len(lowered) == len(text):
        return lowered
    # Some characters (e.g. "İ") expand when lower-cased; leave those untouched.
    return "".join(c.lower() if len(c.lower()) == 1 else c for c in text)


def build_replacement_map(entries: Iterable[PhraseDictionaryEntry]) -> dict[str, str]:
    """
    Builds a lower-cased phrase -> display mapping from dictionary entries.

    Entries with an empty phrase or display value are skipped. When two
    entries share a phrase, the later one wins.
    """
    replacement_map: dict[str, str] = {}
    for entry in entries:
        if entry.phrase and entry.display_as:
            replacement_map[lower_preserving_offsets(entry.phrase)] = entry.display_as
    return replacement_map


def normalize_dictionary(dictionary: Mapping[str, str]) -> dict[str, str]:
    """Lower-cases keys and drops entries with an empty phrase or display value."""
    return {
        lower_preserving_offsets(phrase): display
        for phrase, display in dictionary.items()
        if phrase and display
    }


def find_candidate_spans(text: str, replacement_map: Mapping[str, str]) -> list[ReplacementRecord]:
    """
    Finds every occurrence of every dictionary phrase in the text.

    Phrases are scanned longest first. Within a phrase, matches are
    non-overlapping and the search resumes at the end of each match.
    Matching is case-insensitive substring matching with no word-boundary
    checks. Matches of different phrases may overlap.

    Args:
        text: The input text.
        replacement_map: Lower-cased phrase -> display value.

    Returns:
        Candidate records in discovery order.
    """
    lowered = lower_preserving_offsets(text)
    candidates: list[ReplacementRecord] = []

    for phrase in sorted(replacement_map, key=len, reverse=True):
        replacement = replacement_map[phrase]
        start = lowered.find(phrase)
        while start != -1:
            end = start + len(phrase)
            candidates.append(
                ReplacementRecord(
                    start=start,
                    end=end,
                    original=text[start:end],
                    replacement=replacement,
                )
            )
            start = lowered.find(phrase, end)

    return candidates


def resolve_overlaps(
    candidates: list[ReplacementRecord], policy: OverlapPolicy
) -> list[ReplacementRecord]:
    """
    Applies an overlap policy to candidate spans.

    KEEP_ALL returns the candidates unchanged, so spans found by different
    phrases may overlap. LONGEST_FIRST accepts spans by descending length,
    then by leftmost start, and drops any span overlapping an accepted one.
    """
    if policy is OverlapPolicy.KEEP_ALL:
        return list(candidates)

    accepted: list[ReplacementRecord] = []
    ordered = sorted(candidates, key=lambda r: (-(r.end - r.start), r.start))
    for candidate in ordered:
        if any(candidate.start < kept.end and kept.start < candidate.end for kept in accepted):
            continue
        accepted.append(candidate)
    return accepted


class PhraseReplacer:
    """Replaces dictionary phrases in text with highlighted display variants."""

    def __init__(
        self,
        overlap_policy: OverlapPolicy = OverlapPolicy.LONGEST_FIRST,
        highlight_style: str = "color: red;",
    ):
        self._overlap_policy = OverlapPolicy(overlap_policy)
        self._highlight_style = highlight_style

    @property
    def overlap_policy(self) -> OverlapPolicy:
        return self._overlap_policy

    def annotate(self, text: str, dictionary: Mapping[str, str]) -> AnnotationResult:
        """
        Annotates text by replacing dictionary phrases with highlight markup.

        Replacements are spliced rightmost first, so splicing one record never
        shifts the offsets of the records still to be applied on its left.

        Args:
            text: The input text.
            dictionary: Phrase -> display value. Keys are matched case-insensitively.

        Returns:
            AnnotationResult with the annotated HTML and the applied records,
            ordered by descending start offset.
        """
        replacement_map = normalize_dictionary(dictionary)
        candidates = find_candidate_spans(text, replacement_map)
        records = resolve_overlaps(candidates, self._overlap_policy)
        records.sort(key=lambda r: r.start, reverse=True)

        annotated = text
        for record in records:
            annotated = (
                annotated[: record.start]
                + self.render_highlight(record)
                + annotated[record.end :]
            )

        logger.info(
            "Phrase replacements applied",
            extra={
                "phrases": len(replacement_map),
                "candidates": len(candidates),
                "replacements": len(records),
                "overlap_policy": self._overlap_policy.value,
            },
        )

        return AnnotationResult(html=annotated, replacements=records)

    def render_highlight(self, record: ReplacementRecord) -> str:
        """Renders the inline markup for one replacement."""
        return (
            f'<span style="{html.escape(self._highlight_style)}" '
            f'title="{html.escape(record.original)}">'
            f"{html.escape(record.replacement, quote=False)}</span>"
        )
