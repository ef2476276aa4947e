"""Partition the source text into plain and highlighted segments.

The highlight of a match covers at most ``segment_width(type)`` characters
from its anchor (100 by default), whatever the entity's real length: long
articles are flagged at their heading, not painted end to end.

Overlap policy: earliest start wins. A later match that starts inside an
earlier highlight keeps only the part past the earlier highlight's end,
and is dropped from the rendering altogether when nothing is left.

Concatenating ``segment.text`` over the result always reproduces the text.
"""
from __future__ import annotations

from collections.abc import Iterable

from lexanchor.anchor_types import Match, ParsedContent, Segment
from lexanchor.highlight_config import DEFAULT_CONFIG, HighlightConfig


def build_segments(
    text: str,
    matches: Iterable[Match],
    config: HighlightConfig = DEFAULT_CONFIG,
) -> list[Segment]:
    """Build a gapless, overlap-free segment list over *text*.

    Args:
        text: The source text of this pass.
        matches: Matches in any order; re-sorted stably by start_index.
        config: Supplies the per-type highlight widths.

    Returns:
        Ordered segments whose texts concatenate to *text*.
    """
    if not text:
        return []

    ordered = sorted(matches, key=lambda m: m.start_index)
    segments: list[Segment] = []
    last_end = 0

    for m in ordered:
        start = min(m.start_index, len(text))
        if start > last_end:
            segments.append(Segment(text[last_end:start]))
        highlight_end = min(start + config.segment_width(m.type), len(text))
        highlight_start = max(start, last_end)
        if highlight_end > highlight_start:
            segments.append(Segment(text[highlight_start:highlight_end], m))
        last_end = max(last_end, highlight_end)

    if last_end < len(text):
        segments.append(Segment(text[last_end:]))

    return segments


def plain_segments(text: str) -> list[Segment]:
    """Rendering with highlights switched off: the whole text, unmarked."""
    return [Segment(text)] if text else []


def content_stats(content: ParsedContent) -> dict[str, int]:
    """Entity counts straight from the parsed content.

    Independent of matching, so "N parsed, 0 highlighted" stays visible.
    """
    return {
        "recitals": len(content.recitals),
        "articles": len(content.articles),
        "annexes": len(content.annexes),
        "footnotes": len(content.footnotes),
        "definitions": len(content.definitions),
    }
