"""Extraction preview: one analysis pass over a source text.

Ties the three stages together the way the admin preview consumes them:

    text + ParsedContent -> resolve_anchors -> build_segments -> render
    user click / list row -> SelectionCoordinator -> scroll target

A preview is recomputed wholesale whenever the text or the parsed content
changes; there is no incremental update.
"""
from __future__ import annotations

from dataclasses import asdict
from typing import Any

from lexanchor.anchor_matcher import AnchorReport, resolve_anchors
from lexanchor.anchor_types import (
    ENTITY_TYPES,
    EntityNumber,
    Match,
    ParsedContent,
    Segment,
    SelectionState,
    StructureAnalysis,
)
from lexanchor.highlight_config import DEFAULT_CONFIG, HighlightConfig
from lexanchor.segment_builder import build_segments, content_stats, plain_segments
from lexanchor.selection import SelectionCoordinator


class ExtractionPreview:
    """Matches, segments and selection for one (text, content) pair."""

    def __init__(
        self,
        text: str,
        content: ParsedContent,
        analysis: StructureAnalysis | None = None,
        config: HighlightConfig | None = None,
    ) -> None:
        self.text = text
        self.content = content
        self.analysis = analysis or StructureAnalysis(
            detected_language=content.detected_language,
        )
        self.config = config or DEFAULT_CONFIG
        self.report: AnchorReport = resolve_anchors(text, content, self.config)
        self.show_highlights = True
        self._segments = build_segments(text, self.report.matches, self.config)
        self.selection = SelectionCoordinator(self.report.matches, text, self.config)

    @property
    def matches(self) -> tuple[Match, ...]:
        return self.report.matches

    @property
    def segments(self) -> list[Segment]:
        if not self.show_highlights or not self.report.matches:
            return plain_segments(self.text)
        return list(self._segments)

    @property
    def stats(self) -> dict[str, int]:
        return content_stats(self.content)

    def detected_counts(self) -> dict[str, int]:
        return {t: self.report.detected(t) for t in ENTITY_TYPES}

    def select_entity(self, entity_type: str, number: EntityNumber) -> SelectionState:
        return self.selection.select_entity(entity_type, number)

    def is_selected(self, entity_type: str, number: EntityNumber) -> bool:
        return self.selection.is_selected(entity_type, number)

    def to_dict(self, *, scroll_height: float | None = None) -> dict[str, Any]:
        """JSON-ready payload for a renderer."""
        state = self.selection.state
        payload: dict[str, Any] = {
            "language": self.analysis.detected_language,
            "analysis": asdict(self.analysis),
            "stats": self.stats,
            "detected": self.detected_counts(),
            "matches": [asdict(m) for m in self.matches],
            "misses": [asdict(m) for m in self.report.misses],
            "segments": [
                {
                    "text": s.text,
                    "type": s.match.type if s.match else None,
                    "number": s.match.number if s.match else None,
                    "selected": bool(
                        s.match and self.is_selected(s.match.type, s.match.number)
                    ),
                }
                for s in self.segments
            ],
            "selection": asdict(state) if state is not None else None,
        }
        if scroll_height is not None:
            payload["scroll_target"] = self.selection.scroll_target(scroll_height)
        return payload


def build_preview(
    text: str,
    content: ParsedContent,
    analysis: StructureAnalysis | None = None,
    config: HighlightConfig | None = None,
) -> ExtractionPreview:
    return ExtractionPreview(text, content, analysis, config)
