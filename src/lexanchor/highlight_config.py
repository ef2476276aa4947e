"""Highlight window and search budget constants.

Anchors are located precisely, but entity *ends* are fixed-budget
approximations, and the rendered highlight is capped regardless of the
entity's true length. Every such number lives here under a name so it can
be tuned (or loaded from JSON) without touching matching code.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Any

import orjson

from lexanchor.anchor_types import ENTITY_TYPES, check_entity_type

DEFAULT_SEGMENT_WIDTH = 100


def _default_segment_widths() -> dict[str, int]:
    return {t: DEFAULT_SEGMENT_WIDTH for t in ENTITY_TYPES}


@dataclass(frozen=True, slots=True)
class HighlightConfig:
    """Named constants for anchor spans, highlight widths and scrolling."""

    # SegmentBuilder: highlighted slice width per entity type. Stored as a
    # read-only copy; left out of the hash since mappings are unhashable.
    segment_widths: Mapping[str, int] = field(
        default_factory=_default_segment_widths, hash=False,
    )

    # Recitals: "(N) " accepted only if content[:preview] follows within lookahead
    recital_preview_chars: int = 50
    recital_lookahead: int = 100
    recital_end_padding: int = 10

    # Articles: end = start + min(len(content), budget) + padding
    article_content_budget: int = 500
    article_end_padding: int = 20

    annex_window: int = 200
    chapter_window: int = 200
    definition_window: int = 100

    # Footnotes: keyword gate window, measured from the anchor
    footnote_context_chars: int = 100
    footnote_end_padding: int = 5
    footnote_excerpt_chars: int = 80

    excerpt_chars: int = 100

    # SelectionCoordinator: pixels subtracted from the scroll estimate
    scroll_offset_px: int = 100

    def __post_init__(self) -> None:
        for f in fields(self):
            if f.name == "segment_widths":
                continue
            value = getattr(self, f.name)
            if not isinstance(value, int) or value < 0:
                raise ValueError(
                    f"HighlightConfig.{f.name} must be a non-negative int, got {value!r}"
                )
        for entity_type, width in self.segment_widths.items():
            check_entity_type(entity_type)
            if not isinstance(width, int) or width < 0:
                raise ValueError(
                    f"segment width for {entity_type!r} must be a non-negative int, "
                    f"got {width!r}"
                )
        object.__setattr__(
            self, "segment_widths", MappingProxyType(dict(self.segment_widths)),
        )

    def segment_width(self, entity_type: str) -> int:
        return self.segment_widths.get(entity_type, DEFAULT_SEGMENT_WIDTH)

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> HighlightConfig:
        """Build a config from a JSON object; omitted keys keep their defaults.

        ``segment_widths`` may be partial: listed types override the default
        width, the rest stay at DEFAULT_SEGMENT_WIDTH.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"Unknown highlight config keys: {', '.join(unknown)}")
        kwargs = dict(d)
        if "segment_widths" in kwargs:
            raw = kwargs["segment_widths"]
            if not isinstance(raw, dict):
                raise ValueError("segment_widths must be a JSON object")
            widths = _default_segment_widths()
            widths.update(raw)
            kwargs["segment_widths"] = widths
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["segment_widths"] = dict(self.segment_widths)
        return out


DEFAULT_CONFIG = HighlightConfig()


def load_highlight_config(path: Path) -> HighlightConfig:
    """Load a HighlightConfig from a JSON file."""
    payload = orjson.loads(path.read_bytes())
    if not isinstance(payload, dict):
        raise ValueError(f"Highlight config must be a JSON object: {path}")
    return HighlightConfig.from_dict(payload)
