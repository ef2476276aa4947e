"""Selection state for the preview, and the scroll target it implies.

Two states: idle (``state is None``) and selected. A click on a highlighted
segment or a "go to entity" request from a side list selects; any new
selection replaces the previous one. Nothing returns the coordinator to
idle.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable

from lexanchor.anchor_types import (
    EntityNumber,
    Match,
    Segment,
    SelectionState,
    check_entity_type,
)
from lexanchor.highlight_config import DEFAULT_CONFIG, HighlightConfig

type SelectionListener = Callable[[SelectionState], None]


def estimate_scroll_offset(
    text: str,
    start_index: int,
    scroll_height: float,
    offset_px: float = 100,
) -> float:
    """Approximate scroll position of *start_index* in a rendered text pane.

    Uniform line height approximation, not a layout measurement: the
    fraction of newlines before the anchor is taken as the fraction of the
    pane's scroll height, minus *offset_px* so the anchor is not flush with
    the top edge. Wrapped lines and variable fonts make it drift.

    Returns 0.0 for text without newlines and never returns a negative value.
    """
    total = text.count("\n")
    if total == 0:
        return 0.0
    before = text.count("\n", 0, max(0, start_index))
    return max(0.0, (before / total) * scroll_height - offset_px)


class SelectionCoordinator:
    """Single-writer owner of the SelectionState for one analysis pass."""

    def __init__(
        self,
        matches: Iterable[Match],
        text: str,
        config: HighlightConfig = DEFAULT_CONFIG,
    ) -> None:
        self._text = text
        self._config = config
        self._by_key: dict[tuple[str, EntityNumber], Match] = {}
        for m in matches:
            self._by_key.setdefault(m.key, m)
        self._state: SelectionState | None = None
        self._listeners: list[SelectionListener] = []

    @property
    def state(self) -> SelectionState | None:
        return self._state

    def subscribe(self, listener: SelectionListener) -> None:
        """Call *listener* with the new state after every selection."""
        self._listeners.append(listener)

    def select_entity(self, entity_type: str, number: EntityNumber) -> SelectionState:
        state = SelectionState(check_entity_type(entity_type), number)
        self._state = state
        for listener in self._listeners:
            listener(state)
        return state

    def select_segment(self, segment: Segment) -> SelectionState:
        """Click on a highlighted segment."""
        if segment.match is None:
            raise ValueError("Plain segments are not selectable")
        return self.select_entity(segment.match.type, segment.match.number)

    def is_selected(self, entity_type: str, number: EntityNumber) -> bool:
        s = self._state
        return s is not None and s.type == entity_type and s.number == number

    def selected_match(self) -> Match | None:
        """The Match of the selected entity, or None if idle or never anchored."""
        if self._state is None:
            return None
        return self._by_key.get((self._state.type, self._state.number))

    def scroll_target(self, scroll_height: float) -> float | None:
        m = self.selected_match()
        if m is None:
            return None
        return estimate_scroll_offset(
            self._text,
            m.start_index,
            scroll_height,
            offset_px=self._config.scroll_offset_px,
        )
