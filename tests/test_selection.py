"""Tests for lexanchor.selection module."""
import pytest

from lexanchor.anchor_types import Match, Segment, SelectionState
from lexanchor.highlight_config import HighlightConfig
from lexanchor.selection import SelectionCoordinator, estimate_scroll_offset

TEXT = "line0\nline1\nline2\nline3\n"  # 4 newlines
MATCHES = (
    Match("article", 1, TEXT.index("line2"), TEXT.index("line2") + 5, "Scope"),
    Match("footnote", "1", TEXT.index("line3"), TEXT.index("line3") + 5, "OJ L 1"),
)


class TestEstimateScrollOffset:
    def test_line_density(self) -> None:
        # 2 of 4 newlines precede "line2"
        assert estimate_scroll_offset(TEXT, 12, 1000) == pytest.approx(400.0)

    def test_offset_parameter(self) -> None:
        assert estimate_scroll_offset(TEXT, 12, 1000, offset_px=0) == pytest.approx(500.0)

    def test_clamped_at_zero(self) -> None:
        assert estimate_scroll_offset(TEXT, 0, 1000) == 0.0

    def test_no_newlines(self) -> None:
        assert estimate_scroll_offset("single line", 5, 1000) == 0.0


class TestSelectionCoordinator:
    def test_starts_idle(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        assert coord.state is None
        assert coord.selected_match() is None
        assert coord.scroll_target(1000) is None
        assert not coord.is_selected("article", 1)

    def test_select_entity(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        state = coord.select_entity("article", 1)
        assert state == SelectionState("article", 1)
        assert coord.is_selected("article", 1)
        assert not coord.is_selected("article", 2)
        assert coord.selected_match() is MATCHES[0]

    def test_new_selection_replaces_old(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        coord.select_entity("article", 1)
        coord.select_entity("footnote", "1")
        assert coord.state == SelectionState("footnote", "1")
        assert not coord.is_selected("article", 1)

    def test_number_types_are_not_conflated(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        coord.select_entity("footnote", "1")
        assert not coord.is_selected("footnote", 1)

    def test_scroll_target(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        coord.select_entity("footnote", "1")
        assert coord.scroll_target(1000) == pytest.approx(650.0)

    def test_scroll_offset_from_config(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT, HighlightConfig(scroll_offset_px=0))
        coord.select_entity("article", 1)
        assert coord.scroll_target(1000) == pytest.approx(500.0)

    def test_unmatched_selection_has_no_scroll_target(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        coord.select_entity("annex", 4)
        assert coord.state == SelectionState("annex", 4)
        assert coord.scroll_target(1000) is None

    def test_select_segment(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        coord.select_segment(Segment("line2", MATCHES[0]))
        assert coord.is_selected("article", 1)

    def test_plain_segment_not_selectable(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        with pytest.raises(ValueError, match="not selectable"):
            coord.select_segment(Segment("line0\n"))
        assert coord.state is None

    def test_unknown_type(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        with pytest.raises(ValueError, match="Unknown entity type"):
            coord.select_entity("section", 1)

    def test_listeners_notified(self) -> None:
        coord = SelectionCoordinator(MATCHES, TEXT)
        seen: list[SelectionState] = []
        coord.subscribe(seen.append)
        coord.select_entity("article", 1)
        coord.select_entity("article", 1)
        assert seen == [SelectionState("article", 1)] * 2
