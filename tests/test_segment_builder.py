"""Tests for lexanchor.segment_builder module."""
from lexanchor.anchor_types import Annex, Article, Footnote, Match, ParsedContent, Recital, Segment
from lexanchor.highlight_config import HighlightConfig
from lexanchor.segment_builder import build_segments, content_stats, plain_segments


def _m(entity_type: str, number: int | str, start: int, end: int | None = None) -> Match:
    return Match(entity_type, number, start, start if end is None else end, "")


def _joined(segments: list[Segment]) -> str:
    return "".join(s.text for s in segments)


class TestBuildSegments:
    def test_empty_text(self) -> None:
        assert build_segments("", []) == []
        assert build_segments("", [_m("article", 1, 0)]) == []

    def test_no_matches_is_one_plain_segment(self) -> None:
        assert build_segments("plain text", []) == [Segment("plain text")]

    def test_highlight_width_capped_at_100(self) -> None:
        text = "a" * 50 + "b" * 300
        m = _m("article", 1, 50, 350)
        segments = build_segments(text, [m])
        assert [len(s.text) for s in segments] == [50, 100, 200]
        assert segments[0].match is None
        assert segments[1].match is m
        assert segments[2].match is None

    def test_highlight_at_end_of_text(self) -> None:
        text = "x" * 120
        segments = build_segments(text, [_m("annex", 1, 90)])
        assert [s.text for s in segments] == ["x" * 90, "x" * 30]
        assert segments[-1].is_highlight

    def test_later_match_truncated(self) -> None:
        text = "t" * 300
        first = _m("article", 1, 0)
        second = _m("recital", 2, 50)
        segments = build_segments(text, [first, second])
        assert [(len(s.text), s.match) for s in segments] == [
            (100, first),
            (50, second),
            (150, None),
        ]

    def test_later_match_absorbed(self) -> None:
        config = HighlightConfig(segment_widths={"footnote": 10})
        text = "t" * 300
        first = _m("article", 1, 0)
        absorbed = _m("footnote", "1", 20)
        segments = build_segments(text, [first, absorbed], config)
        assert [s.match for s in segments] == [first, None]
        assert _joined(segments) == text

    def test_per_type_width(self) -> None:
        config = HighlightConfig(segment_widths={"annex": 20})
        text = "q" * 100
        segments = build_segments(text, [_m("annex", 1, 0)], config)
        assert [len(s.text) for s in segments] == [20, 80]

    def test_unsorted_input_is_sorted(self) -> None:
        text = "z" * 500
        late = _m("annex", 1, 300)
        early = _m("article", 1, 10)
        segments = build_segments(text, [late, early])
        assert [s.match for s in segments if s.match] == [early, late]
        assert _joined(segments) == text

    def test_tie_keeps_input_order(self) -> None:
        text = "k" * 200
        a = _m("recital", 1, 0)
        b = _m("footnote", "1", 0)
        segments = build_segments(text, [a, b])
        assert segments[0].match is a
        assert all(s.match is not b for s in segments)

    def test_adjacent_matches_have_no_gap(self) -> None:
        text = "m" * 250
        a = _m("article", 1, 0)
        b = _m("article", 2, 100)
        segments = build_segments(text, [a, b])
        assert [s.match for s in segments] == [a, b, None]

    def test_round_trip(self) -> None:
        text = "Article 1\nScope\n(1) recital\n" * 20
        cases = [
            [],
            [_m("article", 1, 0)],
            [_m("article", 1, 0), _m("recital", 1, 16)],
            [_m("annex", 1, len(text) - 1)],
            [_m("article", i, i * 28) for i in range(20)],
            [_m("article", 1, 5), _m("article", 2, 5), _m("article", 3, 7)],
        ]
        for matches in cases:
            assert _joined(build_segments(text, matches)) == text


class TestPlainSegments:
    def test_plain(self) -> None:
        assert plain_segments("abc") == [Segment("abc")]
        assert plain_segments("") == []


class TestContentStats:
    def test_counts_from_content(self) -> None:
        content = ParsedContent(
            recitals=(Recital(1, "a"), Recital(2, "b")),
            articles=(Article(1, "t", "c"),),
            annexes=(Annex(1, "I", "t", "c"),),
            footnotes=(Footnote("1", "OJ"), Footnote("2", "OJ"), Footnote("3", "OJ")),
        )
        assert content_stats(content) == {
            "recitals": 2,
            "articles": 1,
            "annexes": 1,
            "footnotes": 3,
            "definitions": 0,
        }

    def test_empty(self) -> None:
        assert set(content_stats(ParsedContent()).values()) == {0}
