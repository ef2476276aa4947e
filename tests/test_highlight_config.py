"""Tests for lexanchor.highlight_config module."""
from pathlib import Path

import orjson
import pytest

from lexanchor.highlight_config import (
    DEFAULT_CONFIG,
    DEFAULT_SEGMENT_WIDTH,
    HighlightConfig,
    load_highlight_config,
)


class TestDefaults:
    def test_current_visual_behaviour(self) -> None:
        c = DEFAULT_CONFIG
        assert c.recital_preview_chars == 50
        assert c.recital_lookahead == 100
        assert c.article_content_budget == 500
        assert c.article_end_padding == 20
        assert c.annex_window == 200
        assert c.footnote_context_chars == 100
        assert c.scroll_offset_px == 100

    def test_segment_width_per_type(self) -> None:
        for entity_type in ("recital", "article", "annex", "footnote", "chapter", "definition"):
            assert DEFAULT_CONFIG.segment_width(entity_type) == DEFAULT_SEGMENT_WIDTH == 100


class TestValidation:
    def test_negative_value(self) -> None:
        with pytest.raises(ValueError, match="annex_window"):
            HighlightConfig(annex_window=-1)

    def test_negative_segment_width(self) -> None:
        with pytest.raises(ValueError, match="segment width"):
            HighlightConfig(segment_widths={"article": -5})

    def test_unknown_segment_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown entity type"):
            HighlightConfig(segment_widths={"section": 10})


class TestImmutability:
    def test_caller_dict_is_copied(self) -> None:
        widths = {"article": 40}
        c = HighlightConfig(segment_widths=widths)
        widths["article"] = -1
        assert c.segment_width("article") == 40

    def test_widths_read_only(self) -> None:
        with pytest.raises(TypeError):
            DEFAULT_CONFIG.segment_widths["article"] = 5  # type: ignore[index]
        assert DEFAULT_CONFIG.segment_width("article") == 100

    def test_hashable_and_equal(self) -> None:
        a = HighlightConfig(segment_widths={"annex": 10})
        b = HighlightConfig(segment_widths={"annex": 10})
        assert a == b
        assert hash(a) == hash(b)
        assert hash(HighlightConfig()) == hash(DEFAULT_CONFIG)

    def test_to_dict_is_plain(self) -> None:
        out = DEFAULT_CONFIG.to_dict()
        assert type(out["segment_widths"]) is dict
        assert orjson.loads(orjson.dumps(out))["segment_widths"]["recital"] == 100


class TestFromDict:
    def test_partial_override(self) -> None:
        c = HighlightConfig.from_dict({"annex_window": 300, "segment_widths": {"article": 60}})
        assert c.annex_window == 300
        assert c.segment_width("article") == 60
        assert c.segment_width("recital") == 100
        assert c.recital_lookahead == 100

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown highlight config keys: bogus"):
            HighlightConfig.from_dict({"bogus": 1})

    def test_segment_widths_must_be_object(self) -> None:
        with pytest.raises(ValueError, match="segment_widths"):
            HighlightConfig.from_dict({"segment_widths": [1, 2]})

    def test_to_dict_round_trip(self) -> None:
        c = HighlightConfig(scroll_offset_px=40, segment_widths={"annex": 10})
        again = HighlightConfig.from_dict(c.to_dict())
        assert again.scroll_offset_px == 40
        assert again.segment_width("annex") == 10


class TestLoad:
    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / "highlight.json"
        path.write_bytes(orjson.dumps({"chapter_window": 80}))
        assert load_highlight_config(path).chapter_window == 80

    def test_load_non_object(self, tmp_path: Path) -> None:
        path = tmp_path / "highlight.json"
        path.write_bytes(b"[1]")
        with pytest.raises(ValueError, match="must be a JSON object"):
            load_highlight_config(path)
