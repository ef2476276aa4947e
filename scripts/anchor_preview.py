#!/usr/bin/env python3
"""Resolve anchors for a parsed regulation and print the preview as JSON.

Reads the raw regulation text and the parser's ParsedContent JSON, locates
every recital / article / annex / footnote / chapter / definition in the
text, and writes the segment partition plus match diagnostics to stdout.

Usage::

    python3 scripts/anchor_preview.py --text reg.txt --content parsed.json
    python3 scripts/anchor_preview.py --text reg.txt --content parsed.json \
      --analysis analysis.json --select article:5 --scroll-height 24000
    python3 scripts/anchor_preview.py --text reg.txt --content parsed.json \
      --config highlight.json --no-highlights -v
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import orjson

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from lexanchor.anchor_types import ENTITY_TYPES, FOOTNOTE, EntityNumber
from lexanchor.highlight_config import HighlightConfig, load_highlight_config
from lexanchor.io_utils import (
    load_parsed_content,
    load_structure_analysis,
    read_source_text,
)
from lexanchor.preview import ExtractionPreview, build_preview

log = logging.getLogger("anchor_preview")

# stats keys are plural; chapters are derived, so they have no parsed count
_STAT_KEYS: dict[str, str] = {
    "recital": "recitals",
    "article": "articles",
    "annex": "annexes",
    "footnote": "footnotes",
    "definition": "definitions",
}


def dump_json(obj: object) -> None:
    sys.stdout.buffer.write(orjson.dumps(obj, option=orjson.OPT_INDENT_2))
    sys.stdout.buffer.write(b"\n")


def parse_select(spec: str) -> tuple[str, EntityNumber]:
    """Parse "type:number" ("article:5", "footnote:*")."""
    entity_type, sep, raw = spec.partition(":")
    entity_type = entity_type.strip().lower()
    raw = raw.strip()
    if not sep or not raw:
        raise ValueError(f"--select expects TYPE:NUMBER, got {spec!r}")
    if entity_type not in ENTITY_TYPES:
        raise ValueError(
            f"--select type must be one of {', '.join(ENTITY_TYPES)}, got {entity_type!r}"
        )
    # Footnote markers are strings ("1", "*"); every other entity is numbered.
    if entity_type == FOOTNOTE:
        return entity_type, raw
    if not raw.isdigit():
        raise ValueError(f"--select number must be an integer for {entity_type}, got {raw!r}")
    return entity_type, int(raw)


def warn_undetected(preview: ExtractionPreview) -> None:
    """Log a "k of N detected" warning for every short entity type."""
    stats = preview.stats
    detected = preview.detected_counts()
    for entity_type, key in _STAT_KEYS.items():
        parsed = stats[key]
        found = detected[entity_type]
        if found < parsed:
            log.warning("%s: %d of %d detected in source text", key, found, parsed)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Locate parsed regulation entities in the raw text.",
    )
    parser.add_argument("--text", required=True, type=Path, help="Raw regulation text")
    parser.add_argument(
        "--content", required=True, type=Path, help="ParsedContent JSON from the parser",
    )
    parser.add_argument(
        "--analysis", type=Path, default=None, help="StructureAnalysis JSON (optional)",
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Highlight config JSON (optional)",
    )
    parser.add_argument(
        "--select", default=None,
        help="Select an entity, e.g. 'article:5' or 'footnote:*'",
    )
    parser.add_argument(
        "--scroll-height", type=float, default=None,
        help="Pane scroll height in px; adds scroll_target to the output",
    )
    parser.add_argument(
        "--no-highlights", action="store_true",
        help="Emit the text as a single plain segment",
    )
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        stream=sys.stderr,
    )

    try:
        text = read_source_text(args.text)
        content = load_parsed_content(args.content)
        analysis = load_structure_analysis(args.analysis) if args.analysis else None
        config = load_highlight_config(args.config) if args.config else HighlightConfig()
        selection = parse_select(args.select) if args.select else None
    except (OSError, ValueError, orjson.JSONDecodeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    preview = build_preview(text, content, analysis, config)
    log.info(
        "%d chars, %d matches, %d misses",
        len(text), len(preview.matches), len(preview.report.misses),
    )
    warn_undetected(preview)

    if args.no_highlights:
        preview.show_highlights = False
    if selection is not None:
        state = preview.select_entity(*selection)
        if preview.selection.selected_match() is None:
            log.warning("selected %s %s has no anchor in the text", state.type, state.number)

    dump_json(preview.to_dict(scroll_height=args.scroll_height))
    return 0


if __name__ == "__main__":
    sys.exit(main())
