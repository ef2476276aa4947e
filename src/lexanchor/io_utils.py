"""I/O utilities: JSON via orjson, parser payload decoding, source text reading.

The upstream parser emits camelCase keys (``recitalNumber``,
``romanNumeral``...); snake_case keys are accepted too so that payloads
written by ``save_json(preview.to_dict())`` style tooling round-trip.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import orjson

from lexanchor.anchor_types import (
    Annex,
    Article,
    Definition,
    Footnote,
    ParsedContent,
    Recital,
    StructureAnalysis,
)


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def save_json(obj: Any, path: Path, *, pretty: bool = True) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    opts = (
        orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS
        if pretty
        else orjson.OPT_SORT_KEYS
    )
    path.write_bytes(orjson.dumps(obj, option=opts))


def read_source_text(path: Path) -> str:
    """Read source text with encoding fallback: UTF-8 -> CP1252 -> replace.

    Line endings are normalised to "\\n" so offsets and newline counts agree
    with what the parser saw.
    """
    raw = path.read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        try:
            text = raw.decode("cp1252")
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
    return text.replace("\r\n", "\n").replace("\r", "\n")


# ---------------------------------------------------------------------------
# Payload decoding
# ---------------------------------------------------------------------------

def _get(item: dict[str, Any], camel: str, snake: str, where: str, default: Any = ...) -> Any:
    if camel in item:
        return item[camel]
    if snake in item:
        return item[snake]
    if default is not ...:
        return default
    raise ValueError(f"{where}: missing required key {camel!r}")


def _items(d: dict[str, Any], key: str) -> list[dict[str, Any]]:
    raw = d.get(key) or []
    if not isinstance(raw, list):
        raise ValueError(f"{key} must be a JSON array")
    for i, item in enumerate(raw):
        if not isinstance(item, dict):
            raise ValueError(f"{key}[{i}] must be a JSON object")
    return raw


def parsed_content_from_dict(d: dict[str, Any]) -> ParsedContent:
    """Decode the parser's ParsedContent payload."""
    if not isinstance(d, dict):
        raise ValueError("ParsedContent payload must be a JSON object")

    recitals = tuple(
        Recital(
            recital_number=int(_get(r, "recitalNumber", "recital_number", f"recitals[{i}]")),
            content=str(_get(r, "content", "content", f"recitals[{i}]", "")),
        )
        for i, r in enumerate(_items(d, "recitals"))
    )
    articles: list[Article] = []
    for i, a in enumerate(_items(d, "articles")):
        where = f"articles[{i}]"
        chapter = _get(a, "chapterNumber", "chapter_number", where, None)
        articles.append(Article(
            article_number=int(_get(a, "articleNumber", "article_number", where)),
            title=str(_get(a, "title", "title", where, "")),
            content=str(_get(a, "content", "content", where, "")),
            chapter_number=int(chapter) if chapter is not None else None,
        ))
    annexes = tuple(
        Annex(
            annex_number=int(_get(x, "annexNumber", "annex_number", f"annexes[{i}]")),
            roman_numeral=str(_get(x, "romanNumeral", "roman_numeral", f"annexes[{i}]", "")),
            title=str(_get(x, "title", "title", f"annexes[{i}]", "")),
            content=str(_get(x, "content", "content", f"annexes[{i}]", "")),
        )
        for i, x in enumerate(_items(d, "annexes"))
    )
    footnotes = tuple(
        Footnote(
            marker=str(_get(f, "marker", "marker", f"footnotes[{i}]")),
            content=str(_get(f, "content", "content", f"footnotes[{i}]", "")),
        )
        for i, f in enumerate(_items(d, "footnotes"))
    )
    definitions = tuple(
        Definition(
            definition_number=int(
                _get(x, "definitionNumber", "definition_number", f"definitions[{i}]", i + 1)
            ),
            term=str(_get(x, "term", "term", f"definitions[{i}]")),
            definition=str(_get(x, "definition", "definition", f"definitions[{i}]", "")),
        )
        for i, x in enumerate(_items(d, "definitions"))
    )
    return ParsedContent(
        recitals=recitals,
        articles=tuple(articles),
        annexes=annexes,
        footnotes=footnotes,
        definitions=definitions,
        detected_language=str(_get(d, "detectedLanguage", "detected_language", "content", "en")),
    )


def structure_analysis_from_dict(d: dict[str, Any]) -> StructureAnalysis:
    """Decode the parser's StructureAnalysis payload; extra keys are ignored."""
    if not isinstance(d, dict):
        raise ValueError("StructureAnalysis payload must be a JSON object")
    where = "analysis"
    return StructureAnalysis(
        detected_language=str(_get(d, "detectedLanguage", "detected_language", where, "en")),
        table_format=str(_get(d, "tableFormat", "table_format", where, "none")),
        footnote_format=str(_get(d, "footnoteFormat", "footnote_format", where, "none")),
        adoption_line_index=int(_get(d, "adoptionLineIndex", "adoption_line_index", where, -1)),
        first_article_index=int(_get(d, "firstArticleIndex", "first_article_index", where, -1)),
        first_annex_index=int(_get(d, "firstAnnexIndex", "first_annex_index", where, -1)),
    )


def load_parsed_content(path: Path) -> ParsedContent:
    return parsed_content_from_dict(load_json(path))


def load_structure_analysis(path: Path) -> StructureAnalysis:
    return structure_analysis_from_dict(load_json(path))
