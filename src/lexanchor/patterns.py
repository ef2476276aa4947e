"""Pattern table for anchor detection in EU regulation text.

One compiled regex per (entity type, language) pair, iterated in a fixed
priority order. Adding a language means adding a row here; the matcher's
control flow never changes.

Group 1 of every heading pattern captures the entity label: an Arabic
number for articles, a Roman numeral for annexes and chapters. Roman
numerals use [IVXLCDM]+ with post-validation (numerals.roman_to_int) rather
than an exact numeral grammar, avoiding alternation-ordering bugs with
IV/IX/etc. A trailing word boundary keeps "Annex in" from yielding "I".
"""
from __future__ import annotations

import re
from dataclasses import dataclass

from lexanchor.anchor_types import ANNEX, ARTICLE, CHAPTER


@dataclass(frozen=True, slots=True)
class AnchorPattern:
    """One row of the pattern table."""

    entity_type: str
    language: str           # ISO 639-1 of the first language using the keyword
    regex: re.Pattern[str]

    @property
    def key(self) -> tuple[str, str]:
        return (self.entity_type, self.language)


def _keyword_first(keyword: str, label: str) -> str:
    return rf"\b{keyword}\s+({label})"


def _number_first(label: str, suffix: str) -> str:
    return rf"\b({label})\s*{suffix}"


_NUM = r"\d+"
_ROMAN = r"[IVXLCDM]+\b"

# ---------------------------------------------------------------------------
# Raw table, in priority order
# ---------------------------------------------------------------------------

# The first five article rows are the primary languages and must stay first;
# "Article" also covers fr, "Artikel" also covers nl/sv/da.
_ARTICLE_ROWS: tuple[tuple[str, str], ...] = (
    ("en", _keyword_first("Article", _NUM)),
    ("de", _keyword_first("Artikel", _NUM)),
    ("es", _keyword_first("Artículo", _NUM)),
    ("it", _keyword_first("Articolo", _NUM)),
    ("pt", _keyword_first("Artigo", _NUM)),
    ("pl", _keyword_first("Artykuł", _NUM)),
    ("cs", _keyword_first("Článek", _NUM)),
    ("sk", _keyword_first("Článok", _NUM)),
    ("ro", _keyword_first("Articolul", _NUM)),
    ("hr", _keyword_first("Članak", _NUM)),
    ("mt", _keyword_first("Artikolu", _NUM)),
    ("ga", _keyword_first("Airteagal", _NUM)),
    ("et", _keyword_first("Artikkel", _NUM)),
    ("hu", _number_first(_NUM, r"\.\s*cikk")),
    ("fi", _number_first(_NUM, r"artikla")),
    ("lv", _number_first(_NUM, r"\.\s*pants")),
    ("lt", _number_first(_NUM, r"straipsnis")),
    ("sl", _number_first(_NUM, r"\.\s*člen")),
)

# ANNEX / ANHANG / ANNEXE first. "ANNEX" cannot match "ANNEXE II" because
# the keyword must be followed by whitespace.
_ANNEX_ROWS: tuple[tuple[str, str], ...] = (
    ("en", _keyword_first("ANNEX", _ROMAN)),
    ("de", _keyword_first("ANHANG", _ROMAN)),
    ("fr", _keyword_first("ANNEXE", _ROMAN)),
    ("es", _keyword_first("ANEXO", _ROMAN)),        # also pt
    ("it", _keyword_first("ALLEGATO", _ROMAN)),
    ("nl", _keyword_first("BIJLAGE", _ROMAN)),
    ("pl", _keyword_first("ZAŁĄCZNIK", _ROMAN)),
    ("cs", _keyword_first("PŘÍLOHA", _ROMAN)),
    ("sk", _keyword_first("PRÍLOHA", _ROMAN)),
    ("ro", _keyword_first("ANEXA", _ROMAN)),
    ("sv", _keyword_first("BILAGA", _ROMAN)),
    ("da", _keyword_first("BILAG", _ROMAN)),
    ("fi", _keyword_first("LIITE", _ROMAN)),
    ("et", _keyword_first("LISA", _ROMAN)),
    ("sl", _keyword_first("PRILOGA", _ROMAN)),
    ("hr", _keyword_first("PRILOG", _ROMAN)),
    ("mt", _keyword_first("ANNESS", _ROMAN)),
)

_CHAPTER_ROWS: tuple[tuple[str, str], ...] = (
    ("en", _keyword_first("CHAPTER", _ROMAN)),
    ("de", _keyword_first("KAPITEL", _ROMAN)),      # also sv/da
    ("fr", _keyword_first("CHAPITRE", _ROMAN)),
    ("es", _keyword_first("CAPÍTULO", _ROMAN)),     # also pt
    ("it", _keyword_first("CAPO", _ROMAN)),
    ("nl", _keyword_first("HOOFDSTUK", _ROMAN)),
    ("pl", _keyword_first("ROZDZIAŁ", _ROMAN)),
    ("cs", _keyword_first("KAPITOLA", _ROMAN)),     # also sk
    ("ro", _keyword_first("CAPITOLUL", _ROMAN)),
    ("hr", _keyword_first("POGLAVLJE", _ROMAN)),
    ("mt", _keyword_first("KAPITOLU", _ROMAN)),
    ("ga", _keyword_first("CAIBIDIL", _ROMAN)),
)


def _compile(entity_type: str, rows: tuple[tuple[str, str], ...]) -> tuple[AnchorPattern, ...]:
    return tuple(
        AnchorPattern(entity_type, lang, re.compile(src, re.IGNORECASE))
        for lang, src in rows
    )


# Compiled once at import.
PATTERN_TABLE: dict[str, tuple[AnchorPattern, ...]] = {
    ARTICLE: _compile(ARTICLE, _ARTICLE_ROWS),
    ANNEX: _compile(ANNEX, _ANNEX_ROWS),
    CHAPTER: _compile(CHAPTER, _CHAPTER_ROWS),
}


def patterns_for(entity_type: str) -> tuple[AnchorPattern, ...]:
    """Heading patterns for *entity_type* in priority order (empty if none)."""
    return PATTERN_TABLE.get(entity_type, ())


def languages_for(entity_type: str) -> tuple[str, ...]:
    return tuple(p.language for p in patterns_for(entity_type))


# ---------------------------------------------------------------------------
# Parenthesised anchors: recitals "(12) " and footnotes "(3) "
# ---------------------------------------------------------------------------

def recital_pattern(recital_number: int) -> re.Pattern[str]:
    return re.compile(rf"\({recital_number}\)\s+")


def footnote_pattern(marker: str) -> re.Pattern[str]:
    """Anchor for a footnote marker; the marker is escaped, so "*" is literal."""
    return re.compile(rf"\({re.escape(marker)}\)\s+")


# Keyword gate for footnotes. Bare numbered parentheses are everywhere in
# list-formatted text; an Official Journal reference or an act citation
# close to the marker is what makes it a footnote.
FOOTNOTE_CONTEXT_RE = re.compile(
    r"\bOJ\b|\bABl\.|\bRegulation|\bDirective",
    re.IGNORECASE,
)


# ---------------------------------------------------------------------------
# Definitions: quoted term
# ---------------------------------------------------------------------------

_OPEN_QUOTES = "\"“‘'"
_CLOSE_QUOTES = "\"”’'"


def definition_pattern(term: str) -> re.Pattern[str]:
    """Quoted occurrence of *term*, straight or typographic quotes."""
    return re.compile(
        rf"[{_OPEN_QUOTES}]{re.escape(term.strip())}[{_CLOSE_QUOTES}]",
        re.IGNORECASE,
    )
