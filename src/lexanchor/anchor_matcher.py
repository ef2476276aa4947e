"""Anchor matcher: locate each parsed entity in the raw regulation text.

For every entity in ParsedContent, find the first *plausible* occurrence
of its anchor. Small integers and Roman numerals are reused throughout
legal text (enumerated points, cross-references), so each entity type
carries its own false-positive rejection signal:

    recital     content proximity: content[:50] must follow "(N) " closely
    article     exact number equality: "Article 150" never satisfies 15
    annex       case-insensitive numeral equality
    chapter     numeral value equality
    footnote    keyword context: OJ / ABl. / Regulation / Directive near "(N) "
    definition  the term must appear quoted

Each locator returns Ok(Match) or Err(AnchorMiss). Unmatched entities are
expected: they are reported, never raised, and render as plain text.

All functions are pure over (text, content, config): identical inputs give
identical reports.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass, replace

from lexanchor.anchor_types import (
    ANNEX,
    ARTICLE,
    CHAPTER,
    DEFINITION,
    ENTITY_TYPES,
    FOOTNOTE,
    RECITAL,
    Annex,
    AnchorMiss,
    Article,
    Definition,
    EntityNumber,
    Err,
    Footnote,
    Match,
    Ok,
    ParsedContent,
    Recital,
    Result,
)
from lexanchor.highlight_config import DEFAULT_CONFIG, HighlightConfig
from lexanchor.numerals import int_to_roman, roman_to_int
from lexanchor.patterns import (
    FOOTNOTE_CONTEXT_RE,
    definition_pattern,
    footnote_pattern,
    patterns_for,
    recital_pattern,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AnchorReport:
    """Outcome of one matching pass."""

    matches: tuple[Match, ...] = ()
    misses: tuple[AnchorMiss, ...] = ()

    def detected(self, entity_type: str) -> int:
        return sum(1 for m in self.matches if m.type == entity_type)

    def missing(self, entity_type: str) -> tuple[AnchorMiss, ...]:
        return tuple(m for m in self.misses if m.type == entity_type)

    def match_for(self, entity_type: str, number: EntityNumber) -> Match | None:
        for m in self.matches:
            if m.type == entity_type and m.number == number:
                return m
        return None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _span_end(text: str, start: int, width: int) -> int:
    return min(start + width, len(text))


def _miss(
    entity_type: str,
    number: EntityNumber,
    seen_any: bool,
    attempted: str,
) -> Err[AnchorMiss]:
    return Err(AnchorMiss(
        type=entity_type,
        number=number,
        reason="rejected" if seen_any else "no_occurrence",
        attempted=attempted,
    ))


def _heading_hits(entity_type: str, text: str) -> Iterator[re.Match[str]]:
    """Heading occurrences in pattern-priority order, then document order."""
    for pattern in patterns_for(entity_type):
        for m in pattern.regex.finditer(text):
            yield m


def _attempted(entity_type: str) -> str:
    return ",".join(f"{p.language}:{p.regex.pattern}" for p in patterns_for(entity_type))


# ---------------------------------------------------------------------------
# Per-entity locators
# ---------------------------------------------------------------------------

def locate_recital(
    text: str,
    recital: Recital,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> Result[Match, AnchorMiss]:
    """Find "(N) " followed closely by the recital's own opening words."""
    pattern = recital_pattern(recital.recital_number)
    preview = recital.content[:config.recital_preview_chars]
    seen_any = False
    for m in pattern.finditer(text):
        seen_any = True
        start = m.start()
        content_pos = text.find(preview, start)
        if content_pos != -1 and content_pos < start + config.recital_lookahead:
            return Ok(Match(
                type=RECITAL,
                number=recital.recital_number,
                start_index=start,
                end_index=_span_end(
                    text, start, len(recital.content) + config.recital_end_padding,
                ),
                content=recital.content[:config.excerpt_chars],
            ))
    return _miss(RECITAL, recital.recital_number, seen_any, pattern.pattern)


def locate_article(
    text: str,
    article: Article,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> Result[Match, AnchorMiss]:
    """First "Article N" (any language) whose captured number is exactly N."""
    seen_any = False
    for m in _heading_hits(ARTICLE, text):
        seen_any = True
        # compare as digit strings; int() refuses very long digit runs
        if (m.group(1).lstrip("0") or "0") != str(article.article_number):
            continue
        start = m.start()
        budget = min(len(article.content), config.article_content_budget)
        return Ok(Match(
            type=ARTICLE,
            number=article.article_number,
            start_index=start,
            end_index=_span_end(text, start, budget + config.article_end_padding),
            content=article.title,
        ))
    return _miss(ARTICLE, article.article_number, seen_any, _attempted(ARTICLE))


def _annex_numeral(annex: Annex) -> str:
    numeral = annex.roman_numeral.strip()
    if numeral:
        return numeral.upper()
    if 1 <= annex.annex_number <= 3999:
        return int_to_roman(annex.annex_number)
    return ""


def locate_annex(
    text: str,
    annex: Annex,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> Result[Match, AnchorMiss]:
    """First "ANNEX <numeral>" (any language) with the annex's own numeral."""
    wanted = _annex_numeral(annex)
    seen_any = False
    if wanted:
        for m in _heading_hits(ANNEX, text):
            seen_any = True
            if m.group(1).upper() != wanted:
                continue
            start = m.start()
            return Ok(Match(
                type=ANNEX,
                number=annex.annex_number,
                start_index=start,
                end_index=_span_end(text, start, config.annex_window),
                content=annex.title,
            ))
    return _miss(ANNEX, annex.annex_number, seen_any, _attempted(ANNEX))


def locate_chapter(
    text: str,
    chapter_number: int,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> Result[Match, AnchorMiss]:
    """First "CHAPTER <numeral>" whose numeral value equals *chapter_number*."""
    seen_any = False
    for m in _heading_hits(CHAPTER, text):
        seen_any = True
        if roman_to_int(m.group(1)) != chapter_number:
            continue
        start = m.start()
        end = _span_end(text, start, config.chapter_window)
        # Heading line only; chapter titles sit on the next line.
        heading = text[start:end].split("\n", 1)[0].strip()
        return Ok(Match(
            type=CHAPTER,
            number=chapter_number,
            start_index=start,
            end_index=end,
            content=heading,
        ))
    return _miss(CHAPTER, chapter_number, seen_any, _attempted(CHAPTER))


def locate_footnote(
    text: str,
    footnote: Footnote,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> Result[Match, AnchorMiss]:
    """First "(marker) " whose nearby context cites an act or the OJ.

    The context window starts at the anchor and spans footnote_context_chars,
    but never reaches past the next occurrence of the same marker, so a list
    item "(1) ..." is not credited with the keywords of a later "(1) OJ L ...".
    """
    pattern = footnote_pattern(footnote.marker)
    anchors = list(pattern.finditer(text))
    for i, m in enumerate(anchors):
        start = m.start()
        window_end = start + config.footnote_context_chars
        if i + 1 < len(anchors):
            window_end = min(window_end, anchors[i + 1].start())
        if not FOOTNOTE_CONTEXT_RE.search(text, start, window_end):
            continue
        return Ok(Match(
            type=FOOTNOTE,
            number=footnote.marker,
            start_index=start,
            end_index=_span_end(
                text, start, len(footnote.content) + config.footnote_end_padding,
            ),
            content=footnote.content[:config.footnote_excerpt_chars],
        ))
    return _miss(FOOTNOTE, footnote.marker, bool(anchors), pattern.pattern)


def locate_definition(
    text: str,
    definition: Definition,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> Result[Match, AnchorMiss]:
    """First quoted occurrence of the defined term."""
    if not definition.term.strip():
        return _miss(DEFINITION, definition.definition_number, False, "")
    pattern = definition_pattern(definition.term)
    m = pattern.search(text)
    if m is None:
        return _miss(DEFINITION, definition.definition_number, False, pattern.pattern)
    start = m.start()
    return Ok(Match(
        type=DEFINITION,
        number=definition.definition_number,
        start_index=start,
        end_index=_span_end(text, start, config.definition_window),
        content=definition.term,
    ))


# ---------------------------------------------------------------------------
# Whole-document pass
# ---------------------------------------------------------------------------

def _candidates(
    text: str,
    content: ParsedContent,
    config: HighlightConfig,
) -> Iterator[Result[Match, AnchorMiss]]:
    """Per-entity results in fixed type order, input order within a type."""
    for r in content.recitals:
        yield locate_recital(text, r, config)
    for a in content.articles:
        yield locate_article(text, a, config)
    for x in content.annexes:
        yield locate_annex(text, x, config)
    for f in content.footnotes:
        yield locate_footnote(text, f, config)
    for c in content.chapter_numbers():
        yield locate_chapter(text, c, config)
    for d in content.definitions:
        yield locate_definition(text, d, config)


def _clip_overlaps(matches: list[Match]) -> list[Match]:
    """Bound each span by the next anchor so accepted spans never overlap.

    Input must be sorted by start_index. Anchors are kept as found; only
    the approximate ends shrink (never below the match's own start).
    """
    clipped: list[Match] = []
    for i, m in enumerate(matches):
        if i + 1 < len(matches):
            next_start = matches[i + 1].start_index
            if m.end_index > next_start:
                m = replace(m, end_index=max(m.start_index, next_start))
        clipped.append(m)
    return clipped


def resolve_anchors(
    text: str,
    content: ParsedContent,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> AnchorReport:
    """Locate every entity of *content* in *text*.

    Returns:
        AnchorReport whose matches are sorted ascending by start_index
        (stable: ties keep discovery order), hold at most one Match per
        (type, number), and are pairwise non-overlapping.
    """
    found: list[Match] = []
    misses_list: list[AnchorMiss] = []
    accepted: set[tuple[str, EntityNumber]] = set()
    for result in _candidates(text, content, config):
        match result:
            case Ok(value=m):
                # First valid occurrence wins; a duplicated entity resolves once.
                if m.key in accepted:
                    continue
                accepted.add(m.key)
                found.append(m)
            case Err(error=e):
                log.debug("no anchor for %s %s (%s)", e.type, e.number, e.reason)
                misses_list.append(e)

    found.sort(key=lambda m: m.start_index)
    matches = _clip_overlaps(found)

    if log.isEnabledFor(logging.DEBUG):
        summary = ", ".join(
            f"{t}={sum(1 for m in matches if m.type == t)}" for t in ENTITY_TYPES
        )
        log.debug(
            "resolved %d anchors, %d misses (%s)",
            len(matches), len(misses_list), summary,
        )
    return AnchorReport(matches=tuple(matches), misses=tuple(misses_list))


def find_matches(
    text: str,
    content: ParsedContent,
    config: HighlightConfig = DEFAULT_CONFIG,
) -> list[Match]:
    """Sorted, de-duplicated, non-overlapping matches for *content* in *text*."""
    return list(resolve_anchors(text, content, config).matches)
