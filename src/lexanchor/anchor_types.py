"""Core types for the anchor resolution engine.

Every layer shares these types. All span coordinates are char offsets into
the single raw source string of one analysis pass (never entity-relative).
All dataclasses use slots=True and are frozen: a pass never mutates its
inputs, and matches are recomputed rather than patched.

Type hierarchy:
  Ok[T] / Err[E]    — Strict algebraic Result type (per-entity outcome)
  Recital, Article, Annex, Footnote, Definition — parser-supplied entities
  ParsedContent     — Entity collections handed over by the parser
  StructureAnalysis — Opaque parser metadata, passed through for display
  Match             — Located anchor span of one entity
  AnchorMiss        — Typed NoMatchFound failure for one entity
  Segment           — Plain or highlighted slice of the source text
  SelectionState    — Currently selected (type, number); idle is None
"""

from __future__ import annotations

from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Result ADT: per-entity Ok/Err outcome
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success case of Result[T, E].

    Usage::

        result: Result[Match, AnchorMiss] = Ok(match)
        match result:
            case Ok(value=m): print(m.start_index)
            case Err(error=e): print(e.reason)
    """
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure case of Result[T, E].

    Preserves the typed failure reason. An entity the parser found but the
    matcher could not anchor is a useful signal ("0 of N detected"), not a
    silent None.
    """
    error: E


type Result[T, E] = Ok[T] | Err[E]


# ---------------------------------------------------------------------------
# Entity types
# ---------------------------------------------------------------------------

RECITAL = "recital"
ARTICLE = "article"
ANNEX = "annex"
FOOTNOTE = "footnote"
CHAPTER = "chapter"
DEFINITION = "definition"

# Fixed resolution order; also the display order of summaries.
ENTITY_TYPES: tuple[str, ...] = (
    RECITAL, ARTICLE, ANNEX, FOOTNOTE, CHAPTER, DEFINITION,
)

type EntityNumber = int | str


def check_entity_type(entity_type: str) -> str:
    """Return *entity_type* unchanged, or raise ValueError if unknown."""
    if entity_type not in ENTITY_TYPES:
        raise ValueError(
            f"Unknown entity type {entity_type!r}; "
            f"expected one of {', '.join(ENTITY_TYPES)}"
        )
    return entity_type


# ---------------------------------------------------------------------------
# Parser-supplied entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Recital:
    """A numbered preambular paragraph: "(12) Whereas ..."."""
    recital_number: int
    content: str


@dataclass(frozen=True, slots=True)
class Article:
    """A numbered operative provision."""
    article_number: int
    title: str
    content: str
    chapter_number: int | None = None


@dataclass(frozen=True, slots=True)
class Annex:
    """An appendix identified by a Roman numeral."""
    annex_number: int
    roman_numeral: str      # "IV"; may be "" when the parser only had a number
    title: str
    content: str


@dataclass(frozen=True, slots=True)
class Footnote:
    """A marker-referenced citation, usually an Official Journal reference."""
    marker: str             # "1", "*", "12a"
    content: str


@dataclass(frozen=True, slots=True)
class Definition:
    """A defined term from the definitions article."""
    definition_number: int
    term: str
    definition: str


@dataclass(frozen=True, slots=True)
class ParsedContent:
    """Entity collections produced by the upstream parser."""
    recitals: tuple[Recital, ...] = ()
    articles: tuple[Article, ...] = ()
    annexes: tuple[Annex, ...] = ()
    footnotes: tuple[Footnote, ...] = ()
    definitions: tuple[Definition, ...] = ()
    detected_language: str = "en"

    def chapter_numbers(self) -> tuple[int, ...]:
        """Distinct chapter numbers referenced by articles, in first-seen order."""
        seen: dict[int, None] = {}
        for a in self.articles:
            if a.chapter_number is not None:
                seen.setdefault(a.chapter_number, None)
        return tuple(seen)


@dataclass(frozen=True, slots=True)
class StructureAnalysis:
    """Parser metadata. Displayed alongside the preview; never matched on."""
    detected_language: str = "en"
    table_format: str = "none"          # "two-column" | "single-column" | "none"
    footnote_format: str = "none"       # "eurlex-link" | "numbered-paren" | "caret" | "none"
    adoption_line_index: int = -1
    first_article_index: int = -1
    first_annex_index: int = -1


# ---------------------------------------------------------------------------
# Matching output
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Match:
    """Located anchor of one entity in the source text.

    Ephemeral: recomputed whenever the text or the parsed content changes.

    Invariants (enforced in __post_init__):
        - start_index >= 0
        - end_index >= start_index
    """
    type: str               # one of ENTITY_TYPES
    number: EntityNumber    # recital/article/annex/chapter number, footnote marker
    start_index: int        # Char offset (inclusive) of the anchor
    end_index: int          # Char offset (exclusive), approximate entity end
    content: str            # Short excerpt for display

    def __post_init__(self) -> None:
        if self.start_index < 0:
            raise ValueError(
                f"Match.start_index must be >= 0, got {self.start_index}"
            )
        if self.end_index < self.start_index:
            raise ValueError(
                f"Match.end_index ({self.end_index}) must be >= "
                f"start_index ({self.start_index})"
            )

    @property
    def key(self) -> tuple[str, EntityNumber]:
        return (self.type, self.number)


@dataclass(frozen=True, slots=True)
class AnchorMiss:
    """Typed NoMatchFound failure. Non-fatal: the entity renders unhighlighted."""
    type: str
    number: EntityNumber
    reason: str             # "no_occurrence" | "rejected"
    attempted: str          # Pattern(s) tried, for diagnostics


@dataclass(frozen=True, slots=True)
class Segment:
    """Contiguous slice of the source text, plain or tagged with a Match."""
    text: str
    match: Match | None = None

    @property
    def is_highlight(self) -> bool:
        return self.match is not None


@dataclass(frozen=True, slots=True)
class SelectionState:
    """The currently selected entity. The idle state is represented by None."""
    type: str
    number: EntityNumber
