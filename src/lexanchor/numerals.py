"""Roman numeral conversion for annex and chapter labels."""
from __future__ import annotations

import re

_ROMAN_VALUES: dict[str, int] = {
    "I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000,
}

_INT_TO_ROMAN: tuple[tuple[int, str], ...] = (
    (1000, "M"), (900, "CM"), (500, "D"), (400, "CD"),
    (100, "C"), (90, "XC"), (50, "L"), (40, "XL"),
    (10, "X"), (9, "IX"), (5, "V"), (4, "IV"), (1, "I"),
)

_ROMAN_RE = re.compile(r"[IVXLCDM]+", re.IGNORECASE)


def roman_to_int(s: str) -> int | None:
    """Convert a Roman numeral to int, or None if not recognised.

    Uses the additive/subtractive reading ("XIV" -> 14) without rejecting
    non-canonical forms ("IIII" -> 4); labels in regulation text are
    compared as written, this is only used to compare against numbers.
    """
    if not s or not _ROMAN_RE.fullmatch(s):
        return None
    upper = s.upper()
    total = 0
    for i, ch in enumerate(upper):
        value = _ROMAN_VALUES[ch]
        nxt = _ROMAN_VALUES[upper[i + 1]] if i + 1 < len(upper) else 0
        total += -value if value < nxt else value
    return total if total > 0 else None


def int_to_roman(n: int) -> str:
    """Canonical Roman numeral for 1 <= n <= 3999."""
    if not 1 <= n <= 3999:
        raise ValueError(f"Roman numerals cover 1..3999, got {n}")
    out: list[str] = []
    for value, symbol in _INT_TO_ROMAN:
        count, n = divmod(n, value)
        out.append(symbol * count)
    return "".join(out)
