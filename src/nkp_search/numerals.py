"""Numeral and Bikram Sambat date helpers.

The NKP dataset mixes Devanagari digits, ASCII digits and Roman numerals
(case/decision numbers). These helpers turn all of them into plain integers
or comparable keys:
 - digits_to_ascii('२०७९') -> '2079'
 - roman_to_int('XIV') -> 14
 - parse_bs_date('२०७९.०३.१५') -> BSDate(2079, 3, 15)
 - date_key(2079, 3, 15) -> 20790315

None of them raise on malformed input; they return '' or None instead.
"""
from __future__ import annotations

import re
from typing import NamedTuple, Optional

DEVANAGARI_DIGITS = "०१२३४५६७८९"
_TO_ASCII = str.maketrans(DEVANAGARI_DIGITS, "0123456789")
_TO_DEVANAGARI = str.maketrans("0123456789", DEVANAGARI_DIGITS)

ROMAN_VALUES = {"I": 1, "V": 5, "X": 10, "L": 50, "C": 100, "D": 500, "M": 1000}

MIN_BS_YEAR = 1900
MAX_BS_YEAR = 2200
MAX_BS_DAY = 32

_DATE_SEPARATORS = re.compile(r"[\s./-]+")
_LEADING_INT = re.compile(r"^[+-]?\d+")


class BSDate(NamedTuple):
    year: int
    month: int
    day: int

    def key(self) -> int:
        return self.year * 10000 + self.month * 100 + self.day


def digits_to_ascii(value: Optional[str]) -> str:
    """Map Devanagari digits to ASCII; everything else passes through."""
    if not value:
        return ""
    return str(value).translate(_TO_ASCII)


def ascii_to_devanagari(value) -> str:
    if value is None:
        return ""
    return str(value).translate(_TO_DEVANAGARI)


def parse_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer after digit normalization.

    '१४' -> 14, ' 07 ' -> 7, '12abc' -> 12, 'abc' -> None.
    """
    text = digits_to_ascii(value).strip()
    m = _LEADING_INT.match(text)
    if not m:
        return None
    return int(m.group(0))


def roman_to_int(value: Optional[str]) -> Optional[int]:
    """Decode a Roman numeral; None when empty, invalid or non-positive."""
    if not value or not isinstance(value, str):
        return None
    text = value.strip().upper()
    if not text:
        return None
    total = 0
    prev = 0
    for ch in reversed(text):
        current = ROMAN_VALUES.get(ch)
        if current is None:
            return None
        if current < prev:
            total -= current
        else:
            total += current
        prev = current
    if total <= 0:
        return None
    return total


def _plausible(year: int, month: int, day: int) -> bool:
    return (MIN_BS_YEAR <= year <= MAX_BS_YEAR
            and 1 <= month <= 12
            and 1 <= day <= MAX_BS_DAY)


def parse_bs_date(value: Optional[str]) -> Optional[BSDate]:
    if not value or not isinstance(value, str):
        return None
    text = digits_to_ascii(value.strip())
    if not text:
        return None
    parts = _DATE_SEPARATORS.split(text)
    if len(parts) != 3:
        return None
    try:
        year, month, day = (int(p) for p in parts)
    except ValueError:
        return None
    if not _plausible(year, month, day):
        return None
    return BSDate(year, month, day)


def date_key(year: Optional[int], month: Optional[int], day: Optional[int]) -> Optional[int]:
    """Comparable YYYYMMDD integer, or None for missing/implausible parts."""
    parts = (year, month, day)
    # bool is an int subclass but never a valid date component
    if any(p is None or isinstance(p, bool) or not isinstance(p, int) for p in parts):
        return None
    if not _plausible(year, month, day):  # type: ignore[arg-type]
        return None
    return BSDate(year, month, day).key()  # type: ignore[arg-type]


__all__ = [
    "BSDate", "DEVANAGARI_DIGITS", "ROMAN_VALUES",
    "digits_to_ascii", "ascii_to_devanagari", "parse_int",
    "roman_to_int", "parse_bs_date", "date_key",
]
