"""Romanized Nepali -> Devanagari transliteration for free-text search terms.

Users often type names in Roman script ("ram bahadur") while the dataset is in
Devanagari. Transliteration is best effort: any failure falls back to the
trimmed input so a search never fails because of it.
"""
from __future__ import annotations

import functools
import logging
import re
from typing import Callable, Optional

from indic_transliteration import sanscript
from indic_transliteration.sanscript import transliterate

logger = logging.getLogger(__name__)

MIN_TRANSLITERATION_LENGTH = 3

_DEVANAGARI = re.compile(r"[ऀ-ॿ]")
# Nepali words rarely end in a halanta; ITRANS adds one after a final consonant.
_TRAILING_VIRAMA = re.compile(r"्(?=\s|$)")


def contains_devanagari(text: Optional[str]) -> bool:
    return bool(text) and bool(_DEVANAGARI.search(str(text)))


@functools.lru_cache(maxsize=512)
def to_devanagari(text: str, scheme: str = sanscript.ITRANS) -> str:
    out = transliterate(text.lower(), scheme, sanscript.DEVANAGARI)
    return _TRAILING_VIRAMA.sub("", out)


def safe_transliterate(
    text: Optional[str],
    min_length: int = MIN_TRANSLITERATION_LENGTH,
    transliterator: Callable[[str], str] = to_devanagari,
) -> str:
    """Transliterate a search term when it looks like Romanized Nepali.

    Returns '' for empty input, the trimmed text when it is shorter than
    ``min_length`` or already contains Devanagari, and the trimmed text again
    if the transliterator raises or returns nothing usable.
    """
    if not text:
        return ""
    trimmed = str(text).strip()
    if len(trimmed) < min_length or contains_devanagari(trimmed):
        return trimmed
    try:
        out = transliterator(trimmed)
    except Exception as e:
        logger.warning(f"Transliteration failed for {trimmed!r}: {e}")
        return trimmed
    if not isinstance(out, str) or not out.strip():
        logger.warning(f"Transliteration returned nothing for {trimmed!r}")
        return trimmed
    return out.strip()


__all__ = ["MIN_TRANSLITERATION_LENGTH", "contains_devanagari", "to_devanagari", "safe_transliterate"]
