"""Approximate-match narrowing over free-text columns.

Each free-text criterion (judge, petitioner, respondent, keyword) is a stage.
Stages run in a fixed order and each one filters the survivors of the
previous one, so free-text criteria combine as a logical AND.

Scores follow the 0 (exact) .. 1 (anything) convention: a column's distance
is ``1 - partial_ratio / 100``. A row survives a stage when at least one of
the stage's columns is within the threshold; its stage score is the product
of ``distance ** weight`` over the matching columns, with weights normalized
to sum to 1. Lower scores rank first.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from nkp_search.utils.performance import timed

logger = logging.getLogger(__name__)

FUZZY_SEARCH_THRESHOLD = 0.4
FUZZY_SEARCH_DISTANCE = 150
FUZZY_MIN_MATCH_LENGTH = 3

_EXACT_SCORE = sys.float_info.epsilon


@dataclass(frozen=True)
class FuzzyKey:
    name: str
    weight: float = 1.0


@dataclass(frozen=True)
class FuzzyOptions:
    threshold: float = FUZZY_SEARCH_THRESHOLD
    distance: int = FUZZY_SEARCH_DISTANCE
    min_match_length: int = FUZZY_MIN_MATCH_LENGTH
    ignore_location: bool = True


JUDGE_KEYS: Tuple[FuzzyKey, ...] = (FuzzyKey("judges"),)

PETITIONER_KEYS: Tuple[FuzzyKey, ...] = (
    FuzzyKey("petitioner", 1.0),
    FuzzyKey("title", 0.5),
    FuzzyKey("subject", 0.4),
)

RESPONDENT_KEYS: Tuple[FuzzyKey, ...] = (
    FuzzyKey("respondent", 1.0),
    FuzzyKey("title", 0.5),
    FuzzyKey("subject", 0.4),
)

KEYWORD_KEYS: Tuple[FuzzyKey, ...] = (
    FuzzyKey("judges", 0.9),
    FuzzyKey("petitioner", 1.0),
    FuzzyKey("respondent", 1.0),
    FuzzyKey("title", 0.7),
    FuzzyKey("subject", 0.6),
    FuzzyKey("lawyers", 0.5),
    FuzzyKey("mudda_type_text", 0.3),
    FuzzyKey("mudda_name_text", 0.4),
)

# Applied in this order; each stage narrows the previous stage's output.
STAGES: Tuple[Tuple[str, Tuple[FuzzyKey, ...]], ...] = (
    ("judge", JUDGE_KEYS),
    ("petitioner", PETITIONER_KEYS),
    ("respondent", RESPONDENT_KEYS),
    ("keyword", KEYWORD_KEYS),
)


def field_distance(term: str, value: Optional[object], options: FuzzyOptions) -> float:
    """0.0 for an exact substring hit, 1.0 for nothing in common."""
    if value is None:
        return 1.0
    text = str(value).strip().lower()
    if not text:
        return 1.0
    if not options.ignore_location:
        text = text[: options.distance + len(term)]
    # the term is always the needle; a shorter column is compared whole
    if len(text) < len(term):
        return 1.0 - fuzz.ratio(term, text) / 100.0
    return 1.0 - fuzz.partial_ratio(term, text) / 100.0


def score_row(term: str, row: Mapping[str, object], keys: Sequence[FuzzyKey],
              options: FuzzyOptions) -> Optional[float]:
    """Weighted stage score for a row, or None when no column matches."""
    total_weight = sum(k.weight for k in keys) or 1.0
    score = 1.0
    matched = False
    for key in keys:
        d = field_distance(term, row.get(key.name), options)
        if d > options.threshold:
            continue
        matched = True
        score *= max(d, _EXACT_SCORE) ** (key.weight / total_weight)
    return score if matched else None


def fuzzy_filter(term: Optional[str], rows: List[Mapping[str, object]], keys: Sequence[FuzzyKey],
                 options: FuzzyOptions = FuzzyOptions()) -> List[Mapping[str, object]]:
    """Keep rows that approximately match ``term``, best matches first.

    A term shorter than the minimum match length is no constraint at all:
    the rows come back unchanged.
    """
    term = (term or "").strip().lower()
    if len(term) < options.min_match_length or not rows:
        return rows
    with timed(f"Fuzzy filtering for {term[:20]!r}", logger):
        scored = []
        for idx, row in enumerate(rows):
            s = score_row(term, row, keys, options)
            if s is not None:
                scored.append((s, idx, row))
        scored.sort(key=lambda t: (t[0], t[1]))
    logger.debug(f" -> {len(scored)} fuzzy match(es) of {len(rows)}")
    return [row for _, _, row in scored]


def apply_fuzzy_stages(rows: List[Mapping[str, object]], terms: Mapping[str, str],
                       options: FuzzyOptions = FuzzyOptions()) -> List[Mapping[str, object]]:
    """Run the judge -> petitioner -> respondent -> keyword stages in order."""
    result = rows
    for stage, keys in STAGES:
        if not result:
            break
        result = fuzzy_filter(terms.get(stage, ""), result, keys, options)
    return result


def options_from(threshold: Optional[float] = None, distance: Optional[int] = None,
                 min_match_length: Optional[int] = None) -> FuzzyOptions:
    """Default options with any given overrides applied."""
    overrides = {k: v for k, v in {
        "threshold": threshold,
        "distance": distance,
        "min_match_length": min_match_length,
    }.items() if v is not None}
    return replace(FuzzyOptions(), **overrides)
