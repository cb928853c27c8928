import logging
from typing import Iterable, List, Mapping, Optional

from nkp_search.numerals import parse_bs_date, parse_int, roman_to_int
from nkp_search.search.criteria import NormalizedCriteria

logger = logging.getLogger(__name__)

# criterion attribute -> row column, compared after Roman numeral decoding
ROMAN_FIELDS = (
    ("case_no", "case_no"),
    ("decision_no", "decision_no"),
)

# criterion attribute -> row column, compared as integers after digit normalization
NUMERIC_FIELDS = (
    ("nkp_volume", "nkp_volume"),
    ("nkp_year", "nkp_year"),
    ("nkp_month", "nkp_month"),
    ("nkp_issue", "nkp_issue"),
)

# criterion attribute -> row column, compared as trimmed strings
CATEGORY_FIELDS = (
    ("case_type_value", "mudda_type_value"),
    ("case_name_value", "mudda_name_value"),
    ("bench", "ijlas_name"),
    ("verdict", "faisala_type_value"),
)


def _cell(row: Mapping[str, object], key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value).strip()


def row_date_key(row: Mapping[str, object]) -> Optional[int]:
    parsed = parse_bs_date(_cell(row, "decision_date"))
    return parsed.key() if parsed else None


def matches_exact(row: Mapping[str, object], criteria: NormalizedCriteria) -> bool:
    """True when the row satisfies every active non-free-text constraint."""
    for attr, column in ROMAN_FIELDS:
        wanted = getattr(criteria, attr)
        if wanted is not None and roman_to_int(_cell(row, column)) != wanted:
            return False

    for attr, column in NUMERIC_FIELDS:
        wanted = getattr(criteria, attr)
        if wanted is not None and parse_int(_cell(row, column)) != wanted:
            return False

    for attr, column in CATEGORY_FIELDS:
        wanted = getattr(criteria, attr)
        if wanted and _cell(row, column) != wanted:
            return False

    if criteria.has_date_range:
        key = row_date_key(row)
        if key is None:
            return False
        if criteria.date_from is not None and key < criteria.date_from:
            return False
        if criteria.date_to is not None and key > criteria.date_to:
            return False

    return True


def apply_exact_filters(rows: Iterable[Mapping[str, object]], criteria: NormalizedCriteria) -> List[Mapping[str, object]]:
    kept = []
    for row in rows:
        if not row:
            continue
        if matches_exact(row, criteria):
            kept.append(row)
    logger.debug(f"Exact/range filter kept {len(kept)} row(s)")
    return kept
