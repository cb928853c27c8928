"""Presentation helpers for search results: sorting, paging, citation text, form options."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

from nkp_search.numerals import ascii_to_devanagari, roman_to_int
from nkp_search.search.filters import row_date_key
from nkp_search.taxonomy import Taxonomy, load_taxonomy

SORT_ASC = "asc"
SORT_DESC = "desc"

# column -> (display label, sort key extractor)
SORTABLE_COLUMNS: Dict[str, tuple] = {
    "decision_no": ("निर्णय नं.", lambda r: roman_to_int(_text(r, "decision_no"))),
    "case_no": ("मुद्दा नं.", lambda r: roman_to_int(_text(r, "case_no"))),
    "title": ("विषय/मुद्दा", lambda r: _text(r, "title") or None),
    "decision_date": ("फैसला मिति", row_date_key),
    "ijlas_name": ("इजलास", lambda r: _text(r, "ijlas_name") or None),
}

NKP_PARTS = (
    ("nkp_volume", "भाग"),
    ("nkp_year", "साल"),
    ("nkp_month", "महिना"),
    ("nkp_issue", "अंक"),
)

# Gregorian -> Bikram Sambat year offset used for the year picker
BS_YEAR_OFFSET = 57
YEAR_PICKER_SPAN = 80


def _text(row: Mapping[str, Any], key: str) -> str:
    value = row.get(key)
    return "" if value is None else str(value).strip()


def sort_results(results: Sequence[Mapping[str, Any]], column: Optional[str],
                 direction: str = SORT_ASC) -> List[Mapping[str, Any]]:
    """Stable sort by one of SORTABLE_COLUMNS; rows lacking a value go last."""
    if not column:
        return list(results)
    if column not in SORTABLE_COLUMNS:
        raise ValueError(f"Unsortable column: {column}")
    if direction not in (SORT_ASC, SORT_DESC):
        raise ValueError(f"Invalid sort direction: {direction}")
    extract: Callable[[Mapping[str, Any]], Any] = SORTABLE_COLUMNS[column][1]
    keyed = [(extract(r), r) for r in results]
    present = [t for t in keyed if t[0] is not None]
    missing = [r for k, r in keyed if k is None]
    present.sort(key=lambda t: t[0], reverse=(direction == SORT_DESC))
    return [r for _, r in present] + missing


@dataclass
class Page:
    items: List[Mapping[str, Any]]
    page: int
    page_size: int
    total: int
    pages: int


def paginate(results: Sequence[Mapping[str, Any]], page: int = 1, page_size: int = 20) -> Page:
    if page_size < 1:
        raise ValueError("page_size must be >= 1")
    total = len(results)
    pages = max(1, math.ceil(total / page_size))
    page = min(max(1, page), pages)
    start = (page - 1) * page_size
    return Page(items=list(results[start:start + page_size]), page=page, page_size=page_size, total=total, pages=pages)


def format_nkp_details(row: Mapping[str, Any]) -> str:
    """'भाग 64, साल 2079, अंक 3' from whichever NKP columns are filled, else '-'."""
    parts = [f"{label} {_text(row, key)}" for key, label in NKP_PARTS if _text(row, key)]
    return ", ".join(parts) if parts else "-"


def current_bs_year(today: Optional[date] = None) -> int:
    return (today or date.today()).year + BS_YEAR_OFFSET


def picker_options(taxonomy: Optional[Taxonomy] = None, today: Optional[date] = None) -> Dict[str, Any]:
    """Dropdown options for the search form, numbers in Devanagari digits."""
    tax = taxonomy or load_taxonomy()
    top = current_bs_year(today)
    return {
        "case_types": [c.label for c in tax.categories],
        "case_names": {c.label: [n.label for n in c.names] for c in tax.categories},
        "benches": list(tax.benches),
        "verdicts": list(tax.verdicts),
        "years": [ascii_to_devanagari(y) for y in range(top - YEAR_PICKER_SPAN + 1, top + 1)],
        "months": [ascii_to_devanagari(m) for m in range(1, 13)],
        "days": [ascii_to_devanagari(d) for d in range(1, 33)],
        "nkp_issues": [ascii_to_devanagari(i) for i in range(1, 13)],
        "sortable_columns": [{"key": k, "label": v[0]} for k, v in SORTABLE_COLUMNS.items()],
    }
