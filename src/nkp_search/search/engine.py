"""Search pipeline: exact/range filter -> fuzzy stages -> tagged results.

``search`` is a pure function of (criteria, rows, taxonomy). ``search_data``
loads the rows first, either from a source path/URL or through an injected
loader, and is the only place that touches I/O.
"""
from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from nkp_search.data.loader import DEFAULT_FETCH_TIMEOUT, Row, load_rows
from nkp_search.search.criteria import NormalizedCriteria, SearchCriteria, normalize_criteria
from nkp_search.search.filters import apply_exact_filters
from nkp_search.search.fuzzy import FuzzyOptions, apply_fuzzy_stages
from nkp_search.taxonomy import Taxonomy
from nkp_search.utils.performance import timed

logger = logging.getLogger(__name__)

ResultItem = Dict[str, Any]
CriteriaLike = Union[SearchCriteria, Mapping[str, Any], None]


def _numeric_id(value: object) -> Optional[Union[int, float]]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        num = float(text)
    except ValueError:
        return None
    if not math.isfinite(num):
        return None
    return int(num) if num.is_integer() else num


def assemble_results(rows: Sequence[Mapping[str, object]], started_at: Optional[float] = None) -> List[ResultItem]:
    """Copy each row and attach a ``resultId`` unique within this list.

    The row's own numeric ``id`` is used when it parses and has not been
    used already; otherwise ``temp_<start-ms>_<index>`` is synthesized.
    """
    started_ms = int((started_at if started_at is not None else time.time()) * 1000)
    seen = set()
    out: List[ResultItem] = []
    for index, row in enumerate(rows):
        rid: Union[int, float, str, None] = _numeric_id(row.get("id"))
        if rid is None or rid in seen:
            rid = f"temp_{started_ms}_{index}"
        seen.add(rid)
        item = dict(row)
        item["resultId"] = rid
        out.append(item)
    return out


def run_filters(rows: Sequence[Mapping[str, object]], normalized: NormalizedCriteria,
                options: FuzzyOptions = FuzzyOptions()) -> List[Mapping[str, object]]:
    with timed("Initial filtering (exact/range)", logger):
        intermediate = apply_exact_filters(rows, normalized)
    logger.info(f"Found {len(intermediate)} results after initial filtering")
    if not intermediate:
        return []
    return apply_fuzzy_stages(intermediate, normalized.free_text_terms, options)


def search(criteria: CriteriaLike, rows: Sequence[Mapping[str, object]],
           taxonomy: Union[Taxonomy, list, None] = None,
           options: FuzzyOptions = FuzzyOptions()) -> List[ResultItem]:
    started_at = time.time()
    with timed("Criteria preparation", logger):
        normalized = normalize_criteria(criteria, taxonomy)
    matched = run_filters(rows, normalized, options)
    results = assemble_results(matched, started_at)
    logger.info(f"Search complete. {len(results)} result(s) in {time.time() - started_at:.2f}s")
    return results


def search_data(criteria: CriteriaLike, source: Optional[str] = None,
                taxonomy: Union[Taxonomy, list, None] = None,
                loader: Optional[Callable[[], List[Row]]] = None,
                options: FuzzyOptions = FuzzyOptions(),
                timeout: float = DEFAULT_FETCH_TIMEOUT) -> List[ResultItem]:
    """Load the dataset, then search it.

    Raises DataUnavailable / DataCorrupt from the loader; nothing else escapes.
    """
    if loader is None:
        if not source:
            raise ValueError("search_data needs either a source or a loader")
        rows = load_rows(source, timeout=timeout)
    else:
        rows = loader()
    if not rows:
        logger.warning("Dataset has no rows; nothing to search")
        return []
    return search(criteria, rows, taxonomy, options)
