"""Search, filter and rank engine for the Nepal Kanoon Patrika case dataset."""

from nkp_search.exceptions import DataCorrupt, DataUnavailable, SearchDataError
from nkp_search.search.criteria import NormalizedCriteria, SearchCriteria, normalize_criteria
from nkp_search.search.engine import assemble_results, search, search_data

__version__ = "0.1.0"

__all__ = [
    "DataCorrupt",
    "DataUnavailable",
    "SearchDataError",
    "NormalizedCriteria",
    "SearchCriteria",
    "normalize_criteria",
    "assemble_results",
    "search",
    "search_data",
]
