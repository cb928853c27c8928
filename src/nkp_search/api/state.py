from typing import Any, Dict, Optional
import threading
import time

from nkp_search.data.loader import CachedLoader
from nkp_search.search.fuzzy import FuzzyOptions
from nkp_search.taxonomy import Taxonomy

# Loaded on startup by dependencies.init_state()
taxonomy: Optional[Taxonomy] = None
loader: Optional[CachedLoader] = None
fuzzy_options: FuzzyOptions = FuzzyOptions()

# Search Stats (for monitoring)
stats_lock = threading.Lock()
search_stats: Dict[str, Any] = {
    'total_searches': 0,
    'empty_results': 0,
    'data_unavailable': 0,
    'data_corrupt': 0,
    'last_search_time': None,
    'avg_results': 0.0,
    '_results_sum': 0,
}

# Metrics
REQUEST_COUNT: Any = None
REQUEST_LATENCY: Any = None
SEARCHES_TOTAL: Any = None
RESULTS_COUNT: Any = None


def update_search_stats(result_count: Optional[int] = None, error_code: Optional[str] = None):
    """Update search statistics for monitoring."""
    with stats_lock:
        total = int(search_stats.get('total_searches') or 0) + 1
        search_stats['total_searches'] = total
        search_stats['last_search_time'] = time.time()

        if error_code in ('data_unavailable', 'data_corrupt'):
            search_stats[error_code] = int(search_stats.get(error_code) or 0) + 1
            return

        if result_count is not None:
            results_sum = int(search_stats.get('_results_sum') or 0) + result_count
            search_stats['_results_sum'] = results_sum
            ok = total - int(search_stats['data_unavailable']) - int(search_stats['data_corrupt'])
            search_stats['avg_results'] = results_sum / ok if ok > 0 else 0.0
            if result_count == 0:
                search_stats['empty_results'] = int(search_stats.get('empty_results') or 0) + 1
