import logging
from typing import List, Optional
from flask import request, jsonify
from nkp_search.api import config, state
from nkp_search.data.loader import CachedLoader, Row
from nkp_search.exceptions import DataUnavailable, SearchDataError
from nkp_search.search.fuzzy import options_from
from nkp_search.taxonomy import load_taxonomy, taxonomy_metadata

logger = logging.getLogger("api")

SUPPORTED_LANGUAGES = ("ne", "en")


def load_search_taxonomy():
    state.taxonomy = load_taxonomy(config.TAXONOMY_PATH)
    meta = taxonomy_metadata(state.taxonomy)
    logger.info(f"[api] Loaded taxonomy {meta['version']} ({meta['num_categories']} case types)")


def init_loader(source: Optional[str] = None, ttl: Optional[float] = None):
    state.loader = CachedLoader(
        source or config.DATASET_SOURCE,
        ttl_seconds=config.DATASET_CACHE_TTL if ttl is None else ttl,
        timeout=config.DATASET_FETCH_TIMEOUT,
    )
    state.fuzzy_options = options_from(
        threshold=config.FUZZY_THRESHOLD,
        distance=config.FUZZY_DISTANCE,
        min_match_length=config.FUZZY_MIN_MATCH_LENGTH,
    )
    logger.info(f"[api] Dataset source {state.loader.source} (cache ttl {state.loader.ttl_seconds}s)")


def init_state():
    load_search_taxonomy()
    init_loader()


def get_rows() -> List[Row]:
    if state.loader is None:
        init_loader()
    return state.loader.load()  # type: ignore[union-attr]


def require_api_key():
    if config.API_KEY:
        key = request.headers.get("X-API-Key", "")
        if key != config.API_KEY:
            return jsonify({"error": "Unauthorized"}), 401
    return None


def resolve_language(lang: Optional[str] = None) -> str:
    """Explicit lang, then Accept-Language, then the configured default."""
    if lang in SUPPORTED_LANGUAGES:
        return lang  # type: ignore[return-value]
    try:
        best = request.accept_languages.best_match(SUPPORTED_LANGUAGES)
    except RuntimeError:
        best = None
    return best or config.DEFAULT_LANGUAGE


def data_error_response(err: SearchDataError, lang: Optional[str] = None):
    """Distinct, localized message per failure category; never partial results."""
    status = 503 if isinstance(err, DataUnavailable) else 500
    body = {
        "error": err.code,
        "message": err.user_message(resolve_language(lang)),
    }
    if err.reason:
        body["reason"] = err.reason
    if isinstance(err, DataUnavailable) and err.status is not None:
        body["upstream_status"] = err.status
    return jsonify(body), status
