import time
import logging
from flask import Blueprint, request, jsonify
from flasgger import swag_from
from werkzeug.exceptions import BadRequest
from pydantic import ValidationError

from nkp_search.api import config, state, dependencies, models, observability
from nkp_search.api.extensions import limiter
from nkp_search.exceptions import SearchDataError
from nkp_search.search.engine import search
from nkp_search.search.results import format_nkp_details, paginate, picker_options, sort_results

logger = logging.getLogger("api")

search_bp = Blueprint('search', __name__)


@search_bp.route("/api/search", methods=["POST"])
@limiter.limit(config.SEARCH_RATE_LIMIT)
@swag_from({
    'tags': ['search'],
    'consumes': ['application/json'],
    'parameters': [{
        'name': 'body', 'in': 'body', 'required': True,
        'schema': {'type': 'object', 'properties': {
            'criteria': {'type': 'object'},
            'sort_column': {'type': 'string'},
            'sort_direction': {'type': 'string', 'enum': ['asc', 'desc']},
            'page': {'type': 'integer'},
            'page_size': {'type': 'integer'},
            'lang': {'type': 'string', 'enum': ['ne', 'en']},
        }}
    }],
    'responses': {200: {'description': 'OK'}, 400: {'description': 'Validation failed'},
                  500: {'description': 'Dataset corrupt'}, 503: {'description': 'Dataset unavailable'}}
})
def search_cases():
    auth = dependencies.require_api_key()
    if auth:
        return auth

    raw = request.get_json(silent=True)
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise BadRequest("Body must be a JSON object")
    try:
        parsed = models.SearchRequest(**raw)
    except ValidationError as ve:
        return jsonify({"error": "validation_failed", "details": ve.errors(include_url=False)}), 400

    started = time.time()
    try:
        rows = dependencies.get_rows()
        results = search(parsed.criteria, rows, state.taxonomy, state.fuzzy_options) if rows else []
    except SearchDataError as e:
        state.update_search_stats(error_code=e.code)
        observability.record_search(e.code)
        logger.error(f"[api] Search failed: {e.detail}")
        return dependencies.data_error_response(e, parsed.lang)

    ordered = sort_results(results, parsed.sort_column, parsed.sort_direction)
    page = paginate(ordered, parsed.page, parsed.page_size)
    state.update_search_stats(result_count=len(results))
    observability.record_search("ok", len(results))

    items = [{**item, "nkp_details": format_nkp_details(item)} for item in page.items]
    return jsonify({
        "results": items,
        "total": page.total,
        "page": page.page,
        "page_size": page.page_size,
        "pages": page.pages,
        "timing_ms": int((time.time() - started) * 1000),
    })


@search_bp.route("/api/search/options", methods=["GET"])
@swag_from({'tags': ['search'], 'responses': {200: {'description': 'Dropdown options for the search form'}}})
def search_options():
    return jsonify(picker_options(state.taxonomy))
