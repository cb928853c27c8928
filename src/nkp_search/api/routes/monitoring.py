import platform
from flask import Blueprint, jsonify, Response

from nkp_search.api import config, state, dependencies
from nkp_search.taxonomy import taxonomy_metadata
from nkp_search.transliteration import to_devanagari
from nkp_search.utils.performance import get_cache_stats

monitoring_bp = Blueprint('monitoring', __name__)


@monitoring_bp.route("/metrics", methods=["GET"])
def metrics():
    from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)


@monitoring_bp.route("/version", methods=["GET"])
def version():
    return jsonify({
        "version": config.APP_VERSION,
        "env": config.APP_ENV,
        "python": platform.python_version(),
        "taxonomy": taxonomy_metadata(state.taxonomy) if state.taxonomy else None,
    })


@monitoring_bp.route("/api/version", methods=["GET"])
def api_version():
    return version()


@monitoring_bp.route("/api/health", methods=["GET"])
def health():
    """Loads the dataset once; 200 when it is readable, 503 otherwise."""
    try:
        rows = dependencies.get_rows()
        return jsonify({"status": "ok", "rows": len(rows)}), 200
    except Exception as e:
        return jsonify({"status": "error", "detail": str(e)}), 503


@monitoring_bp.route("/api/health/ready", methods=["GET"])
def health_ready():
    """Readiness probe - checks taxonomy and dataset source are configured."""
    dataset = state.loader.describe() if state.loader else None
    checks = {
        'taxonomy_loaded': state.taxonomy is not None,
        'dataset_configured': dataset is not None and bool(dataset['exists']),
    }
    all_ready = all(checks.values())
    return jsonify({
        "ready": all_ready,
        "checks": checks,
        "dataset": dataset,
    }), 200 if all_ready else 503


@monitoring_bp.route("/api/health/live", methods=["GET"])
def health_live():
    """Liveness probe - minimal check that service is running."""
    return jsonify({"alive": True}), 200


@monitoring_bp.route("/api/stats/search", methods=["GET"])
def search_stats():
    """Return search statistics for monitoring."""
    with state.stats_lock:
        stats = state.search_stats.copy()
    # Remove internal tracking fields
    stats.pop('_results_sum', None)
    stats['transliteration_cache'] = get_cache_stats(to_devanagari)
    stats['dataset_cached_rows'] = state.loader.cached_rows if state.loader else 0
    return jsonify(stats)


@monitoring_bp.route('/api/dataset/reload', methods=['POST'])
def reload_dataset():
    """Drop the cached dataset so the next search re-reads it."""
    auth = dependencies.require_api_key()
    if auth:
        return auth
    if state.loader is None:
        return jsonify({'status': 'error', 'detail': 'No dataset loader configured'}), 404
    state.loader.invalidate()
    return jsonify({'status': 'ok', 'source': state.loader.source}), 200
