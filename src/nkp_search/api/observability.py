"""Request logging, Prometheus metrics and Sentry wiring for the API."""
import json
import logging
import time
import uuid
from datetime import datetime, timezone

from flask import Flask, Response, g, request
from prometheus_client import Counter, Histogram
import sentry_sdk
from sentry_sdk.integrations.flask import FlaskIntegration

from nkp_search.api import config, state

logger = logging.getLogger("api")

RESULT_BUCKETS = (0, 1, 5, 10, 25, 50, 100, 250, 1000)


def register_metrics():
    """Create the metric handles once per process."""
    if state.REQUEST_COUNT is not None:
        return
    try:
        state.REQUEST_COUNT = Counter('nkp_search_requests_total', 'Total HTTP requests',
                                      ['method', 'endpoint', 'status'])
        state.REQUEST_LATENCY = Histogram('nkp_search_request_latency_seconds', 'Request latency in seconds',
                                          ['endpoint'])
        state.SEARCHES_TOTAL = Counter('nkp_search_searches_total', 'Searches served by outcome', ['outcome'])
        state.RESULTS_COUNT = Histogram('nkp_search_results_count', 'Results per search', buckets=RESULT_BUCKETS)
    except ValueError:
        # already registered by an earlier import of this module
        logger.debug("Prometheus metrics already registered")


def init_sentry():
    if not config.SENTRY_DSN:
        return
    try:
        sentry_sdk.init(
            dsn=config.SENTRY_DSN,
            integrations=[FlaskIntegration()],
            traces_sample_rate=config.SENTRY_TRACES_SAMPLE_RATE,
            environment=config.APP_ENV,
            release=config.APP_VERSION,
        )
        logger.info("Sentry initialized")
    except Exception as _e:
        logger.error(f"Sentry init failed: {_e}")


def _start_request():
    g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    g.started_at = time.time()
    g.endpoint_for_metrics = request.endpoint or request.path


def _finish_request(response: Response) -> Response:
    duration = time.time() - getattr(g, 'started_at', time.time())
    logger.info(json.dumps({
        "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "lvl": "info",
        "request_id": getattr(g, 'request_id', None),
        "method": request.method,
        "path": request.path,
        "status": response.status_code,
        "duration_ms": int(duration * 1000),
        "remote_addr": request.headers.get('X-Forwarded-For', request.remote_addr),
        "ua": request.headers.get('User-Agent'),
    }, ensure_ascii=False))

    endpoint = getattr(g, 'endpoint_for_metrics', request.path)
    if state.REQUEST_COUNT is not None:
        state.REQUEST_COUNT.labels(request.method, endpoint, response.status_code).inc()
    if state.REQUEST_LATENCY is not None:
        state.REQUEST_LATENCY.labels(endpoint).observe(duration)
    if getattr(g, 'request_id', None):
        response.headers["X-Request-ID"] = g.request_id
    return response


def record_search(outcome: str, result_count=None):
    """Bump the per-outcome counter and, for served searches, the result histogram."""
    if state.SEARCHES_TOTAL is not None:
        state.SEARCHES_TOTAL.labels(outcome).inc()
    if result_count is not None and state.RESULTS_COUNT is not None:
        state.RESULTS_COUNT.observe(result_count)


def install(app: Flask):
    register_metrics()
    app.before_request(_start_request)
    app.after_request(_finish_request)
