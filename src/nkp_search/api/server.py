import logging
from flask import Flask
from flask_cors import CORS
from flasgger import Swagger

from nkp_search.api import config, dependencies, observability
from nkp_search.api.routes import search_bp, monitoring_bp
from nkp_search.api.extensions import limiter

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger("api")

SWAGGER_TEMPLATE = {
    "info": {
        "title": "NKP Search API",
        "description": "Filter and rank Nepal Kanoon Patrika decisions",
        "version": config.APP_VERSION,
    }
}


def create_app(load_state: bool = True) -> Flask:
    observability.init_sentry()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = config.MAX_CONTENT_LENGTH
    # Devanagari text stays readable in responses
    app.json.ensure_ascii = False  # type: ignore[attr-defined]
    CORS(app)
    Swagger(app, template=SWAGGER_TEMPLATE)
    limiter.init_app(app)

    app.register_blueprint(search_bp)
    app.register_blueprint(monitoring_bp)
    observability.install(app)

    if load_state:
        dependencies.init_state()
    logger.info(f"[api] App ready (env={config.APP_ENV}, version={config.APP_VERSION})")
    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=True, port=5002, host="0.0.0.0")
