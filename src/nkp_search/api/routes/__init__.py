from nkp_search.api.routes.search import search_bp
from nkp_search.api.routes.monitoring import monitoring_bp

__all__ = ['search_bp', 'monitoring_bp']
