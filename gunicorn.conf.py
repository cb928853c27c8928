import os
import sys

# Add src directory to Python path so 'nkp_search' package can be found
sys.path.append(os.path.join(os.getcwd(), 'src'))

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Searches are CPU-bound over an in-memory table; scale with workers, not threads.
workers = int(os.environ.get('GUNICORN_WORKERS', '2'))
threads = int(os.environ.get('GUNICORN_THREADS', '2'))
worker_class = "gthread"
worker_tmp_dir = "/dev/shm"

# Each worker keeps its own dataset cache (DATASET_CACHE_TTL)
preload_app = False
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get('GUNICORN_LOG_LEVEL', 'info')
# Remote CSV fetches are bounded by DATASET_FETCH_TIMEOUT
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '60'))
graceful_timeout = 30
keepalive = 5
