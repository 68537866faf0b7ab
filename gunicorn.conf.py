"""Gunicorn configuration for production deployment.

Run with: gunicorn -c gunicorn.conf.py adprojection.main:app
"""

import multiprocessing
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
# Projection runs are CPU-bound for long horizons, so stay close to core count
workers = int(os.getenv("GUNICORN_WORKERS", min(multiprocessing.cpu_count() + 1, 8)))
worker_class = "uvicorn.workers.UvicornWorker"
max_requests = 5000
max_requests_jitter = 500

# Timeout configuration
timeout = 60  # Matches PROJECTION_LOCK_TTL_SECONDS
graceful_timeout = 30
keepalive = 5

# Process naming
proc_name = "adprojection-api"

# Logging
accesslog = "-"  # stdout
errorlog = "-"  # stderr
loglevel = os.getenv("GUNICORN_LOG_LEVEL", "info")
