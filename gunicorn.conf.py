"""
Gunicorn Configuration

Uvicorn workers serving gold_analytics.main:app.
"""

import multiprocessing
import os

bind = os.getenv("BIND", f"0.0.0.0:{os.getenv('API_PORT', '8000')}")

workers = int(os.getenv("WORKERS", multiprocessing.cpu_count() + 1))
worker_class = "uvicorn.workers.UvicornWorker"
max_requests = 5000
max_requests_jitter = 500
timeout = int(os.getenv("WORKER_TIMEOUT", 120))
graceful_timeout = 30
keepalive = 5

proc_name = "gold-analytics-api"

# Request logging is done by the app middleware
errorlog = "-"
accesslog = None
loglevel = os.getenv("LOG_LEVEL", "info").lower()


def post_fork(server, worker):
    server.log.info("Worker spawned (pid: %s)", worker.pid)
