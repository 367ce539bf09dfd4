"""
Gunicorn configuration for the company verification API
Run with: gunicorn company_review.main:app -c gunicorn.conf.py
"""
import os

# Server socket
bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

# Worker processes
# Review traffic is light (a handful of administrators), two workers are plenty
workers = int(os.getenv("GUNICORN_WORKERS", 2))
worker_class = "uvicorn.workers.UvicornWorker"
worker_connections = 100

# Worker lifecycle
max_requests = 1000  # Restart worker after 1000 requests (prevent memory leaks)
max_requests_jitter = 100  # Add randomness to prevent all workers restarting at once

# Timeouts
# Bulk actions write one row per company; give large batches room
timeout = int(os.getenv("GUNICORN_TIMEOUT", 60))
keepalive = 5
graceful_timeout = 30  # In-flight decisions finish before shutdown

# Process naming
proc_name = "company_review_api"

# Server mechanics
daemon = False  # Don't run as daemon (Docker handles this)
pidfile = None

# Logging (application logs go through structlog on stdout)
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(D)s'


def on_starting(server):
    """Called just before the master process is initialized."""
    server.log.info("Starting company verification API")


def worker_int(worker):
    """Called when a worker receives the SIGINT or SIGQUIT signal."""
    worker.log.info("Worker received INT or QUIT signal")
