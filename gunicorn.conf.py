"""Gunicorn config for the SpendSight API (gunicorn spendsight.main:app)."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers; each loads its own copy of the transaction store.
# Tune via WEB_CONCURRENCY env var.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "2"))

# Projections are in-memory and fast; a long request means a huge payload.
timeout = 60

graceful_timeout = 30

# Keep-alive must exceed the upstream proxy keep-alive (commonly 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("SPENDSIGHT_LOG_LEVEL", "info").lower()
