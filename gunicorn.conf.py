"""Gunicorn configuration file.

Usage:
    gunicorn -c gunicorn.conf.py studio_admin.wsgi:app

Credentials are resolved by studio_admin.config.settings in each worker
(priority: /run/secrets > environment > .env). A worker that cannot load them
exits, and gunicorn stops instead of serving requests without them.
"""
import os
from pathlib import Path

bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"
workers = int(os.environ.get("GUNICORN_WORKERS", "2"))
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "60"))
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()


def post_fork(server, worker):
    """Report where the worker's credentials will come from."""
    secrets_dir = Path("/run/secrets")
    if secrets_dir.exists() and secrets_dir.is_dir():
        secret_files = [path.name for path in secrets_dir.glob("*") if path.is_file()]
        if secret_files:
            worker.log.info(f"Found {len(secret_files)} secrets in /run/secrets: {', '.join(sorted(secret_files))}")
            return

    missing = [
        name
        for name in ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET", "FIREBASE_DATABASE_URL")
        if not os.environ.get(name)
    ]
    if missing:
        worker.log.warning(f"Not set in environment (will try .env): {', '.join(missing)}")


def worker_int(worker):
    worker.log.info("Worker received INT or QUIT signal")
