"""WSGI entrypoint (for Gunicorn): gunicorn -c gunicorn.conf.py studio_admin.wsgi:app"""
from studio_admin.flask_app import create_app

app = create_app()
