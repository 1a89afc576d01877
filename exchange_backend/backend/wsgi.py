# backend/wsgi.py
"""
WSGI entrypoint for the Fire Suite Exchange API (gunicorn / uwsgi).

Production sets DJANGO_SETTINGS_MODULE=backend.settings.prod; anything
else falls back to the dev settings.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "backend.settings.dev")

application = get_wsgi_application()
