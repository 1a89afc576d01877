# backend/settings/dev.py
"""
PATH: backend/settings/dev.py

LOCAL DEVELOPMENT SETTINGS (also used by the test suite)

- sqlite unless DATABASE_URL says otherwise
- emails print to the console (approval/denial mails are visible in the runserver log)
- uploaded verification documents are served from /uploads/ by Django itself
- the React dev server on :3000 / :5173 may call the API with cookies
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import LOGGING, env

DEBUG = True

ALLOWED_HOSTS = env.list("ALLOWED_HOSTS", default=["localhost", "127.0.0.1", "testserver"])

_local_frontends = ["http://localhost:3000", "http://localhost:5173"]
CORS_ALLOWED_ORIGINS = env.list("CORS_ALLOWED_ORIGINS", default=_local_frontends)
CSRF_TRUSTED_ORIGINS = env.list("CSRF_TRUSTED_ORIGINS", default=_local_frontends)
CORS_ALLOW_CREDENTIALS = True

EMAIL_BACKEND = env("EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")

# Lifecycle decisions are the interesting part while developing
LOGGING["loggers"]["listings"]["level"] = env("LISTINGS_LOG_LEVEL", default="DEBUG")
