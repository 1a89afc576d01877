# backend/settings/__init__.py
"""
Settings are split by environment and selected with DJANGO_SETTINGS_MODULE:

- backend.settings.dev   local development + tests
- backend.settings.prod  production (fails closed on missing secrets)

base.py holds everything shared. This package imports neither on purpose.
"""
