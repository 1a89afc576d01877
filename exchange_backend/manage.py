#!/usr/bin/env python
"""
PATH: manage.py

Fire Suite Exchange management entrypoint.

- Unset DJANGO_SETTINGS_MODULE (or the bare "backend.settings" package,
  which configures nothing) resolves to backend.settings.dev.
- Production sets backend.settings.prod explicitly and is left alone.

Useful commands:
  python manage.py migrate
  python manage.py seed_suites
  python manage.py seed_users --password <pw>
  python manage.py set_user_role <email> APPROVER
  python manage.py ensure_superuser          (reads AUTO_ADMIN_* env)
"""

from __future__ import annotations

import os
import sys

DEFAULT_SETTINGS = "backend.settings.dev"


def _settings_module() -> str:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()
    if not current or current == "backend.settings":
        return DEFAULT_SETTINGS
    return current


def main() -> None:
    os.environ["DJANGO_SETTINGS_MODULE"] = _settings_module()

    try:
        from django.core.management import execute_from_command_line
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Install the project (pip install -e .) "
            "inside an activated virtual environment."
        ) from exc

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
