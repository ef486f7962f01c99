#!/usr/bin/env python
"""
PATH: manage.py

Management entrypoint for the bookkeeping backend.

Settings selection:
- An explicit DJANGO_SETTINGS_MODULE pointing at a concrete module wins
  (production sets backend.settings.prod).
- `manage.py test` falls back to backend.settings.test (in-memory SQLite).
- Everything else falls back to backend.settings.dev.

"backend.settings" on its own is a package that loads nothing, so it is
treated the same as unset.
"""

from __future__ import annotations

import os
import sys

SETTINGS_PACKAGE = "backend.settings"


def _default_settings_module(argv: list[str]) -> str:
    if len(argv) > 1 and argv[1] == "test":
        return f"{SETTINGS_PACKAGE}.test"
    return f"{SETTINGS_PACKAGE}.dev"


def _ensure_settings_module(argv: list[str]) -> None:
    current = (os.environ.get("DJANGO_SETTINGS_MODULE") or "").strip()
    if not current or current == SETTINGS_PACKAGE:
        os.environ["DJANGO_SETTINGS_MODULE"] = _default_settings_module(argv)


def main() -> None:
    _ensure_settings_module(sys.argv)

    from django.core.management import execute_from_command_line

    execute_from_command_line(sys.argv)


if __name__ == "__main__":
    main()
