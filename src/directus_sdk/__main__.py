"""`python -m directus_sdk` -> CLI."""

from __future__ import annotations

import sys

# UnicodeEncodeError en terminales Windows (cp1252) al pintar tablas Rich.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from directus_sdk.cli.main import run  # noqa: E402

if __name__ == "__main__":
    run()
