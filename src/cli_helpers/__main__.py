"""Allow ``python -m cli_helpers`` to run the demo CLI."""

from __future__ import annotations

from .cli import main

if __name__ == "__main__":
    raise SystemExit(main())
