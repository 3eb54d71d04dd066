"""CLI entry point for fetching SBP rate sheets."""

from __future__ import annotations

import sys

from sbp_fx.cli import main

if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(main())
