#!/usr/bin/env python3
"""Thin entrypoint for the records terminal client."""

from __future__ import annotations

from records_tui.app import main


if __name__ == "__main__":
    raise SystemExit(main())
