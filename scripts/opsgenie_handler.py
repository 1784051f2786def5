#!/usr/bin/env python3
"""Run the OpsGenie handler from a source checkout.

Usage::

    cat event.json | python scripts/opsgenie_handler.py --team ops --auth $TOKEN

    # Try it against a saved event and a local settings file
    python scripts/opsgenie_handler.py --event-file event.json --config handler.yaml
"""

from __future__ import annotations

import os
import sys

# Ensure project root is on sys.path so `src` is importable.
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from src.handler.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
