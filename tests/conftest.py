"""Make the checkout importable when gaze is not installed.

Tests import ``gaze`` from the repository root so a plain ``pytest`` run
works without ``pip install -e .``.
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = str(Path(__file__).resolve().parents[1])

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
