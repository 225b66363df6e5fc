"""Make the dusty modules importable from the tests.

dusty ships flat top-level modules (``scanner``, ``tree``, ``ui`` ...), so
the repository root has to be on ``sys.path`` when pytest runs from an
uninstalled checkout.
"""

from __future__ import annotations

import sys
from pathlib import Path


REPO_ROOT = str(Path(__file__).resolve().parent.parent)

if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)
