"""Test package initialisation for the Long Range trainer."""

from pathlib import Path
import sys

# Pytest can change the working directory during collection, which makes the
# flat top-level modules (``ballistics``, ``session`` ...) unimportable unless
# the project root is on ``sys.path``.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))
