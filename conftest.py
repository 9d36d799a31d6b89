"""
Root conftest.py for pytest configuration
"""

import sys
from pathlib import Path

# Make the src/ layout importable when the package is not installed.
SRC_PATH = Path(__file__).parent.absolute() / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))
