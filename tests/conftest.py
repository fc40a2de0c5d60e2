"""Pytest configuration shared by all test suites"""

import sys
from pathlib import Path

# Make the src/ layout importable without an editable install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))
