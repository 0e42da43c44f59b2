import sys
from pathlib import Path

# Lets the tests import campus_signage from src/ without an installed package
project_root = Path(__file__).parent
src_path = project_root / "src"

if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))
