import sys
from pathlib import Path

# Add the repository root to the Python path so tests can import the src package
root_path = str(Path(__file__).parent.parent.parent)
if root_path not in sys.path:
    sys.path.append(root_path)
