"""Convenience entry point to run the keyseal demo.

Allows starting the application with `python main.py` from the project root;
all arguments are passed through (try `python main.py --no-tui`).
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src/ directory is on sys.path so `import keyseal` works
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from keyseal.frontend.cli.app import main


if __name__ == "__main__":
    sys.exit(main())
