"""
Entry point for module execution (``python -m styled_detectors``).

This module delegates execution to the CLI handler in ``styled_detectors.cli.__main__``.
"""

import sys
from styled_detectors.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
