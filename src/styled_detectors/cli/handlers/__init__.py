from .paths import handle_paths
from .scan import handle_scan

__all__ = [
  "handle_paths",
  "handle_scan",
]
