"""
Paths Command Handler.

Lists the module specifiers recognized as styled-components under the
current configuration.
"""

from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from styled_detectors.analysis.registry import VALID_TOP_LEVEL_IMPORT_PATHS, recognized_import_paths
from styled_detectors.config import DetectorConfig
from styled_detectors.utils.console import console, log_error


def handle_paths(import_paths: Optional[List[str]] = None) -> int:
  """
  Prints built-in and configured import paths.

  Args:
      import_paths: Extra specifiers given on the command line.

  Returns:
      int: Exit code.
  """
  try:
    config = DetectorConfig.load(top_level_import_paths=import_paths)
  except ValueError as e:
    log_error(escape(str(e)))
    return 1

  table = Table(title="Recognized Import Paths")
  table.add_column("Module", style="code")
  table.add_column("Source", style="dim")
  for module in recognized_import_paths(config.top_level_import_paths):
    origin = "built-in" if module in VALID_TOP_LEVEL_IMPORT_PATHS else "configured"
    table.add_row(module, origin)

  console.print(table)
  return 0
