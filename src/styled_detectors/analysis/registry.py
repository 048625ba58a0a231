"""
Recognized Import Paths.

Module specifiers whose imports are treated as styled-components itself.
"""

from typing import Iterable, Tuple

from styled_detectors.analysis.state import FileContext

VALID_TOP_LEVEL_IMPORT_PATHS: Tuple[str, ...] = (
  "styled-components",
  "styled-components/no-tags",
  "styled-components/native",
  "styled-components/primitives",
)


def recognized_import_paths(extra: Iterable[str] = ()) -> Tuple[str, ...]:
  """
  Returns the built-in paths followed by any configured extras.

  Args:
      extra: Additional module specifiers (e.g. a re-exporting design system).

  Returns:
      Tuple of module specifiers, without duplicates.
  """
  return tuple(dict.fromkeys((*VALID_TOP_LEVEL_IMPORT_PATHS, *extra)))


def is_valid_top_level_import(source: str, ctx: FileContext) -> bool:
  """
  Checks whether an import source refers to the styling library.

  Args:
      source: The import declaration's module specifier.
      ctx: The file context carrying configured extra paths.

  Returns:
      True if the source is a built-in or configured library path.
  """
  return source in VALID_TOP_LEVEL_IMPORT_PATHS or source in ctx.top_level_import_paths
