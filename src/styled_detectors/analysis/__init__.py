"""
Static Analysis Package.

Answers, for a single parsed file, which local names bind the styled-components
exports and which expressions denote its tag constructors.

Modules:
    - ``state``: Run-scoped caches and the per-file context.
    - ``registry``: Module specifiers recognized as the library.
    - ``imports``: Local name resolution from import declarations.
    - ``detectors``: Tag predicates (``is_styled``, ``is_css_helper``, ...).
    - ``scanner``: Whole-file tag reporting built on the detectors.
"""

from styled_detectors.analysis.detectors import (
  classify_tag,
  is_create_global_style_helper,
  is_css_helper,
  is_helper,
  is_inject_global_helper,
  is_keyframes_helper,
  is_pure_helper,
  is_styled,
  is_with_theme_helper,
  matches_any,
  matches_kind,
)
from styled_detectors.analysis.imports import import_local_name
from styled_detectors.analysis.registry import (
  VALID_TOP_LEVEL_IMPORT_PATHS,
  is_valid_top_level_import,
  recognized_import_paths,
)
from styled_detectors.analysis.state import DetectorState, DetectorStats, FileContext

__all__ = [
  "DetectorState",
  "DetectorStats",
  "FileContext",
  "VALID_TOP_LEVEL_IMPORT_PATHS",
  "classify_tag",
  "import_local_name",
  "is_create_global_style_helper",
  "is_css_helper",
  "is_helper",
  "is_inject_global_helper",
  "is_keyframes_helper",
  "is_pure_helper",
  "is_styled",
  "is_valid_top_level_import",
  "is_with_theme_helper",
  "matches_any",
  "matches_kind",
  "recognized_import_paths",
]
