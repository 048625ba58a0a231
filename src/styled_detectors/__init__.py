"""
styled-detectors Package.

Static analysis for styled-components source transformations. Given the parsed
syntax tree of a JavaScript file it reports:

1.  which local identifier binds each library export (``styled``, ``css``,
    ``keyframes``, ...), across default, named, namespace and require-style
    imports;
2.  whether an expression is one of the library's tag constructors, seeing
    through modifier chains (``styled.div.attrs({})``) and closure wrappers
    produced by earlier passes.

Usage
-----

.. code-block:: python

    from styled_detectors import DetectorState, FileContext, import_local_name, is_styled
    from styled_detectors.tree import load_estree_file

    state = DetectorState()  # one per transformation run
    program = load_estree_file("Button.json")
    ctx = FileContext(filename="Button.js", program=program, state=state)

    import_local_name("default", ctx)  # e.g. 'styled'
    is_styled(tag_node, ctx)
"""

from styled_detectors.analysis import (
  DetectorState,
  DetectorStats,
  FileContext,
  classify_tag,
  import_local_name,
  is_create_global_style_helper,
  is_css_helper,
  is_helper,
  is_inject_global_helper,
  is_keyframes_helper,
  is_pure_helper,
  is_styled,
  is_valid_top_level_import,
  is_with_theme_helper,
)
from styled_detectors.config import DetectorConfig
from styled_detectors.enums import TagKind

__version__ = "0.0.1"

__all__ = [
  "DetectorConfig",
  "DetectorState",
  "DetectorStats",
  "FileContext",
  "TagKind",
  "__version__",
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
]
