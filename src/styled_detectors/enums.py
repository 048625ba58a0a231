"""
Enumerations for styled-detectors.

This module defines the tag constructors exported by styled-components and the
groupings the transformation passes query together.
"""

from enum import Enum


class TagKind(str, Enum):
  """
  Library-provided tag constructors.

  The value is the export name looked up in import declarations.
  """

  STYLED = "default"  # styled.div, styled(Comp)
  CSS = "css"
  KEYFRAMES = "keyframes"
  WITH_THEME = "withTheme"
  CREATE_GLOBAL_STYLE = "createGlobalStyle"
  INJECT_GLOBAL = "injectGlobal"

  @property
  def export_name(self) -> str:
    """The symbol passed to the import resolver."""
    return self.value


# Helpers whose template literals get minified/transpiled like styled tags.
HELPER_KINDS = frozenset((TagKind.CSS, TagKind.KEYFRAMES, TagKind.WITH_THEME))

# Helpers whose call results can be annotated as side-effect free.
PURE_HELPER_KINDS = frozenset(
  (
    TagKind.CSS,
    TagKind.KEYFRAMES,
    TagKind.CREATE_GLOBAL_STYLE,
    TagKind.WITH_THEME,
  )
)
