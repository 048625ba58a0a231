"""
Import Binding Resolution.

Determines which local identifier a file binds to an export of
styled-components. The resolver scans the file's top-level import
declarations from recognized library paths and applies, per specifier:

1.  ``import { styled } from ...``: the binding becomes ``"styled"``.
2.  ``import x from ...``: the binding becomes ``x``.
3.  ``import { <name> as x } from ...``: the binding becomes ``x``.
4.  ``import * as x from ...``: the binding becomes ``x``.

Rules 1, 2 and 4 apply whatever symbol is queried, and later matches overwrite
earlier ones. A file that binds the library through ``require()`` starts from
``"styled"`` (for ``default``) or the symbol name itself.
"""

import logging
from typing import Optional

from styled_detectors.analysis.registry import is_valid_top_level_import
from styled_detectors.analysis.state import FileContext
from styled_detectors.tree.nodes import ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier
from styled_detectors.tree.visitor import iter_import_declarations


def import_local_name(name: str, ctx: FileContext, bypass_cache: bool = False) -> Optional[str]:
  """
  Resolves the local identifier bound to a styled-components export.

  Args:
      name: Export to look up: ``"default"`` for the ``styled`` constructor,
          or a helper name such as ``"css"``.
      ctx: The file being analysed.
      bypass_cache: Recompute the binding and overwrite the cached entry.

  Returns:
      The local identifier, or None if the file does not bind the export.
  """
  state = ctx.state
  state.stats.lookups += 1
  cache_key = (name, ctx.filename)

  if not bypass_cache and cache_key in state.local_names:
    state.stats.cache_hits += 1
    return state.local_names[cache_key]

  state.stats.scans += 1

  local_name: Optional[str] = None
  if ctx.styled_required:
    local_name = "styled" if name == "default" else name

  for declaration in iter_import_declarations(ctx.program):
    if not is_valid_top_level_import(declaration.source.value, ctx):
      continue

    for specifier in declaration.specifiers:
      if isinstance(specifier, ImportSpecifier) and specifier.imported_name == "styled":
        local_name = "styled"

      if isinstance(specifier, ImportDefaultSpecifier):
        local_name = specifier.local.name

      if isinstance(specifier, ImportSpecifier) and specifier.imported_name == name:
        local_name = specifier.local.name

      if isinstance(specifier, ImportNamespaceSpecifier):
        local_name = specifier.local.name

  state.local_names[cache_key] = local_name
  logging.debug(f"Resolved '{name}' in {ctx.filename} -> {local_name!r}")

  return local_name
