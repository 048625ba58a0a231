"""
Tag Detectors.

Predicates deciding whether an expression denotes one of the styled-components
tag constructors. Every predicate is total: a node of an unexpected shape is
simply not a match.

The ``styled`` check peels modifier chains one layer at a time, so all of the
following are recognized when ``styled`` is the default import::

    styled.div``
    styled(Button)``
    styled.div.attrs({})``
    styled(Button).attrs({}).withConfig({})``

Files that bind the library with ``require()`` write ``sc.default.div`` or
``sc.default(Button)`` instead; those shapes are matched against
``FileContext.styled_required``.
"""

import logging
from typing import Iterable, Optional

from styled_detectors.analysis.imports import import_local_name
from styled_detectors.analysis.state import FileContext
from styled_detectors.enums import HELPER_KINDS, PURE_HELPER_KINDS, TagKind
from styled_detectors.tree.nodes import (
  ArrowFunctionExpression,
  BlockStatement,
  CallExpression,
  Identifier,
  MemberExpression,
  Node,
  VariableDeclaration,
)


def _is_identifier(node: Optional[Node], name: Optional[str]) -> bool:
  return name is not None and isinstance(node, Identifier) and node.name == name


def _property_identifier(node: MemberExpression) -> Optional[str]:
  """Name of an identifier key; string keys such as ``sc["default"]`` have none."""
  if isinstance(node.property, Identifier):
    return node.property.name
  return None


def _is_require_default(node: Optional[Node], ctx: FileContext) -> bool:
  """Matches ``<required>.default``."""
  return (
    isinstance(node, MemberExpression)
    and _property_identifier(node) == "default"
    and _is_identifier(node.object, ctx.styled_required)
  )


def _iife_callee(node: Node) -> Optional[Node]:
  """
  Extracts the wrapped tag call from a closure wrapper.

  Static property hoisting rewrites ``styled.div`` into
  ``(() => { const _Foo = styled.div(...); ...; return _Foo; })()``.
  Only a block body whose first statement declares a call result qualifies.
  """
  if not isinstance(node, ArrowFunctionExpression) or not isinstance(node.body, BlockStatement):
    return None
  if not node.body.body:
    return None
  statement = node.body.body[0]
  if not isinstance(statement, VariableDeclaration) or not statement.declarations:
    return None
  init = statement.declarations[0].init
  if not isinstance(init, CallExpression):
    return None
  return init.callee


def is_styled(node: Node, ctx: FileContext, include_iife: bool = False) -> bool:
  """
  Checks whether a node is the ``styled`` constructor or a chain built on it.

  Args:
      node: The tag expression (e.g. the ``tag`` of a tagged template).
      ctx: The file being analysed.
      include_iife: Also see through closure wrappers produced by earlier passes.

  Returns:
      True if the node resolves to the ``styled`` constructor.
  """
  if include_iife:
    callee = _iife_callee(node)
    if callee is not None and is_styled(callee, ctx):
      return True

  if isinstance(node, CallExpression):
    callee = node.callee
    if isinstance(callee, MemberExpression) and _property_identifier(callee) != "default":
      # sc.default.attrs(...)
      if _is_require_default(callee.object, ctx):
        return True
      # styled.div.attrs(...) / styled(Comp).withConfig(...)
      return is_styled(callee.object, ctx)
    if isinstance(callee, CallExpression):
      # styled.div.attrs({})(...)
      return is_styled(callee, ctx)

  state = ctx.state
  if state.is_known_styled(node):
    state.stats.memo_hits += 1
    return True

  matched = (
    (isinstance(node, MemberExpression) and _is_identifier(node.object, import_local_name("default", ctx)))
    or (isinstance(node, CallExpression) and _is_identifier(node.callee, import_local_name("default", ctx)))
    or (
      ctx.styled_required is not None
      and isinstance(node, MemberExpression)
      and _is_require_default(node.object, ctx)
    )
    or (ctx.styled_required is not None and isinstance(node, CallExpression) and _is_require_default(node.callee, ctx))
  )

  if matched:
    state.remember_styled(node)
    logging.debug(f"Styled tag #{node.node_id} ({node.kind}) in {ctx.filename}")
  return bool(matched)


def _is_helper_identifier(node: Node, ctx: FileContext, export_name: str) -> bool:
  return isinstance(node, Identifier) and node.name == import_local_name(export_name, ctx)


def is_css_helper(node: Node, ctx: FileContext) -> bool:
  """True if ``node`` is the local binding of ``css``."""
  return _is_helper_identifier(node, ctx, "css")


def is_create_global_style_helper(node: Node, ctx: FileContext) -> bool:
  """True if ``node`` is the local binding of ``createGlobalStyle``."""
  return _is_helper_identifier(node, ctx, "createGlobalStyle")


def is_inject_global_helper(node: Node, ctx: FileContext) -> bool:
  """True if ``node`` is the local binding of ``injectGlobal``."""
  return _is_helper_identifier(node, ctx, "injectGlobal")


def is_keyframes_helper(node: Node, ctx: FileContext) -> bool:
  """True if ``node`` is the local binding of ``keyframes``."""
  return _is_helper_identifier(node, ctx, "keyframes")


def is_with_theme_helper(node: Node, ctx: FileContext) -> bool:
  """True if ``node`` is the local binding of ``withTheme``."""
  return _is_helper_identifier(node, ctx, "withTheme")


_PREDICATES = {
  TagKind.CSS: is_css_helper,
  TagKind.KEYFRAMES: is_keyframes_helper,
  TagKind.WITH_THEME: is_with_theme_helper,
  TagKind.CREATE_GLOBAL_STYLE: is_create_global_style_helper,
  TagKind.INJECT_GLOBAL: is_inject_global_helper,
}


def matches_kind(kind: TagKind, node: Node, ctx: FileContext, include_iife: bool = False) -> bool:
  """
  Dispatches to the predicate of a single tag kind.

  Args:
      kind: The constructor to test for.
      node: The candidate expression.
      ctx: The file being analysed.
      include_iife: Forwarded to ``is_styled``; helpers ignore it.

  Returns:
      True if the node denotes ``kind``.
  """
  if kind is TagKind.STYLED:
    return is_styled(node, ctx, include_iife)
  return _PREDICATES[kind](node, ctx)


def matches_any(kinds: Iterable[TagKind], node: Node, ctx: FileContext) -> bool:
  """True if the node denotes any of ``kinds``; evaluation stops at the first match."""
  return any(matches_kind(kind, node, ctx) for kind in kinds)


def is_helper(node: Node, ctx: FileContext) -> bool:
  """True for ``css``, ``keyframes`` and ``withTheme``."""
  return matches_any(_ordered(HELPER_KINDS), node, ctx)


def is_pure_helper(node: Node, ctx: FileContext) -> bool:
  """True for ``css``, ``keyframes``, ``createGlobalStyle`` and ``withTheme``."""
  return matches_any(_ordered(PURE_HELPER_KINDS), node, ctx)


def classify_tag(node: Node, ctx: FileContext, include_iife: bool = False) -> Optional[TagKind]:
  """
  Names the constructor a node denotes.

  ``styled`` is tested first, then the helpers in declaration order of
  ``TagKind``.

  Args:
      node: The candidate expression.
      ctx: The file being analysed.
      include_iife: Forwarded to ``is_styled``.

  Returns:
      The matching TagKind, or None.
  """
  for kind in TagKind:
    if matches_kind(kind, node, ctx, include_iife):
      return kind
  return None


def _ordered(kinds: Iterable[TagKind]):
  # frozensets have no stable order; keep TagKind declaration order
  members = set(kinds)
  return [kind for kind in TagKind if kind in members]
