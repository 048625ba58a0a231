"""
Tag Usage Scanner.

Walks a whole file and reports every expression that the detectors classify as
a styled-components tag. Two positions are inspected:

1.  The ``tag`` of each tagged template (``styled.div`...```, ``css`...```).
2.  The callee of each call, for the ``styled`` constructor only: object
    styles (``styled.div({...})``) and closure wrappers ``(() => {...})()``
    left by earlier passes.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from styled_detectors.analysis.detectors import classify_tag, is_styled
from styled_detectors.analysis.imports import import_local_name
from styled_detectors.analysis.state import FileContext
from styled_detectors.enums import TagKind
from styled_detectors.tree.nodes import CallExpression, Identifier, MemberExpression, Node, TaggedTemplateExpression
from styled_detectors.tree.visitor import TreeVisitor, walk


@dataclass
class TagMatch:
  """A classified tag occurrence."""

  kind: TagKind
  node: Node
  expression: str
  line: Optional[int] = None


def describe(node: Node) -> str:
  """
  Renders an expression compactly for reports.

  Args:
      node: The expression node.

  Returns:
      A JS-like summary, e.g. ``styled.div.attrs(...)`` or ``styled(Button)``.
  """
  if isinstance(node, Identifier):
    return node.name
  if isinstance(node, MemberExpression):
    name = node.property_name
    if name is None:
      return f"{describe(node.object)}[...]"
    if node.computed:
      return f'{describe(node.object)}["{name}"]'
    return f"{describe(node.object)}.{name}"
  if isinstance(node, CallExpression):
    args = ", ".join(describe(a) if isinstance(a, (Identifier, MemberExpression)) else "..." for a in node.arguments)
    return f"{describe(node.callee)}({args})"
  return f"<{node.kind}>"


class TagScanner(TreeVisitor):
  """
  Collects tag matches for a single file.

  Attributes:
      matches (List[TagMatch]): Matches in traversal order, one per node.
  """

  def __init__(self, ctx: FileContext):
    """
    Args:
        ctx: The context of the file being scanned.
    """
    self.ctx = ctx
    self.matches: List[TagMatch] = []
    self._seen: set = set()

  def visit_TaggedTemplateExpression(self, node: TaggedTemplateExpression) -> None:
    if node.tag.node_id not in self._seen:
      self._record(node.tag, classify_tag(node.tag, self.ctx), line=node.line)

  def visit_CallExpression(self, node: CallExpression) -> None:
    # Helpers are only tags in template position; calls are checked for
    # object-style `styled.div({...})` and closure wrappers.
    if node.callee.node_id not in self._seen and is_styled(node.callee, self.ctx, include_iife=True):
      self._record(node.callee, TagKind.STYLED, line=node.line)

  def _record(self, node: Node, kind: Optional[TagKind], line: Optional[int]) -> None:
    if kind is None:
      return
    self._seen.add(node.node_id)
    self.matches.append(TagMatch(kind=kind, node=node, expression=describe(node), line=node.line or line))


def scan_tags(ctx: FileContext) -> List[TagMatch]:
  """
  Classifies every tag position in a file.

  Args:
      ctx: The file to scan.

  Returns:
      List of matches in source order.
  """
  scanner = TagScanner(ctx)
  walk(ctx.program, scanner)
  return scanner.matches


def resolve_bindings(ctx: FileContext) -> Dict[TagKind, Optional[str]]:
  """
  Resolves the local binding of every library export for a file.

  Args:
      ctx: The file to inspect.

  Returns:
      Mapping of TagKind to local identifier (None when unbound).
  """
  return {kind: import_local_name(kind.export_name, ctx) for kind in TagKind}
