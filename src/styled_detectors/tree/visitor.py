"""
Tree Traversal.

Provides a depth-first walker with LibCST-style dispatch: a visitor defines
``visit_<Kind>`` (return ``False`` to skip children) and ``leave_<Kind>``
methods, where ``<Kind>`` is the ESTree type name of the node.
"""

from dataclasses import fields
from typing import Iterator, List, Optional

from styled_detectors.tree.nodes import ImportDeclaration, Node, Program


def iter_children(node: Node) -> Iterator[Node]:
  """
  Yields the direct children of a node in field (source) order.

  Args:
      node: The parent node.

  Yields:
      Child nodes. ``None`` fields and non-node values are skipped.
  """
  for f in fields(node):
    value = getattr(node, f.name)
    if isinstance(value, Node):
      yield value
    elif isinstance(value, list):
      for item in value:
        if isinstance(item, Node):
          yield item


class TreeVisitor:
  """
  Base visitor. Subclasses implement any ``visit_X`` / ``leave_X`` they need.
  """

  def on_visit(self, node: Node) -> bool:
    """
    Dispatches to ``visit_<Kind>``.

    Returns:
        bool: False if the children of ``node`` should not be visited.
    """
    method = getattr(self, f"visit_{node.kind}", None)
    if method is None:
      return True
    return method(node) is not False

  def on_leave(self, node: Node) -> None:
    """Dispatches to ``leave_<Kind>``."""
    method = getattr(self, f"leave_{node.kind}", None)
    if method is not None:
      method(node)


def walk(node: Node, visitor: TreeVisitor) -> None:
  """
  Walks the subtree rooted at ``node`` depth-first.

  Args:
      node: Root of the traversal.
      visitor: Receives enter/leave callbacks for every reached node.
  """
  if visitor.on_visit(node):
    for child in iter_children(node):
      walk(child, visitor)
  visitor.on_leave(node)


class ImportDeclarationCollector(TreeVisitor):
  """
  Collects top-level import declarations without descending into statements.
  """

  def __init__(self) -> None:
    self.declarations: List[ImportDeclaration] = []

  def on_visit(self, node: Node) -> bool:
    if isinstance(node, Program):
      return True
    if isinstance(node, ImportDeclaration):
      self.declarations.append(node)
    return False


def iter_import_declarations(program: Optional[Program]) -> Iterator[ImportDeclaration]:
  """
  Yields each top-level import declaration of a program exactly once.

  Args:
      program: The file root. ``None`` yields nothing.

  Yields:
      ImportDeclaration nodes in declaration order.
  """
  if program is None:
    return
  collector = ImportDeclarationCollector()
  walk(program, collector)
  yield from collector.declarations
