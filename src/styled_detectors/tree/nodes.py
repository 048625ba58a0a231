"""
JavaScript Syntax Tree Model.

This module defines the closed set of node variants the detectors operate on.
It mirrors the subset of the Babel/ESTree grammar that matters when looking for
styled-components imports and tags:

1.  **Expressions**: ``Identifier``, ``MemberExpression``, ``CallExpression``,
    ``ArrowFunctionExpression``, ``TaggedTemplateExpression`` and literals.
2.  **Statements**: ``BlockStatement``, ``ExpressionStatement`` and
    ``VariableDeclaration`` (with its ``VariableDeclarator`` children).
3.  **Modules**: ``Program``, ``ImportDeclaration`` and the three specifier kinds.

Any other ESTree node type is represented by ``OpaqueNode``, which keeps its
children reachable for traversal but never matches a detector.

Every node receives a ``node_id`` at construction time. Caches key on this id
instead of on object identity, so a tree re-hydrated from JSON gets fresh ids.
"""

import itertools
from dataclasses import dataclass, field
from typing import List, Optional, Union

_NODE_IDS = itertools.count(1)


def _next_node_id() -> int:
  return next(_NODE_IDS)


@dataclass(eq=False)
class Node:
  """
  Base class for all syntax tree nodes.

  Equality and hashing are identity based; two structurally identical nodes are
  still distinct tags.
  """

  node_id: int = field(default_factory=_next_node_id, init=False, repr=False)
  """Stable identifier assigned when the node is created."""

  line: Optional[int] = field(default=None, init=False, repr=False)
  """1-based source line, when the loader knows it."""

  @property
  def kind(self) -> str:
    """The ESTree type name of this node (e.g. 'MemberExpression')."""
    return type(self).__name__


# --- Expressions ---


@dataclass(eq=False)
class Identifier(Node):
  name: str


@dataclass(eq=False)
class StringLiteral(Node):
  value: str


@dataclass(eq=False)
class TemplateLiteral(Node):
  quasis: List[str] = field(default_factory=list)
  expressions: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class MemberExpression(Node):
  """
  Property access, ``object.property`` or ``object[property]``.
  """

  object: Node
  property: Node
  computed: bool = False

  @property
  def property_name(self) -> Optional[str]:
    """
    The statically known name of the accessed property.

    Returns:
        The identifier name for ``a.b``, the literal value for ``a["b"]``,
        or None when the key is only known at runtime (``a[b]``).
    """
    if not self.computed and isinstance(self.property, Identifier):
      return self.property.name
    if self.computed and isinstance(self.property, StringLiteral):
      return self.property.value
    return None


@dataclass(eq=False)
class CallExpression(Node):
  callee: Node
  arguments: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class TaggedTemplateExpression(Node):
  tag: Node
  quasi: TemplateLiteral = field(default_factory=TemplateLiteral)


@dataclass(eq=False)
class ArrowFunctionExpression(Node):
  """
  Arrow function. ``body`` is a ``BlockStatement`` or a bare expression.
  """

  params: List[Node] = field(default_factory=list)
  body: Optional[Node] = None


# --- Statements ---


@dataclass(eq=False)
class BlockStatement(Node):
  body: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class ExpressionStatement(Node):
  expression: Node


@dataclass(eq=False)
class VariableDeclarator(Node):
  id: Node
  init: Optional[Node] = None


@dataclass(eq=False)
class VariableDeclaration(Node):
  declarations: List[VariableDeclarator] = field(default_factory=list)
  kind_keyword: str = "const"


# --- Modules ---


@dataclass(eq=False)
class ImportDefaultSpecifier(Node):
  local: Identifier


@dataclass(eq=False)
class ImportNamespaceSpecifier(Node):
  local: Identifier


@dataclass(eq=False)
class ImportSpecifier(Node):
  """
  Named import clause, ``{ imported as local }``.
  """

  imported: Union[Identifier, StringLiteral]
  local: Identifier

  @property
  def imported_name(self) -> str:
    """The exported name, whether written as an identifier or a string."""
    if isinstance(self.imported, StringLiteral):
      return self.imported.value
    return self.imported.name


ImportSpecifierLike = Union[ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier]


@dataclass(eq=False)
class ImportDeclaration(Node):
  source: StringLiteral
  specifiers: List[ImportSpecifierLike] = field(default_factory=list)


@dataclass(eq=False)
class Program(Node):
  body: List[Node] = field(default_factory=list)


@dataclass(eq=False)
class OpaqueNode(Node):
  """
  Any ESTree node outside the modelled subset.

  Attributes:
      node_type: The original ESTree ``type`` string.
      children: Child nodes, in source order, so traversal still reaches
          nested expressions (e.g. tags inside an ``ExportNamedDeclaration``).
  """

  node_type: str
  children: List[Node] = field(default_factory=list)

  @property
  def kind(self) -> str:
    return self.node_type
