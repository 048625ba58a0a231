"""
JavaScript Source Loader.

Parses JavaScript (and JSX) source text with tree-sitter and converts the
concrete syntax tree into the node model of ``styled_detectors.tree.nodes``,
so files can be analysed without running a Babel toolchain first.

Tree-sitter and ESTree name things differently. The converter maps the
modelled subset onto the ESTree shapes the detectors expect:

- ``call_expression`` whose arguments are a ``template_string`` becomes a
  ``TaggedTemplateExpression``;
- ``subscript_expression`` becomes a computed ``MemberExpression``;
- ``parenthesized_expression`` is unwrapped, as Babel does by default.

Everything else becomes an ``OpaqueNode`` carrying the tree-sitter type name.
Syntax errors do not raise; the damaged region is kept as an opaque ``ERROR``
node and the rest of the file is still analysed.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from tree_sitter import Node as SyntaxNode
from tree_sitter import Parser
from tree_sitter_language_pack import get_language

from styled_detectors.tree.estree import TreeLoadError
from styled_detectors.tree.nodes import (
  ArrowFunctionExpression,
  BlockStatement,
  CallExpression,
  ExpressionStatement,
  Identifier,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  MemberExpression,
  Node,
  OpaqueNode,
  Program,
  StringLiteral,
  TaggedTemplateExpression,
  TemplateLiteral,
  VariableDeclaration,
  VariableDeclarator,
)

SOURCE_SUFFIXES = frozenset((".js", ".jsx", ".mjs", ".cjs"))
"""File extensions parsed as JavaScript source."""

_parser: Optional[Parser] = None


def _get_parser() -> Parser:
  global _parser
  if _parser is None:
    _parser = Parser(get_language("javascript"))
  return _parser


class _Converter:
  """
  Builds model nodes from a tree-sitter tree.

  Conversion dispatches on the syntax node type to ``_on_<type>`` methods;
  types without a method become ``OpaqueNode``.
  """

  def __init__(self, source: bytes) -> None:
    self._source = source

  def text(self, node: SyntaxNode) -> str:
    return self._source[node.start_byte : node.end_byte].decode("utf-8")

  def convert(self, node: Optional[SyntaxNode]) -> Optional[Node]:
    if node is None or node.type == "comment":
      return None
    builder = getattr(self, f"_on_{node.type}", None)
    result = builder(node) if builder is not None else self._opaque(node)
    if result is not None and result.line is None:
      result.line = node.start_point[0] + 1
    return result

  def children(self, node: Optional[SyntaxNode]) -> List[Node]:
    if node is None:
      return []
    out = []
    for child in node.named_children:
      converted = self.convert(child)
      if converted is not None:
        out.append(converted)
    return out

  def _first(self, node: SyntaxNode) -> Optional[Node]:
    children = self.children(node)
    return children[0] if children else None

  def _opaque(self, node: SyntaxNode) -> OpaqueNode:
    return OpaqueNode(node_type=node.type, children=self.children(node))

  def _identifier(self, node: Optional[SyntaxNode]) -> Identifier:
    converted = self.convert(node)
    if isinstance(converted, Identifier):
      return converted
    return Identifier(name="")

  # --- Expressions ---

  def _on_identifier(self, node: SyntaxNode) -> Identifier:
    return Identifier(name=self.text(node))

  _on_property_identifier = _on_identifier

  def _on_string(self, node: SyntaxNode) -> StringLiteral:
    # Raw text between the quotes; escapes are kept as written.
    return StringLiteral(value=self.text(node)[1:-1])

  def _on_template_string(self, node: SyntaxNode) -> TemplateLiteral:
    quasis = []
    expressions: List[Node] = []
    start = node.start_byte + 1
    for child in node.named_children:
      if child.type != "template_substitution":
        continue
      quasis.append(self._source[start : child.start_byte].decode("utf-8"))
      expression = self._first(child)
      if expression is not None:
        expressions.append(expression)
      start = child.end_byte
    quasis.append(self._source[start : node.end_byte - 1].decode("utf-8"))
    return TemplateLiteral(quasis=quasis, expressions=expressions)

  def _on_parenthesized_expression(self, node: SyntaxNode) -> Optional[Node]:
    return self._first(node)

  def _on_member_expression(self, node: SyntaxNode) -> Node:
    obj = self.convert(node.child_by_field_name("object"))
    prop = self.convert(node.child_by_field_name("property"))
    if obj is None or prop is None:
      return self._opaque(node)
    return MemberExpression(object=obj, property=prop)

  def _on_subscript_expression(self, node: SyntaxNode) -> Node:
    obj = self.convert(node.child_by_field_name("object"))
    index = self.convert(node.child_by_field_name("index"))
    if obj is None or index is None:
      return self._opaque(node)
    return MemberExpression(object=obj, property=index, computed=True)

  def _on_call_expression(self, node: SyntaxNode) -> Node:
    callee = self.convert(node.child_by_field_name("function"))
    arguments = node.child_by_field_name("arguments")
    if callee is None:
      return self._opaque(node)
    if arguments is not None and arguments.type == "template_string":
      return TaggedTemplateExpression(tag=callee, quasi=self._on_template_string(arguments))
    return CallExpression(callee=callee, arguments=self.children(arguments))

  def _on_arrow_function(self, node: SyntaxNode) -> ArrowFunctionExpression:
    single = node.child_by_field_name("parameter")
    params = [self._identifier(single)] if single is not None else self.children(node.child_by_field_name("parameters"))
    return ArrowFunctionExpression(params=params, body=self.convert(node.child_by_field_name("body")))

  # --- Statements ---

  def _on_statement_block(self, node: SyntaxNode) -> BlockStatement:
    return BlockStatement(body=self.children(node))

  def _on_expression_statement(self, node: SyntaxNode) -> Node:
    expression = self._first(node)
    if expression is None:
      return self._opaque(node)
    return ExpressionStatement(expression=expression)

  def _on_variable_declarator(self, node: SyntaxNode) -> Node:
    target = self.convert(node.child_by_field_name("name"))
    if target is None:
      return self._opaque(node)
    return VariableDeclarator(id=target, init=self.convert(node.child_by_field_name("value")))

  def _on_lexical_declaration(self, node: SyntaxNode) -> VariableDeclaration:
    declarators = [d for d in self.children(node) if isinstance(d, VariableDeclarator)]
    keyword = node.children[0].type if node.children else "const"
    return VariableDeclaration(declarations=declarators, kind_keyword=keyword)

  _on_variable_declaration = _on_lexical_declaration

  # --- Modules ---

  def _on_import_statement(self, node: SyntaxNode) -> ImportDeclaration:
    source = self.convert(node.child_by_field_name("source"))
    if not isinstance(source, StringLiteral):
      source = StringLiteral(value="")

    specifiers = []
    for clause in node.named_children:
      if clause.type != "import_clause":
        continue
      for child in clause.named_children:
        if child.type == "identifier":
          specifiers.append(ImportDefaultSpecifier(local=self._identifier(child)))
        elif child.type == "namespace_import":
          local = next((c for c in child.named_children if c.type == "identifier"), None)
          specifiers.append(ImportNamespaceSpecifier(local=self._identifier(local)))
        elif child.type == "named_imports":
          specifiers.extend(self._named_import(s) for s in child.named_children if s.type == "import_specifier")
    return ImportDeclaration(source=source, specifiers=specifiers)

  def _named_import(self, node: SyntaxNode) -> ImportSpecifier:
    imported = self.convert(node.child_by_field_name("name"))
    alias = node.child_by_field_name("alias")
    if not isinstance(imported, (Identifier, StringLiteral)):
      imported = Identifier(name="")
    if alias is not None:
      local = self._identifier(alias)
    elif isinstance(imported, Identifier):
      local = Identifier(name=imported.name)
    else:
      local = Identifier(name="")
    return ImportSpecifier(imported=imported, local=local)

  def _on_program(self, node: SyntaxNode) -> Program:
    return Program(body=self.children(node))


def load_source(source: Union[str, bytes]) -> Program:
  """
  Parses JavaScript source into a ``Program``.

  Args:
      source: The source text, or its UTF-8 encoded bytes.

  Returns:
      Program: The converted tree.

  Raises:
      TreeLoadError: If the bytes are not valid UTF-8.
  """
  if isinstance(source, str):
    source = source.encode("utf-8")
  else:
    try:
      source.decode("utf-8")
    except UnicodeDecodeError as e:
      raise TreeLoadError(f"Not UTF-8 text: {e}") from e

  tree = _get_parser().parse(source)
  if tree.root_node.has_error:
    logging.debug("Source contains syntax errors; damaged regions are kept as ERROR nodes.")

  program = _Converter(source).convert(tree.root_node)
  if not isinstance(program, Program):
    raise TreeLoadError(f"Expected a program root, found '{tree.root_node.type}'.")
  return program


def load_source_file(path: Path) -> Program:
  """
  Reads and parses a JavaScript source file.

  Args:
      path: Location of the ``.js``/``.jsx``/``.mjs``/``.cjs`` file.

  Returns:
      Program: The converted tree.
  """
  return load_source(Path(path).read_bytes())
