"""
ESTree / Babel JSON Loader.

Converts the JSON produced by ``@babel/parser`` (or any ESTree compliant
parser) into the node model of ``styled_detectors.tree.nodes``.

Modelled node types are mapped onto their dataclasses. Every other node type
becomes an ``OpaqueNode`` that keeps its nested nodes, so a traversal still
finds tags inside exports, JSX attributes, object literals and so on.
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

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

# Keys holding positional/metadata payloads rather than child nodes.
_SKIPPED_KEYS = frozenset(
  (
    "type",
    "start",
    "end",
    "loc",
    "range",
    "extra",
    "comments",
    "leadingComments",
    "trailingComments",
    "innerComments",
    "tokens",
  )
)


class TreeLoadError(ValueError):
  """Raised when the JSON payload is not a parsed JavaScript file."""


def _line_of(data: Dict[str, Any]) -> Optional[int]:
  loc = data.get("loc")
  if isinstance(loc, dict):
    start = loc.get("start") or {}
    line = start.get("line")
    if isinstance(line, int):
      return line
  return None


def _convert_list(items: Any) -> List[Node]:
  if not isinstance(items, list):
    return []
  out = []
  for item in items:
    node = _convert(item)
    if node is not None:
      out.append(node)
  return out


def _identifier(data: Any) -> Identifier:
  node = _convert(data)
  if isinstance(node, Identifier):
    return node
  # Degenerate input such as an unnamed local: keep it non-matching.
  return Identifier(name="")


def _string_literal(data: Dict[str, Any]) -> StringLiteral:
  return StringLiteral(value=str(data.get("value", "")))


def _literal(data: Dict[str, Any]) -> Node:
  # ESTree folds every literal into `Literal`; only strings matter to us.
  if isinstance(data.get("value"), str):
    return _string_literal(data)
  return OpaqueNode(node_type="Literal")


def _template_literal(data: Dict[str, Any]) -> TemplateLiteral:
  quasis = []
  for element in data.get("quasis") or []:
    value = (element or {}).get("value") or {}
    cooked = value.get("cooked")
    quasis.append(cooked if isinstance(cooked, str) else str(value.get("raw", "")))
  return TemplateLiteral(quasis=quasis, expressions=_convert_list(data.get("expressions")))


def _tagged_template(data: Dict[str, Any]) -> Node:
  tag = _convert(data.get("tag"))
  quasi = _convert(data.get("quasi"))
  if tag is None:
    return _opaque(data)
  if not isinstance(quasi, TemplateLiteral):
    quasi = TemplateLiteral()
  return TaggedTemplateExpression(tag=tag, quasi=quasi)


def _member(data: Dict[str, Any]) -> Node:
  obj = _convert(data.get("object"))
  prop = _convert(data.get("property"))
  if obj is None or prop is None:
    return _opaque(data)
  return MemberExpression(object=obj, property=prop, computed=bool(data.get("computed", False)))


def _call(data: Dict[str, Any]) -> Node:
  callee = _convert(data.get("callee"))
  if callee is None:
    return _opaque(data)
  return CallExpression(callee=callee, arguments=_convert_list(data.get("arguments")))


def _arrow(data: Dict[str, Any]) -> ArrowFunctionExpression:
  return ArrowFunctionExpression(params=_convert_list(data.get("params")), body=_convert(data.get("body")))


def _block(data: Dict[str, Any]) -> BlockStatement:
  return BlockStatement(body=_convert_list(data.get("body")))


def _expression_statement(data: Dict[str, Any]) -> Node:
  expression = _convert(data.get("expression"))
  if expression is None:
    return _opaque(data)
  return ExpressionStatement(expression=expression)


def _declarator(data: Dict[str, Any]) -> Node:
  target = _convert(data.get("id"))
  if target is None:
    return _opaque(data)
  return VariableDeclarator(id=target, init=_convert(data.get("init")))


def _declaration(data: Dict[str, Any]) -> VariableDeclaration:
  declarators = [d for d in _convert_list(data.get("declarations")) if isinstance(d, VariableDeclarator)]
  return VariableDeclaration(declarations=declarators, kind_keyword=str(data.get("kind", "const")))


def _import_declaration(data: Dict[str, Any]) -> ImportDeclaration:
  source = _convert(data.get("source"))
  if not isinstance(source, StringLiteral):
    source = StringLiteral(value="")
  specifiers = [
    s
    for s in _convert_list(data.get("specifiers"))
    if isinstance(s, (ImportDefaultSpecifier, ImportNamespaceSpecifier, ImportSpecifier))
  ]
  return ImportDeclaration(source=source, specifiers=specifiers)


def _import_specifier(data: Dict[str, Any]) -> ImportSpecifier:
  imported = _convert(data.get("imported"))
  local = _identifier(data.get("local"))
  if not isinstance(imported, (Identifier, StringLiteral)):
    imported = Identifier(name=local.name)
  return ImportSpecifier(imported=imported, local=local)


def _program(data: Dict[str, Any]) -> Program:
  return Program(body=_convert_list(data.get("body")))


def _opaque(data: Dict[str, Any]) -> OpaqueNode:
  children: List[Node] = []
  for key, value in data.items():
    if key in _SKIPPED_KEYS:
      continue
    if isinstance(value, dict):
      child = _convert(value)
      if child is not None:
        children.append(child)
    elif isinstance(value, list):
      children.extend(_convert_list(value))
  return OpaqueNode(node_type=str(data.get("type", "Unknown")), children=children)


_BUILDERS: Dict[str, Callable[[Dict[str, Any]], Node]] = {
  "Program": _program,
  "Identifier": lambda d: Identifier(name=str(d.get("name", ""))),
  "StringLiteral": _string_literal,
  "Literal": _literal,
  "TemplateLiteral": _template_literal,
  "TaggedTemplateExpression": _tagged_template,
  "MemberExpression": _member,
  "OptionalMemberExpression": _member,
  "CallExpression": _call,
  "OptionalCallExpression": _call,
  "ArrowFunctionExpression": _arrow,
  "BlockStatement": _block,
  "ExpressionStatement": _expression_statement,
  "VariableDeclaration": _declaration,
  "VariableDeclarator": _declarator,
  "ImportDeclaration": _import_declaration,
  "ImportDefaultSpecifier": lambda d: ImportDefaultSpecifier(local=_identifier(d.get("local"))),
  "ImportNamespaceSpecifier": lambda d: ImportNamespaceSpecifier(local=_identifier(d.get("local"))),
  "ImportSpecifier": _import_specifier,
}


def _convert(data: Any) -> Optional[Node]:
  if not isinstance(data, dict) or "type" not in data:
    return None
  builder = _BUILDERS.get(data["type"], _opaque)
  node = builder(data)
  node.line = _line_of(data)
  return node


def load_estree(data: Union[Dict[str, Any], str]) -> Program:
  """
  Builds a ``Program`` from an ESTree JSON document.

  Args:
      data: A decoded JSON object, or the raw JSON text. The root may be a
          Babel ``File`` node or a bare ``Program``.

  Returns:
      Program: The converted tree.

  Raises:
      TreeLoadError: If the payload is not valid JSON or has no Program root.
  """
  if isinstance(data, str):
    try:
      data = json.loads(data)
    except json.JSONDecodeError as e:
      raise TreeLoadError(f"Invalid JSON: {e}") from e

  if not isinstance(data, dict):
    raise TreeLoadError("Expected a JSON object at the root of the syntax tree.")

  if data.get("type") == "File":
    data = data.get("program")
    if not isinstance(data, dict):
      raise TreeLoadError("File node has no 'program'.")

  if data.get("type") != "Program":
    raise TreeLoadError(f"Expected a Program root, found '{data.get('type')}'.")

  program = _convert(data)
  if not isinstance(program, Program):
    raise TreeLoadError("Program root could not be converted.")
  return program


def load_estree_file(path: Path) -> Program:
  """
  Reads an ESTree JSON file from disk (e.g. ``babel-parser --json`` output).

  Args:
      path: Location of the JSON document.

  Returns:
      Program: The converted tree.

  Raises:
      TreeLoadError: If the file is not UTF-8 encoded JSON with a Program root.
  """
  try:
    text = Path(path).read_text(encoding="utf-8")
  except UnicodeDecodeError as e:
    raise TreeLoadError(f"Not UTF-8 text: {e}") from e
  return load_estree(text)
