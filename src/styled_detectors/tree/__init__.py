"""
Syntax Tree Package.

A minimal JavaScript tree model consumed by the detectors.

Modules:
    - ``nodes``: Node dataclasses (expressions, statements, imports).
    - ``visitor``: Depth-first traversal and import declaration collection.
    - ``estree``: Loader building the model from Babel/ESTree JSON.
    - ``source``: Loader parsing JavaScript source with tree-sitter.
"""

from styled_detectors.tree.estree import TreeLoadError, load_estree, load_estree_file
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
from styled_detectors.tree.source import SOURCE_SUFFIXES, load_source, load_source_file
from styled_detectors.tree.visitor import TreeVisitor, iter_children, iter_import_declarations, walk

__all__ = [
  "ArrowFunctionExpression",
  "BlockStatement",
  "CallExpression",
  "ExpressionStatement",
  "Identifier",
  "ImportDeclaration",
  "ImportDefaultSpecifier",
  "ImportNamespaceSpecifier",
  "ImportSpecifier",
  "MemberExpression",
  "Node",
  "OpaqueNode",
  "Program",
  "SOURCE_SUFFIXES",
  "StringLiteral",
  "TaggedTemplateExpression",
  "TemplateLiteral",
  "TreeLoadError",
  "TreeVisitor",
  "VariableDeclaration",
  "VariableDeclarator",
  "iter_children",
  "iter_import_declarations",
  "load_estree",
  "load_estree_file",
  "load_source",
  "load_source_file",
  "walk",
]
