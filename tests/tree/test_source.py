"""
Tests for the tree-sitter Source Loader.

Verifies:
1. Import statements map onto the three specifier kinds.
2. Tagged templates, member chains and closure wrappers take the ESTree shapes.
3. Parsed files feed the detectors and scanner directly.
4. Comments are dropped and non UTF-8 input raises TreeLoadError.
"""

import pytest

from styled_detectors.analysis.imports import import_local_name
from styled_detectors.analysis.scanner import describe, scan_tags
from styled_detectors.analysis.state import FileContext
from styled_detectors.enums import TagKind
from styled_detectors.tree.estree import TreeLoadError
from styled_detectors.tree.nodes import (
  ArrowFunctionExpression,
  CallExpression,
  ImportDeclaration,
  ImportDefaultSpecifier,
  ImportNamespaceSpecifier,
  ImportSpecifier,
  MemberExpression,
  TaggedTemplateExpression,
  VariableDeclaration,
)
from styled_detectors.tree.source import load_source, load_source_file

COMPONENT = """\
import styled, { css as c, keyframes } from 'styled-components';

const fade = keyframes`from { opacity: 0; }`;
const Button = styled.button`
  color: ${(p) => p.color};
`;
const Link = styled(Button).attrs({ role: 'link' })`
  ${c`margin: 0;`}
`;
"""


def test_import_specifiers():
  prog = load_source(COMPONENT)
  first = prog.body[0]

  assert isinstance(first, ImportDeclaration)
  assert first.source.value == "styled-components"
  default, css_spec, kf_spec = first.specifiers
  assert isinstance(default, ImportDefaultSpecifier) and default.local.name == "styled"
  assert isinstance(css_spec, ImportSpecifier)
  assert (css_spec.imported_name, css_spec.local.name) == ("css", "c")
  assert (kf_spec.imported_name, kf_spec.local.name) == ("keyframes", "keyframes")


def test_namespace_import():
  decl = load_source("import * as sc from 'styled-components/native';\n").body[0]
  assert decl.source.value == "styled-components/native"
  assert isinstance(decl.specifiers[0], ImportNamespaceSpecifier)
  assert decl.specifiers[0].local.name == "sc"


def test_tagged_template_shape():
  prog = load_source(COMPONENT)
  decl = prog.body[2]
  assert isinstance(decl, VariableDeclaration)
  assert decl.kind_keyword == "const"

  expr = decl.declarations[0].init
  assert isinstance(expr, TaggedTemplateExpression)
  assert isinstance(expr.tag, MemberExpression)
  assert describe(expr.tag) == "styled.button"
  assert expr.quasi.quasis == ["\n  color: ", ";\n"]
  assert isinstance(expr.quasi.expressions[0], ArrowFunctionExpression)
  assert expr.line == 4


def test_parsed_file_feeds_detectors():
  ctx = FileContext(filename="Component.js", program=load_source(COMPONENT))

  assert import_local_name("default", ctx) == "styled"
  assert import_local_name("css", ctx) == "c"
  matches = scan_tags(ctx)
  assert [(m.kind, m.expression, m.line) for m in matches] == [
    (TagKind.KEYFRAMES, "keyframes", 3),
    (TagKind.STYLED, "styled.button", 4),
    (TagKind.STYLED, "styled(Button).attrs(...)", 7),
    (TagKind.CSS, "c", 8),
  ]


def test_closure_wrapper_is_unwrapped():
  source = "import styled from 'styled-components';\nconst Foo = (() => { const _Foo = styled.div({}); return _Foo; })();\n"
  prog = load_source(source)
  wrapper = prog.body[1].declarations[0].init
  assert isinstance(wrapper, CallExpression)
  assert isinstance(wrapper.callee, ArrowFunctionExpression)

  ctx = FileContext(filename="Hoisted.js", program=prog)
  assert [m.expression for m in scan_tags(ctx)] == ["<ArrowFunctionExpression>", "styled.div"]


def test_subscript_is_computed_member():
  prog = load_source("styled['div']`color: red;`;\n")
  tag = prog.body[0].expression.tag
  assert isinstance(tag, MemberExpression)
  assert tag.computed
  assert tag.property_name == "div"


@pytest.mark.parametrize("keyword", ["let", "var"])
def test_declaration_keyword(keyword):
  prog = load_source(f"{keyword} x = 1;\n")
  assert prog.body[0].kind_keyword == keyword


def test_comments_are_dropped():
  prog = load_source("// theme\nimport styled from 'styled-components'; /* tail */\n")
  assert len(prog.body) == 1
  assert isinstance(prog.body[0], ImportDeclaration)


def test_syntax_errors_do_not_raise():
  prog = load_source("import styled from 'styled-components';\nconst = ;\n")
  assert isinstance(prog.body[0], ImportDeclaration)


def test_load_source_file(tmp_path):
  f = tmp_path / "Button.jsx"
  f.write_text(COMPONENT, encoding="utf-8")
  assert len(load_source_file(f).body) == 4


def test_non_utf8_source(tmp_path):
  f = tmp_path / "Broken.js"
  f.write_bytes(b"\xff\xfeconst x = 1;")
  with pytest.raises(TreeLoadError):
    load_source_file(f)
