"""
Tests for Tag Detectors.

Verifies:
1. `styled.x` and `styled(x)` forms under default imports.
2. Modifier chains are peeled down to the constructor.
3. Require-style `sc.default...` forms.
4. Closure wrappers are only unwrapped when requested.
5. Positive results are memoized; negative results are not.
6. Helper predicates and their unions.
"""

import pytest

from styled_detectors.analysis.detectors import (
  classify_tag,
  is_create_global_style_helper,
  is_css_helper,
  is_helper,
  is_inject_global_helper,
  is_keyframes_helper,
  is_pure_helper,
  is_styled,
  is_with_theme_helper,
  matches_any,
)
from styled_detectors.analysis.imports import import_local_name
from styled_detectors.enums import TagKind
from styled_detectors.tree.nodes import ArrowFunctionExpression, ExpressionStatement, VariableDeclaration
from tests.builders import (
  call,
  const,
  default_import,
  ident,
  iife_wrapper,
  member,
  named_import,
  obj,
  program,
  string,
)


@pytest.fixture
def styled_ctx(make_ctx):
  return make_ctx(program(default_import("styled")))


def test_member_tag_with_custom_default_name(make_ctx):
  ctx = make_ctx(program(default_import("Styled")))
  assert is_styled(member("Styled", "div"), ctx)
  assert not is_styled(member("styled", "div"), ctx)


def test_call_tag(styled_ctx):
  assert is_styled(call("styled", ident("Button")), styled_ctx)


def test_bare_identifier_is_not_a_tag(styled_ctx):
  assert not is_styled(ident("styled"), styled_ctx)


@pytest.mark.parametrize(
  "build",
  [
    # styled.div.attrs({})
    lambda: call(member(member("styled", "div"), "attrs"), obj()),
    # styled(Button).attrs({}).withConfig({})
    lambda: call(member(call(member(call("styled", ident("Button")), "attrs"), obj()), "withConfig"), obj()),
    # styled.div.attrs({})('span')
    lambda: call(call(member(member("styled", "div"), "attrs"), obj()), string("span")),
    # styled.div.withConfig({}).attrs({})
    lambda: call(member(call(member(member("styled", "div"), "withConfig"), obj()), "attrs"), obj()),
  ],
)
def test_chains_are_peeled(styled_ctx, build):
  assert is_styled(build(), styled_ctx)


def test_unrelated_chain(styled_ctx):
  # other.div.attrs({})
  assert not is_styled(call(member(member("other", "div"), "attrs"), obj()), styled_ctx)


def test_no_binding_never_matches(make_ctx):
  ctx = make_ctx(program())
  assert not is_styled(member("styled", "div"), ctx)
  assert not is_styled(call("styled", ident("Button")), ctx)


def test_require_member_default(make_ctx):
  """`sc.default.div`"""
  ctx = make_ctx(program(), styled_required="sc")
  assert is_styled(member(member("sc", "default"), "div"), ctx)


def test_require_call_default(make_ctx):
  """`sc.default(Button)`"""
  ctx = make_ctx(program(), styled_required="sc")
  assert is_styled(call(member("sc", "default"), ident("Button")), ctx)


def test_require_attrs_chain(make_ctx):
  """`sc.default.attrs({})()` and `sc.default.div.attrs({})`"""
  ctx = make_ctx(program(), styled_required="sc")
  assert is_styled(call(call(member(member("sc", "default"), "attrs"), obj())), ctx)
  assert is_styled(call(member(member(member("sc", "default"), "div"), "attrs"), obj()), ctx)


def test_bare_require_default_is_not_a_tag(make_ctx):
  """`sc.default` alone is the constructor itself, like a bare `styled`."""
  ctx = make_ctx(program(), styled_required="sc")
  tag = member("sc", "default")
  assert not is_styled(tag, ctx)
  assert not ctx.state.is_known_styled(tag)


def test_require_attrs_chain_keeps_memo_clean(make_ctx, state):
  ctx = make_ctx(program(), styled_required="sc")
  inner = member("sc", "default")
  assert is_styled(call(member(inner, "attrs"), obj()), ctx)
  assert not state.is_known_styled(inner)


def test_require_string_key_default(make_ctx):
  """
  Scenario: `sc["default"](Button)` and `sc["default"].div`.
  Expectation: Only identifier keys name the default export.
  """
  ctx = make_ctx(program(), styled_required="sc")
  assert not is_styled(call(member("sc", "default", computed=True), ident("Button")), ctx)
  assert not is_styled(member(member("sc", "default", computed=True), "div"), ctx)


def test_require_other_binding(make_ctx):
  ctx = make_ctx(program(), styled_required="sc")
  assert not is_styled(member(member("other", "default"), "div"), ctx)
  assert not is_styled(call(member("other", "default"), ident("Button")), ctx)


def test_require_forms_need_binding(styled_ctx):
  assert not is_styled(member(member("sc", "default"), "div"), styled_ctx)


def test_require_style_uses_styled_default(make_ctx):
  """Require-style files still resolve `styled.div` through the 'styled' fallback."""
  ctx = make_ctx(program(), styled_required="sc")
  assert is_styled(member("styled", "div"), ctx)


def _wrapper_for(tag_call):
  return iife_wrapper([const("_Foo", tag_call), ExpressionStatement(expression=ident("_Foo"))]).callee


def test_iife_wrapper_only_when_requested(styled_ctx):
  """
  Scenario: `() => { const _Foo = styled.div(...); ... }` wraps a tag call.
  Expectation: Seen through only with include_iife=True.
  """
  arrow = _wrapper_for(call(member("styled", "div"), string("x")))
  assert isinstance(arrow, ArrowFunctionExpression)

  assert not is_styled(arrow, styled_ctx)
  assert is_styled(arrow, styled_ctx, include_iife=True)


def test_iife_wrapper_of_other_call(styled_ctx):
  arrow = _wrapper_for(call("makeThing"))
  assert not is_styled(arrow, styled_ctx, include_iife=True)


@pytest.mark.parametrize(
  "statements",
  [
    [],
    [ExpressionStatement(expression=ident("x"))],
    [const("_Foo", None)],
    [const("_Foo", member("styled", "div"))],
    [VariableDeclaration(declarations=[])],
  ],
)
def test_iife_odd_shapes_do_not_match(styled_ctx, statements):
  arrow = iife_wrapper(statements).callee
  assert not is_styled(arrow, styled_ctx, include_iife=True)


def test_iife_expression_body(styled_ctx):
  arrow = ArrowFunctionExpression(params=[], body=call(member("styled", "div")))
  assert not is_styled(arrow, styled_ctx, include_iife=True)


def test_positive_results_are_memoized(styled_ctx, state):
  """
  Scenario: A tag is confirmed once, then queried with another include_iife value.
  Expectation: Memo answers without consulting the import resolver.
  """
  tag = member("styled", "div")
  assert is_styled(tag, styled_ctx)
  assert state.is_known_styled(tag)

  lookups = state.stats.lookups
  assert is_styled(tag, styled_ctx, include_iife=True)
  assert state.stats.lookups == lookups
  assert state.stats.memo_hits == 1


def test_memo_survives_binding_change(styled_ctx, state):
  tag = member("styled", "div")
  assert is_styled(tag, styled_ctx)

  styled_ctx.program.body[0] = default_import("other")

  import_local_name("default", styled_ctx, bypass_cache=True)
  assert is_styled(tag, styled_ctx)


def test_negative_results_are_not_memoized(styled_ctx, state):
  arrow = _wrapper_for(call(member("styled", "div")))
  assert not is_styled(arrow, styled_ctx)
  assert not state.is_known_styled(arrow)
  assert is_styled(arrow, styled_ctx, include_iife=True)


def test_peeled_chain_records_inner_node(styled_ctx, state):
  inner = member("styled", "div")
  chain = call(member(inner, "attrs"), obj())
  assert is_styled(chain, styled_ctx)
  assert state.is_known_styled(inner)
  assert not state.is_known_styled(chain)


def test_identity_not_structure(styled_ctx, state):
  first = member("styled", "div")
  second = member("styled", "div")
  is_styled(first, styled_ctx)
  assert first.node_id != second.node_id
  assert not state.is_known_styled(second)


def test_unexpected_shapes_are_false(styled_ctx):
  for node in [string("styled"), obj(), program(), member(call("styled"), "div", computed=True)]:
    assert is_styled(node, styled_ctx, include_iife=True) is False


@pytest.fixture
def helpers_ctx(make_ctx):
  return make_ctx(
    program(
      named_import(
        [
          ("css", "c"),
          ("keyframes", "kf"),
          ("withTheme", "wt"),
          ("createGlobalStyle", "cgs"),
          ("injectGlobal", "ig"),
        ]
      )
    )
  )


@pytest.mark.parametrize(
  "predicate, local",
  [
    (is_css_helper, "c"),
    (is_keyframes_helper, "kf"),
    (is_with_theme_helper, "wt"),
    (is_create_global_style_helper, "cgs"),
    (is_inject_global_helper, "ig"),
  ],
)
def test_helper_predicates(helpers_ctx, predicate, local):
  assert predicate(ident(local), helpers_ctx)
  assert not predicate(ident("other"), helpers_ctx)
  assert not predicate(member(local, "x"), helpers_ctx)


def test_helper_unbound(make_ctx):
  ctx = make_ctx(program())
  assert not is_css_helper(ident("css"), ctx)


def test_is_helper_union(helpers_ctx):
  assert is_helper(ident("c"), helpers_ctx)
  assert is_helper(ident("kf"), helpers_ctx)
  assert is_helper(ident("wt"), helpers_ctx)
  assert not is_helper(ident("cgs"), helpers_ctx)
  assert not is_helper(ident("ig"), helpers_ctx)


def test_is_pure_helper_union(helpers_ctx):
  assert is_pure_helper(ident("c"), helpers_ctx)
  assert is_pure_helper(ident("kf"), helpers_ctx)
  assert is_pure_helper(ident("wt"), helpers_ctx)
  assert is_pure_helper(ident("cgs"), helpers_ctx)
  assert not is_pure_helper(ident("ig"), helpers_ctx)


def test_matches_any_empty(helpers_ctx):
  assert not matches_any([], ident("c"), helpers_ctx)


def test_classify_tag(make_ctx):
  ctx = make_ctx(program(named_import([("keyframes", "kf")], default="styled")))
  assert classify_tag(member("styled", "div"), ctx) is TagKind.STYLED
  assert classify_tag(ident("kf"), ctx) is TagKind.KEYFRAMES
  assert classify_tag(ident("nothing"), ctx) is None
