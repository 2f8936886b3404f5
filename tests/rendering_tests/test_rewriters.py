"""Each assertion form, as rendered on its own and in context"""
import pytest

from sample_illustrator.errors import ArgumentShapeError
from sample_illustrator.errors import NonLiteralMessageError
from sample_illustrator.rendering import render
from sample_illustrator.rendering.buffer import TextBuffer
from sample_illustrator.rendering.rewriters import convert_assert_fails_with
from sample_illustrator.rendering.rewriters import convert_assert_prints
from sample_illustrator.rendering.rewriters import extract_string_argument_value
from sample_illustrator.rendering.rewriters import REWRITERS
from sample_illustrator.tree import LambdaExpression
from sample_illustrator.tree import Leaf
from sample_illustrator.tree import LiteralStringEntry
from sample_illustrator.tree import StringTemplateExpression
from sample_illustrator.tree import SyntaxNode
from sample_illustrator.tree.factory import argument
from sample_illustrator.tree.factory import block
from sample_illustrator.tree.factory import call
from sample_illustrator.tree.factory import composite
from sample_illustrator.tree.factory import interpolation
from sample_illustrator.tree.factory import lambda_expression
from sample_illustrator.tree.factory import named_argument
from sample_illustrator.tree.factory import string_literal


def render_ok(node: SyntaxNode) -> str:
    """Render and make sure nothing had to be recovered"""
    text, errors = render(node)
    assert errors == []
    return text


def test_recognized_forms() -> None:
    assert set(REWRITERS) == {"assertPrints", "assertTrue", "assertFalse", "assertFails", "assertFailsWith"}


def test_assert_prints() -> None:
    assert render_ok(call("assertPrints", "x", string_literal("y is x"))) == "println(x) // y is x"


def test_assert_prints_complex_expression() -> None:
    expression = composite("list", ".", "map", " ", lambda_expression(block("it * 2")))
    assert render_ok(call("assertPrints", expression, string_literal("[2, 4]"))) == (
        "println(list.map { it * 2 }) // [2, 4]"
    )


def test_assert_prints_named_message() -> None:
    expression = call("assertPrints", "x", named_argument("message", string_literal("1")))
    assert render_ok(expression) == "println(x) // 1"


def test_assert_prints_ignores_extra_arguments() -> None:
    assert render_ok(call("assertPrints", "x", string_literal("1"), "extra")) == "println(x) // 1"


@pytest.mark.parametrize(
    "callee, expected",
    [
        ("assertTrue", 'println("x is ${x}") // true'),
        ("assertFalse", 'println("x is ${x}") // false'),
    ],
)
def test_assert_true_false(callee: str, expected: str) -> None:
    assert render_ok(call(callee, "x")) == expected


def test_assert_true_with_message_keeps_indentation() -> None:
    tree = composite("val x = true", "\n    ", call("assertTrue", "x", string_literal("msg")))
    assert render_ok(tree) == 'val x = true\n    // msg\n    println("x is ${x}") // true'


def test_assert_false_with_message_and_no_whitespace_before() -> None:
    assert render_ok(call("assertFalse", "x", string_literal("msg"))) == '// msg\nprintln("x is ${x}") // false'


def test_assert_true_message_uses_nearest_whitespace() -> None:
    tree = composite("\n  ", "foo();", call("assertTrue", "x", string_literal("msg")))
    assert render_ok(tree) == '\n  foo();// msg\n  println("x is ${x}") // true'


def test_assert_fails_with_lambda() -> None:
    expression = call("assertFails", string_literal("boom"), trailing_lambda=lambda_expression(block("a()", "b()")))
    assert render_ok(expression) == "// a()\n// b() // boom will fail"


def test_assert_fails_with_plain_expression() -> None:
    assert render_ok(call("assertFails", string_literal("boom"), "doIt()")) == "// doIt() // boom will fail"


def test_assert_fails_with_empty_lambda() -> None:
    empty = LambdaExpression([Leaf("{"), Leaf("}")])
    assert render_ok(call("assertFails", string_literal("boom"), trailing_lambda=empty)) == "//  // boom will fail"


def test_assert_fails_trailing_newline() -> None:
    body = block("a()", "")
    expression = call("assertFails", string_literal("boom"), trailing_lambda=lambda_expression(body))
    assert render_ok(expression) == "// a()\n//  // boom will fail"


def test_assert_fails_with_type() -> None:
    expression = call(
        "assertFailsWith",
        type_arguments=["IllegalStateException"],
        trailing_lambda=lambda_expression(block("check(false)")),
    )
    assert render_ok(expression) == "// check(false) // will fail with IllegalStateException"


def test_assert_fails_with_type_multiline() -> None:
    expression = call(
        "assertFailsWith",
        type_arguments=["IndexOutOfBoundsException"],
        trailing_lambda=lambda_expression(block("val list = listOf(1)", "list[10]"), padding="\n"),
    )
    assert render_ok(expression) == "// val list = listOf(1)\n// list[10] // will fail with IndexOutOfBoundsException"


def test_assert_fails_with_type_non_lambda() -> None:
    expression = call("assertFailsWith", "action", type_arguments=["E"])
    assert render_ok(expression) == "// action // will fail with E"


def test_assert_fails_with_needs_type_argument() -> None:
    expression = call("assertFailsWith", trailing_lambda=lambda_expression(block("a()")))
    with pytest.raises(ArgumentShapeError):
        convert_assert_fails_with(expression, TextBuffer())


def test_assert_prints_needs_two_arguments() -> None:
    with pytest.raises(ArgumentShapeError, match="at least 2"):
        convert_assert_prints(call("assertPrints", "x"), TextBuffer())


def test_extract_string_argument_value() -> None:
    assert extract_string_argument_value(argument(string_literal("a", "b"))) == "ab"
    # escapes are taken verbatim
    assert extract_string_argument_value(argument(string_literal("line\\n"))) == "line\\n"
    assert extract_string_argument_value(argument(StringTemplateExpression([Leaf('"'), Leaf('"')]))) == ""
    assert extract_string_argument_value(argument(StringTemplateExpression([LiteralStringEntry("raw")]))) == "raw"


@pytest.mark.parametrize(
    "message_argument",
    [
        pytest.param(argument(string_literal("x is ", interpolation("x"))), id="interpolated"),
        pytest.param(argument("message"), id="variable"),
        pytest.param(argument(composite("a", " + ", "b")), id="expression"),
    ],
)
def test_extract_string_argument_value_rejects(message_argument) -> None:
    with pytest.raises(NonLiteralMessageError):
        extract_string_argument_value(message_argument)
