"""
Rewrite rules for the recognized assertion calls. Each rule takes the call node and appends illustrative code to the
buffer, for example:

    assertPrints(list.size, "3")      ->  println(list.size) // 3
    assertTrue(list.isEmpty())        ->  println("list.isEmpty() is ${list.isEmpty()}") // true
    assertFailsWith<E> { boom() }     ->  // boom() // will fail with E

A rule raises (usually a NodeConversionError) when the call does not have the shape it expects. Rules never recover
from errors themselves; that is up to the renderer.
"""
from functools import partial
from types import MappingProxyType
from typing import Callable
from typing import List
from typing import Mapping

from sample_illustrator.errors import ArgumentShapeError
from sample_illustrator.errors import NonLiteralMessageError
from sample_illustrator.rendering.buffer import TextBuffer
from sample_illustrator.tree.nodes import CallExpression
from sample_illustrator.tree.nodes import LambdaExpression
from sample_illustrator.tree.nodes import StringTemplateExpression
from sample_illustrator.tree.nodes import TypeArgument
from sample_illustrator.tree.nodes import ValueArgument
from sample_illustrator.util import comment_out_lines

__all__ = [
    "Rewriter",
    "REWRITERS",
    "extract_string_argument_value",
    "convert_assert_prints",
    "convert_assert_true_false",
    "convert_assert_fails",
    "convert_assert_fails_with",
]

Rewriter = Callable[[CallExpression, TextBuffer], None]


def extract_string_argument_value(argument: ValueArgument) -> str:
    """The content of a string literal argument. Interpolated strings are rejected"""
    expression = argument.expression
    if not isinstance(expression, StringTemplateExpression):
        raise NonLiteralMessageError(f"Expected a string literal argument, got: {argument.text}")
    if not expression.is_literal:
        raise NonLiteralMessageError(f"String argument must not use interpolation: {argument.text}")
    return "".join(entry.text for entry in expression.entries)


def _value_arguments(expression: CallExpression, count: int) -> List[ValueArgument]:
    """The first `count` value arguments. Any further arguments are ignored"""
    arguments = expression.value_arguments
    if len(arguments) < count:
        raise ArgumentShapeError(
            f"'{expression.callee_name}' needs at least {count} argument(s), found {len(arguments)}: {expression.text}"
        )
    return arguments[:count]


def _type_argument(expression: CallExpression) -> TypeArgument:
    type_arguments = expression.type_arguments
    if not type_arguments:
        raise ArgumentShapeError(f"'{expression.callee_name}' needs a type argument: {expression.text}")
    return type_arguments[0]


def _failing_code(argument: ValueArgument) -> str:
    """For a lambda argument this is the lambda's body (without braces), otherwise the whole argument"""
    expression = argument.expression
    if isinstance(expression, LambdaExpression):
        body = expression.body
        return body.text if body is not None else ""
    return argument.text


def convert_assert_prints(expression: CallExpression, builder: TextBuffer) -> None:
    argument, comment_argument = _value_arguments(expression, 2)
    builder.append("println(")
    builder.append(argument.text)
    builder.append(") // ")
    builder.append(extract_string_argument_value(comment_argument))


def convert_assert_true_false(expression: CallExpression, builder: TextBuffer, expected_result: bool) -> None:
    (argument,) = _value_arguments(expression, 1)
    arguments = expression.value_arguments
    if len(arguments) > 1:
        builder.append(f"// {extract_string_argument_value(arguments[1])}")
        ws = expression.prev_leaf(lambda leaf: leaf.is_whitespace)
        builder.append(ws.text if ws is not None else "\n")
    builder.append('println("')
    builder.append(argument.text)
    builder.append(" is ${")
    builder.append(argument.text)
    builder.append('}") // ')
    builder.append("true" if expected_result else "false")


def convert_assert_fails(expression: CallExpression, builder: TextBuffer) -> None:
    message, func_argument = _value_arguments(expression, 2)
    builder.append(comment_out_lines(_failing_code(func_argument)))
    builder.append(" // ")
    builder.append(extract_string_argument_value(message))
    builder.append(" will fail")


def convert_assert_fails_with(expression: CallExpression, builder: TextBuffer) -> None:
    (func_argument,) = _value_arguments(expression, 1)
    exception_type = _type_argument(expression)
    builder.append(comment_out_lines(_failing_code(func_argument)))
    builder.append(" // will fail with ")
    builder.append(exception_type.text)


REWRITERS: Mapping[str, Rewriter] = MappingProxyType(
    {
        "assertPrints": convert_assert_prints,
        "assertTrue": partial(convert_assert_true_false, expected_result=True),
        "assertFalse": partial(convert_assert_true_false, expected_result=False),
        "assertFails": convert_assert_fails,
        "assertFailsWith": convert_assert_fails_with,
    }
)
"""Callee name -> rewrite rule"""
