"""
Shorthand constructors for building trees by hand. Wherever a node is expected, a plain `str` may be given instead
and it will become a `Leaf`.

>>> call("assertPrints", argument("x"), argument(string_literal("y is x"))).text
'assertPrints(x, "y is x")'
"""
from typing import Iterable
from typing import List
from typing import Optional
from typing import Sequence
from typing import Union

from sample_illustrator.tree.nodes import BlockExpression
from sample_illustrator.tree.nodes import CallExpression
from sample_illustrator.tree.nodes import Composite
from sample_illustrator.tree.nodes import DeclarationWithBody
from sample_illustrator.tree.nodes import ImportDirective
from sample_illustrator.tree.nodes import ImportList
from sample_illustrator.tree.nodes import LambdaExpression
from sample_illustrator.tree.nodes import Leaf
from sample_illustrator.tree.nodes import LiteralStringEntry
from sample_illustrator.tree.nodes import SourceFile
from sample_illustrator.tree.nodes import StringTemplateExpression
from sample_illustrator.tree.nodes import SyntaxNode
from sample_illustrator.tree.nodes import TemplateInterpolationEntry
from sample_illustrator.tree.nodes import TypeArgument
from sample_illustrator.tree.nodes import TypeArgumentList
from sample_illustrator.tree.nodes import ValueArgument
from sample_illustrator.tree.nodes import ValueArgumentList

__all__ = [
    "NodeLike",
    "node",
    "nodes",
    "composite",
    "string_literal",
    "interpolation",
    "argument",
    "named_argument",
    "call",
    "block",
    "lambda_expression",
    "import_directive",
    "import_list",
    "source_file",
    "function",
]

NodeLike = Union[SyntaxNode, str]


def node(value: NodeLike) -> SyntaxNode:
    return Leaf(value) if isinstance(value, str) else value


def nodes(values: Iterable[NodeLike]) -> List[SyntaxNode]:
    return [node(v) for v in values]


def composite(*children: NodeLike) -> Composite:
    return Composite(nodes(children))


def interpolation(expression: NodeLike) -> TemplateInterpolationEntry:
    return TemplateInterpolationEntry([Leaf("${"), node(expression), Leaf("}")])


def string_literal(*entries: Union[str, TemplateInterpolationEntry]) -> StringTemplateExpression:
    """Strings become literal entries, interpolation entries are kept as is"""
    content: List[SyntaxNode] = [LiteralStringEntry(e) if isinstance(e, str) else e for e in entries]
    return StringTemplateExpression([Leaf('"'), *content, Leaf('"')])


def argument(expression: NodeLike) -> ValueArgument:
    return ValueArgument([node(expression)])


def named_argument(name: str, expression: NodeLike) -> ValueArgument:
    """`name = expression`"""
    return ValueArgument([Leaf(name), Leaf(" = "), node(expression)])


def call(
    callee: str,
    *arguments: NodeLike,
    type_arguments: Sequence[NodeLike] = (),
    trailing_lambda: Optional[LambdaExpression] = None,
) -> CallExpression:
    """
    Build `callee<type_arguments>(arguments) { trailing_lambda }`. Non-ValueArgument arguments are wrapped. The
    parenthesized list is omitted only when there are no arguments but there is a trailing lambda.
    """
    children: List[SyntaxNode] = [Leaf(callee)]
    if type_arguments:
        type_list: List[SyntaxNode] = [Leaf("<")]
        for i, type_argument in enumerate(type_arguments):
            if i:
                type_list.append(Leaf(", "))
            type_list.append(TypeArgument([node(type_argument)]))
        type_list.append(Leaf(">"))
        children.append(TypeArgumentList(type_list))

    if arguments or trailing_lambda is None:
        value_list: List[SyntaxNode] = [Leaf("(")]
        for i, value in enumerate(arguments):
            if i:
                value_list.extend([Leaf(","), Leaf(" ")])
            value_list.append(value if isinstance(value, ValueArgument) else argument(value))
        value_list.append(Leaf(")"))
        children.append(ValueArgumentList(value_list))

    if trailing_lambda is not None:
        children.extend([Leaf(" "), ValueArgument([trailing_lambda])])
    return CallExpression(children)


def block(*statements: NodeLike, separator: str = "\n", braces: bool = False) -> BlockExpression:
    """Statements joined by separator leaves. With braces, the block looks like a function body: `{<sep>...<sep>}`"""
    children: List[SyntaxNode] = []
    for i, statement in enumerate(statements):
        if i:
            children.append(Leaf(separator))
        children.append(node(statement))
    if braces:
        children = [Leaf("{"), Leaf(separator), *children, Leaf(separator), Leaf("}")]
    return BlockExpression(children)


def lambda_expression(body: BlockExpression, padding: str = " ") -> LambdaExpression:
    return LambdaExpression([Leaf("{"), Leaf(padding), body, Leaf(padding), Leaf("}")])


def import_directive(path: str) -> ImportDirective:
    return ImportDirective([Leaf("import"), Leaf(" "), Leaf(path)], import_path=path)


def import_list(*paths: str) -> ImportList:
    children: List[SyntaxNode] = []
    for i, path in enumerate(paths):
        if i:
            children.append(Leaf("\n"))
        children.append(import_directive(path))
    return ImportList(children)


def source_file(*children: NodeLike, name: str = "sample.kt") -> SourceFile:
    return SourceFile(nodes(children), name=name)


def function(name: str, body: Optional[NodeLike] = None) -> DeclarationWithBody:
    """`fun name() <body>`, or `fun name()` when there is no body"""
    children: List[SyntaxNode] = [Leaf("fun"), Leaf(" "), Leaf(name), Leaf("()")]
    if body is None:
        return DeclarationWithBody(children)
    body_node = node(body)
    children.append(Leaf(" ") if isinstance(body_node, BlockExpression) else Leaf(" = "))
    return DeclarationWithBody([*children, body_node], body_expression=body_node)
