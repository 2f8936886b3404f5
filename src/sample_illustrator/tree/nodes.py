"""
The syntax tree that the renderer walks. A host parser is expected to build these nodes (see `tree.factory` for
convenient constructors). The tree is a lossless representation of the sample source: the text of any node is exactly
the source text it was parsed from, including whitespace and comments, because every token lives in some `Leaf`.

Only a handful of node kinds are distinguished, the ones the renderer and the import filter care about. Everything
else is a plain `Composite`.

During troubleshooting, a tree can be inspected using `dump()`, which works much like `ast.dump()`.
"""
import itertools
from dataclasses import dataclass
from dataclasses import field
from functools import cached_property
from typing import Callable
from typing import Iterator
from typing import List
from typing import Optional
from typing import Sequence
from typing import Type
from typing import TypeVar

import more_itertools

from sample_illustrator.util import instances_of

__all__ = [
    "SyntaxNode",
    "Leaf",
    "LiteralStringEntry",
    "Composite",
    "CallExpression",
    "ValueArgumentList",
    "ValueArgument",
    "TypeArgumentList",
    "TypeArgument",
    "StringTemplateExpression",
    "TemplateInterpolationEntry",
    "LambdaExpression",
    "BlockExpression",
    "ImportDirective",
    "ImportList",
    "SourceFile",
    "DeclarationWithBody",
    "dump",
]

_NodeT = TypeVar("_NodeT", bound="SyntaxNode")


class SyntaxNode:
    """
    Base for all node kinds. Subclasses provide a `text` attribute (or property) holding the verbatim source text of
    the node.

    A node's `parent` is assigned when the node is handed to a `Composite`. A node without a parent is a tree root.
    """

    parent: Optional["Composite"] = None
    text: str

    def child_nodes(self) -> Sequence["SyntaxNode"]:
        return ()

    @property
    def start_offset(self) -> int:
        """Character offset of this node's first character, relative to the start of the tree root"""
        offset = 0
        current: SyntaxNode = self
        while current.parent is not None:
            for sibling in current.parent.child_nodes():
                if sibling is current:
                    break
                offset += len(sibling.text)
            current = current.parent
        return offset

    @property
    def root(self) -> "SyntaxNode":
        current: SyntaxNode = self
        while current.parent is not None:
            current = current.parent
        return current

    @property
    def containing_file(self) -> Optional["SourceFile"]:
        """The nearest enclosing SourceFile (this node included), or None if the tree is not rooted in a file"""
        current: Optional[SyntaxNode] = self
        while current is not None:
            if isinstance(current, SourceFile):
                return current
            current = current.parent
        return None

    def walk(self) -> Iterator["SyntaxNode"]:
        """Pre-order, left-to-right walk of this node and all its descendants (ie, in source token order)"""
        yield self
        for child in self.child_nodes():
            yield from child.walk()

    def iter_leaves(self) -> Iterator["Leaf"]:
        return instances_of(self.walk(), Leaf)

    def find_descendant(self, node_type: Type[_NodeT]) -> Optional[_NodeT]:
        """First descendant (this node excluded) of the given type, in pre-order"""
        descendants = itertools.islice(self.walk(), 1, None)
        return more_itertools.first(instances_of(descendants, node_type), None)

    def prev_leaf(self, predicate: Callable[["Leaf"], bool]) -> Optional["Leaf"]:
        """
        Find the nearest leaf that precedes this node in source order and satisfies the predicate. Leaves that do not
        satisfy the predicate are skipped over. Returns None if there is no such leaf anywhere before this node.
        """
        current: SyntaxNode = self
        while current.parent is not None:
            siblings = current.parent.child_nodes()
            index = next(i for i, sibling in enumerate(siblings) if sibling is current)
            for sibling in reversed(siblings[:index]):
                for leaf in reversed(list(sibling.iter_leaves())):
                    if predicate(leaf):
                        return leaf
            current = current.parent
        return None


@dataclass(eq=False)
class Leaf(SyntaxNode):
    """A single token (identifier, punctuation, whitespace, comment...)"""

    text: str

    @property
    def is_whitespace(self) -> bool:
        return bool(self.text) and self.text.isspace()


class LiteralStringEntry(Leaf):
    """The literal (non-interpolated) part of a string template"""


@dataclass(eq=False)
class Composite(SyntaxNode):
    """Any node kind that is made up of other nodes. Its text is the concatenation of its children's text."""

    children: List[SyntaxNode] = field(default_factory=list)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    def child_nodes(self) -> Sequence[SyntaxNode]:
        return self.children

    @cached_property
    def text(self) -> str:  # type: ignore[override]
        return "".join(child.text for child in self.children)

    def significant_children(self) -> Iterator[SyntaxNode]:
        """Children, skipping whitespace leaves"""
        return (c for c in self.children if not (isinstance(c, Leaf) and c.is_whitespace))


class ValueArgumentList(Composite):
    """The parenthesized argument list of a call, punctuation included"""


class TypeArgumentList(Composite):
    """The `<...>` type argument list of a call"""


class TypeArgument(Composite):
    pass


class ValueArgument(Composite):
    @property
    def expression(self) -> Optional[SyntaxNode]:
        """
        The argument expression, ie the first child that is not whitespace. For a named argument (`name = expr`), the
        name and the `=` are skipped.
        """
        children = list(self.significant_children())
        for i, child in enumerate(children):
            if not isinstance(child, Leaf):
                break
            if child.text.strip() == "=":
                return more_itertools.first(children[i + 1 :], None)
        return more_itertools.first(children, None)


class CallExpression(Composite):
    """
    A call: `callee<TypeArgs>(args) { trailing lambda }`. The type argument list, the value argument list and the
    trailing lambda argument are all optional.
    """

    @property
    def callee(self) -> Optional[SyntaxNode]:
        return more_itertools.first(self.significant_children(), None)

    @property
    def callee_name(self) -> Optional[str]:
        callee = self.callee
        return callee.text if callee is not None else None

    @property
    def value_arguments(self) -> List[ValueArgument]:
        """Arguments inside the parentheses followed by any trailing lambda arguments, in source order"""
        arguments: List[ValueArgument] = []
        for child in self.children:
            if isinstance(child, ValueArgumentList):
                arguments.extend(instances_of(child.children, ValueArgument))
            elif isinstance(child, ValueArgument):
                arguments.append(child)
        return arguments

    @property
    def type_arguments(self) -> List[TypeArgument]:
        arguments: List[TypeArgument] = []
        for child in instances_of(self.children, TypeArgumentList):
            arguments.extend(instances_of(child.children, TypeArgument))
        return arguments


class TemplateInterpolationEntry(Composite):
    """An interpolated part of a string template, e.g. `${x}` or `$x`"""


class StringTemplateExpression(Composite):
    """A string literal. Quotes are plain leaves, the content is a sequence of entries"""

    @property
    def entries(self) -> List[SyntaxNode]:
        return [c for c in self.children if isinstance(c, (LiteralStringEntry, TemplateInterpolationEntry))]

    @property
    def is_literal(self) -> bool:
        """True when no entry is interpolated"""
        return all(isinstance(entry, LiteralStringEntry) for entry in self.entries)


class BlockExpression(Composite):
    """A sequence of statements. Function bodies include their braces, lambda bodies do not"""


class LambdaExpression(Composite):
    @property
    def body(self) -> Optional[BlockExpression]:
        return self.find_descendant(BlockExpression)


@dataclass(eq=False)
class ImportDirective(Composite):
    import_path: str = ""
    """The imported path, e.g. `a.b.C` or `a.b.*`. Aliases are not part of the path"""


class ImportList(Composite):
    @property
    def entries(self) -> List[SyntaxNode]:
        """Import directives along with the whitespace and comments between them"""
        return list(self.children)


@dataclass(eq=False)
class SourceFile(Composite):
    name: str = "<unknown>"

    @property
    def import_list(self) -> Optional[ImportList]:
        return more_itertools.first(instances_of(self.children, ImportList), None)


@dataclass(eq=False)
class DeclarationWithBody(Composite):
    """
    A function-like declaration. The body is the child passed as `body_expression`, or else the last BlockExpression
    child. It is None for declarations without a body
    """

    body_expression: Optional[SyntaxNode] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.body_expression is None:
            self.body_expression = more_itertools.last(instances_of(self.children, BlockExpression), None)
        elif not any(c is self.body_expression for c in self.children):
            raise ValueError("body_expression must be one of the declaration's children")



def dump(node: SyntaxNode, indent: str = "  ") -> str:
    """Return a formatted dump of the tree rooted at node, one node per line"""
    lines: List[str] = []

    def _dump(n: SyntaxNode, level: int) -> None:
        prefix = indent * level
        if isinstance(n, Leaf):
            lines.append(f"{prefix}{type(n).__name__}({n.text!r})")
            return
        extra = ""
        if isinstance(n, ImportDirective):
            extra = f" import_path={n.import_path!r}"
        elif isinstance(n, SourceFile):
            extra = f" name={n.name!r}"
        lines.append(f"{prefix}{type(n).__name__}{extra}")
        for child in n.child_nodes():
            _dump(child, level + 1)

    _dump(node, 0)
    return "\n".join(lines)
