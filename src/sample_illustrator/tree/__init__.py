"""
In this subpackage, we define the syntax tree that samples are handed to us in. The host parser owns the tree; the
rest of the package only reads it. `factory` offers shorthand constructors for building trees by hand.
"""
from .nodes import BlockExpression
from .nodes import CallExpression
from .nodes import Composite
from .nodes import DeclarationWithBody
from .nodes import dump
from .nodes import ImportDirective
from .nodes import ImportList
from .nodes import LambdaExpression
from .nodes import Leaf
from .nodes import LiteralStringEntry
from .nodes import SourceFile
from .nodes import StringTemplateExpression
from .nodes import SyntaxNode
from .nodes import TemplateInterpolationEntry
from .nodes import TypeArgument
from .nodes import TypeArgumentList
from .nodes import ValueArgument
from .nodes import ValueArgumentList

__all__ = [
    "BlockExpression",
    "CallExpression",
    "Composite",
    "DeclarationWithBody",
    "dump",
    "ImportDirective",
    "ImportList",
    "LambdaExpression",
    "Leaf",
    "LiteralStringEntry",
    "SourceFile",
    "StringTemplateExpression",
    "SyntaxNode",
    "TemplateInterpolationEntry",
    "TypeArgument",
    "TypeArgumentList",
    "ValueArgument",
    "ValueArgumentList",
]
