from typing import Any
from typing import Iterable
from typing import Iterator
from typing import Type
from typing import TypeVar

__all__ = ["instances_of", "comment_out_lines", "remove_surrounding"]

_T = TypeVar("_T")


def instances_of(it: Iterable[Any], t: Type[_T]) -> Iterator[_T]:
    """Yield only the items that are instances of the given type (others are skipped, not rejected)"""
    for i in it:
        if isinstance(i, t):
            yield i


def comment_out_lines(text: str, prefix: str = "// ") -> str:
    """
    Prefix every line of the given text with a line comment marker. Lines are split on '\\n' only, so a trailing
    newline results in a final line that holds nothing but the marker.
    """
    return "\n".join(prefix + line for line in text.split("\n"))


def remove_surrounding(text: str, prefix: str, suffix: str) -> str:
    """Strip prefix and suffix from text, but only when *both* are present (and do not overlap)"""
    if len(text) >= len(prefix) + len(suffix) and text.startswith(prefix) and text.endswith(suffix):
        return text[len(prefix) : len(text) - len(suffix)]
    return text
