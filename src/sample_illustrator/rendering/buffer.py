from typing import List

from typing_extensions import Self

__all__ = ["TextBuffer"]


class TextBuffer:
    """Append-only accumulator of rendered text"""

    def __init__(self) -> None:
        self._parts: List[str] = []

    def append(self, text: str) -> Self:
        self._parts.append(text)
        return self

    @property
    def text(self) -> str:
        return "".join(self._parts)
