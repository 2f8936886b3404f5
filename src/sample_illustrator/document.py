"""Turning character offsets into (line, column) positions, for error reports"""
import bisect
import re
from typing import List
from typing import Optional
from typing import Protocol
from typing import runtime_checkable
from typing import Tuple

from sample_illustrator.tree.nodes import SourceFile

__all__ = ["PositionLookup", "TextDocument", "DocumentPositionLookup"]


@runtime_checkable
class PositionLookup(Protocol):
    def position_of(self, file: Optional[SourceFile], offset: int) -> Optional[Tuple[int, int]]:
        """
        Return the 0-based (line, column) of offset within file, or None if no position can be determined (in which
        case callers fall back to the raw offset).
        """
        ...


class TextDocument:
    """Line bookkeeping for a piece of text. Lines are separated by '\\n'"""

    text: str
    line_starts: List[int]
    """Offset of the first character of each line"""

    def __init__(self, text: str) -> None:
        self.text = text
        self.line_starts = [0] + [m.end() for m in re.finditer("\n", text)]

    def line_number(self, offset: int) -> int:
        if not 0 <= offset <= len(self.text):
            raise IndexError(f"Offset {offset} is outside of the document (length {len(self.text)})")
        return bisect.bisect_right(self.line_starts, offset) - 1

    def line_start_offset(self, line: int) -> int:
        return self.line_starts[line]

    def position_of(self, offset: int) -> Tuple[int, int]:
        line = self.line_number(offset)
        return line, offset - self.line_start_offset(line)


class DocumentPositionLookup:
    """
    Resolve positions against the source file's own text. Nodes that are not part of a SourceFile tree have no
    document, so no position is returned for them.
    """

    def position_of(self, file: Optional[SourceFile], offset: int) -> Optional[Tuple[int, int]]:
        if file is None:
            return None
        document = TextDocument(file.text)
        if offset > len(document.text):
            return None
        return document.position_of(offset)
