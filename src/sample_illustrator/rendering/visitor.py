import logging
from dataclasses import dataclass
from typing import List
from typing import Mapping
from typing import Optional
from typing import Tuple
from typing import Union

from sample_illustrator.document import PositionLookup
from sample_illustrator.errors import ConvertError
from sample_illustrator.rendering.buffer import TextBuffer
from sample_illustrator.rendering.rewriters import Rewriter
from sample_illustrator.rendering.rewriters import REWRITERS
from sample_illustrator.tree.nodes import CallExpression
from sample_illustrator.tree.nodes import Leaf
from sample_illustrator.tree.nodes import SyntaxNode

__all__ = ["Ok", "Err", "RenderResult", "SampleTreeRenderer", "render"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Ok:
    text: str


@dataclass(frozen=True)
class Err:
    error: ConvertError


RenderResult = Union[Ok, Err]


class SampleTreeRenderer:
    """
    Walks a sample's tree and produces illustrative text. Assertion calls are handed to their rewrite rule, every other
    node is echoed verbatim (leaves) or rendered child by child (composites).

    Failures are isolated per child: when a child cannot be rendered, a ConvertError is collected, the child's original
    text is used in its place, and rendering carries on with the next sibling. Each child renders into its own buffer,
    so a child that fails part way through leaves nothing behind in its parent's output.

    A renderer holds no per-render state and can be shared between threads.
    """

    position_lookup: Optional[PositionLookup]
    """Used to report error locations as (line, column). Without one, errors carry the raw offset"""

    rewriters: Mapping[str, Rewriter]
    """Callee name -> rewrite rule"""

    def __init__(
        self, position_lookup: Optional[PositionLookup] = None, rewriters: Optional[Mapping[str, Rewriter]] = None
    ) -> None:
        self.position_lookup = position_lookup
        self.rewriters = REWRITERS if rewriters is None else rewriters

    def render(self, node: SyntaxNode) -> Tuple[str, List[ConvertError]]:
        """Render node. Never raises: every failure ends up in the returned error list"""
        errors: List[ConvertError] = []
        result = self.try_render(node, errors)
        if isinstance(result, Err):
            errors.append(result.error)
            return node.text, errors
        return result.text, errors

    def try_render(self, node: SyntaxNode, errors: List[ConvertError]) -> RenderResult:
        """
        Render a single node. Errors recovered inside the node's subtree are added to `errors`; a failure of the node
        itself is returned as Err for the caller to handle.
        """
        builder = TextBuffer()
        try:
            self._render_into(node, builder, errors)
        except Exception as e:
            offset = node.start_offset
            logger.debug("Falling back to original text for %s at offset %d", type(node).__name__, offset)
            return Err(self.convert_error(node, e, offset))
        return Ok(builder.text)

    def _render_into(self, node: SyntaxNode, builder: TextBuffer, errors: List[ConvertError]) -> None:
        if isinstance(node, Leaf):
            builder.append(node.text)
            return

        if isinstance(node, CallExpression):
            rewriter = self.rewriters.get(node.callee_name or "")
            if rewriter is not None:
                rewriter(node, builder)
                return

        for child in node.child_nodes():
            result = self.try_render(child, errors)
            if isinstance(result, Ok):
                builder.append(result.text)
            else:
                errors.append(result.error)
                # recover
                builder.append(child.text)

    def convert_error(self, node: SyntaxNode, e: Exception, offset: int) -> ConvertError:
        """`offset` is the node's offset from the tree root; the position lookup gets it relative to the file"""
        position = None
        source_file = node.containing_file
        if self.position_lookup is not None:
            file_offset = offset - source_file.start_offset if source_file is not None else offset
            position = self.position_lookup.position_of(source_file, file_offset)
        return ConvertError(cause=e, text=node.text, location=position if position is not None else offset)



def render(node: SyntaxNode, position_lookup: Optional[PositionLookup] = None) -> Tuple[str, List[ConvertError]]:
    """Render node with the standard rewrite rules. See `SampleTreeRenderer.render()`"""
    return SampleTreeRenderer(position_lookup).render(node)
