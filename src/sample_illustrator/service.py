import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import ClassVar
from typing import Mapping
from typing import Optional
from typing import Type

from typing_extensions import Self

from sample_illustrator.document import DocumentPositionLookup
from sample_illustrator.document import PositionLookup
from sample_illustrator.errors import ConfigurationError
from sample_illustrator.errors import ConvertError
from sample_illustrator.errors import MissingBodyError
from sample_illustrator.imports import DEFAULT_IMPORTS_TO_IGNORE
from sample_illustrator.imports import DEFAULT_LANGUAGE
from sample_illustrator.imports import DefaultImportRenderer
from sample_illustrator.imports import ImportFilter
from sample_illustrator.imports import ImportIgnoreSet
from sample_illustrator.imports import ImportRenderer
from sample_illustrator.imports import RenderedImportBlock
from sample_illustrator.rendering.visitor import SampleTreeRenderer
from sample_illustrator.tree.nodes import BlockExpression
from sample_illustrator.tree.nodes import DeclarationWithBody
from sample_illustrator.tree.nodes import SyntaxNode
from sample_illustrator.util import remove_surrounding

__all__ = ["RenderOptions", "SampleProcessingService"]


def _default_imports_to_ignore() -> ImportIgnoreSet:
    return ImportIgnoreSet.from_strings(DEFAULT_IMPORTS_TO_IGNORE)


@dataclass(frozen=True)
class RenderOptions:
    language: str = DEFAULT_LANGUAGE
    """Language tag for rendered import blocks"""

    imports_to_ignore: ImportIgnoreSet = field(default_factory=_default_imports_to_ignore)

    log_level: int = logging.ERROR
    """Level used when reporting nodes that could not be converted"""

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> Self:
        """
        Build options from plain configuration values, e.g. as loaded from a config file:

        >>> options = RenderOptions.from_mapping({"imports_to_ignore": ["samples.*", "test.*"], "log_level": "warning"})
        """
        unknown = set(config) - {"language", "imports_to_ignore", "log_level"}
        if unknown:
            raise ConfigurationError(f"Unknown render options: {', '.join(sorted(unknown))}")

        kwargs: dict = {}
        if "language" in config:
            kwargs["language"] = str(config["language"])
        if "imports_to_ignore" in config:
            patterns = config["imports_to_ignore"]
            if isinstance(patterns, str):
                raise ConfigurationError("imports_to_ignore must be a list of patterns, not a single string")
            kwargs["imports_to_ignore"] = ImportIgnoreSet.from_strings(patterns)
        if "log_level" in config:
            kwargs["log_level"] = _parse_log_level(config["log_level"])
        return cls(**kwargs)


def _parse_log_level(value: Any) -> int:
    if isinstance(value, int):
        return value
    level = logging.getLevelName(str(value).upper())
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


class SampleProcessingService:
    """
    Entry points for the documentation pipeline: turns sample functions into illustrative code and renders the imports
    that go with them.

    Conversion problems never stop a sample from rendering. They are reported through `logger`, with the location and
    the original text of the node that failed, and the node is shown unconverted.
    """

    default_options: ClassVar[RenderOptions] = RenderOptions()
    """Used when no options are given. Subclasses may override this"""

    renderer_class: ClassVar[Type[SampleTreeRenderer]] = SampleTreeRenderer
    """This can be set to a subclass of `SampleTreeRenderer` to change how sample bodies are rendered"""

    options: RenderOptions
    logger: logging.Logger
    position_lookup: PositionLookup
    import_filter: ImportFilter

    def __init__(
        self,
        options: Optional[RenderOptions] = None,
        logger: Optional[logging.Logger] = None,
        position_lookup: Optional[PositionLookup] = None,
        fallback: Optional[ImportRenderer] = None,
    ) -> None:
        self.options = options if options is not None else self.default_options
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.position_lookup = position_lookup if position_lookup is not None else DocumentPositionLookup()
        self.import_filter = ImportFilter(
            self.options.imports_to_ignore,
            language=self.options.language,
            fallback=fallback if fallback is not None else DefaultImportRenderer(self.options.language),
        )

    def render_sample_body(self, node: SyntaxNode) -> str:
        """
        For a function-like declaration, render its body; a block body loses its outer braces. Any other node is
        rendered as a whole.

        Raises MissingBodyError for a declaration that has no body.
        """
        if isinstance(node, DeclarationWithBody):
            body_expression = node.body_expression
            if body_expression is None:
                raise MissingBodyError(f"Sample declaration has no body: {node.text}")
            body_expression_text = self.build_sample_text(body_expression)
            if isinstance(body_expression, BlockExpression):
                return remove_surrounding(body_expression_text, "{", "}")
            return body_expression_text
        return self.build_sample_text(node)

    def render_imports(self, node: SyntaxNode) -> RenderedImportBlock:
        return self.import_filter.render_imports(node)

    def build_sample_text(self, node: SyntaxNode) -> str:
        text, errors = self.renderer_class(self.position_lookup).render(node)
        source_file = node.containing_file
        file_name = source_file.name if source_file is not None else "<unknown>"
        for error in errors:
            self.report_conversion_error(file_name, error)
        self.logger.debug("Rendered sample from %s with %d conversion error(s)", file_name, len(errors))
        return text

    def report_conversion_error(self, file_name: str, error: ConvertError) -> None:
        self.logger.log(
            self.options.log_level,
            "%s: (%s): Exception thrown while converting \n```\n%s\n```\n%s",
            file_name,
            error.describe_location(),
            error.text,
            error.format_traceback(),
        )
