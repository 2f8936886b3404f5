"""
Rendering the import section that goes along with a sample. Imports that only exist to support the samples themselves
(by default anything under `samples.`) are of no interest to readers and are left out.
"""
import logging
from dataclasses import dataclass
from fnmatch import fnmatchcase
from typing import Iterable
from typing import Iterator
from typing import Optional
from typing import Protocol
from typing import runtime_checkable
from typing import Tuple

from typing_extensions import Self

from sample_illustrator.errors import ConfigurationError
from sample_illustrator.tree.nodes import ImportDirective
from sample_illustrator.tree.nodes import SyntaxNode

__all__ = [
    "DEFAULT_IMPORTS_TO_IGNORE",
    "DEFAULT_LANGUAGE",
    "ImportPattern",
    "ImportIgnoreSet",
    "RenderedImportBlock",
    "ImportRenderer",
    "DefaultImportRenderer",
    "ImportFilter",
    "render_imports",
]

logger = logging.getLogger(__name__)

DEFAULT_IMPORTS_TO_IGNORE = ("samples.*",)

DEFAULT_LANGUAGE = "kotlin"


@dataclass(frozen=True)
class ImportPattern:
    """An import path (`a.b.C`), or a path prefix followed by `*` (`a.b.*`) which matches everything under it"""

    pattern: str

    def __post_init__(self) -> None:
        if not self.pattern:
            raise ConfigurationError("Import pattern must not be empty")
        if "*" in self.pattern[:-1]:
            raise ConfigurationError(f"Wildcard is only allowed at the end of an import pattern: {self.pattern!r}")
        if any(c in self.pattern for c in "?[]"):
            raise ConfigurationError(f"Only a trailing '*' is supported in an import pattern: {self.pattern!r}")

    def matches(self, import_path: str) -> bool:
        return fnmatchcase(import_path, self.pattern)


@dataclass(frozen=True)
class ImportIgnoreSet:
    patterns: Tuple[ImportPattern, ...] = ()

    @classmethod
    def from_strings(cls, patterns: Iterable[str]) -> Self:
        return cls(tuple(ImportPattern(p) for p in patterns))

    def __contains__(self, import_path: object) -> bool:
        return isinstance(import_path, str) and any(p.matches(import_path) for p in self.patterns)

    def __iter__(self) -> Iterator[ImportPattern]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)


@dataclass(frozen=True)
class RenderedImportBlock:
    """A code block, tagged with its language"""

    language: str
    parts: Tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return "".join(self.parts)


@runtime_checkable
class ImportRenderer(Protocol):
    def render_imports(self, node: SyntaxNode) -> RenderedImportBlock:
        ...


class DefaultImportRenderer:
    """Used for nodes that do not belong to a source file we know how to read: renders no imports at all"""

    def __init__(self, language: str = DEFAULT_LANGUAGE) -> None:
        self.language = language

    def render_imports(self, node: SyntaxNode) -> RenderedImportBlock:
        return RenderedImportBlock(self.language)


class ImportFilter:
    """
    Renders the import list of the file that contains a node. The block starts with a newline and then holds the
    verbatim text of the import list, minus the directives that match `imports_to_ignore`. Whitespace and comments in
    the import list are kept as they are.
    """

    imports_to_ignore: ImportIgnoreSet
    language: str
    fallback: ImportRenderer

    def __init__(
        self,
        imports_to_ignore: ImportIgnoreSet,
        language: str = DEFAULT_LANGUAGE,
        fallback: Optional[ImportRenderer] = None,
    ) -> None:
        self.imports_to_ignore = imports_to_ignore
        self.language = language
        self.fallback = fallback or DefaultImportRenderer(language)

    def render_imports(self, node: SyntaxNode) -> RenderedImportBlock:
        source_file = node.containing_file
        if source_file is None:
            return self.fallback.render_imports(node)

        parts = ["\n"]
        import_list = source_file.import_list
        if import_list is not None:
            parts.extend(entry.text for entry in self.filter_entries(import_list.entries))
        return RenderedImportBlock(self.language, tuple(parts))

    def filter_entries(self, entries: Iterable[SyntaxNode]) -> Iterator[SyntaxNode]:
        for entry in entries:
            if isinstance(entry, ImportDirective) and entry.import_path in self.imports_to_ignore:
                logger.debug("Leaving out import %s", entry.import_path)
                continue
            yield entry


def render_imports(
    node: SyntaxNode,
    imports_to_ignore: Iterable[str] = DEFAULT_IMPORTS_TO_IGNORE,
    language: str = DEFAULT_LANGUAGE,
    fallback: Optional[ImportRenderer] = None,
) -> RenderedImportBlock:
    """Render the imports of node's file, see `ImportFilter`"""
    return ImportFilter(ImportIgnoreSet.from_strings(imports_to_ignore), language, fallback).render_imports(node)
