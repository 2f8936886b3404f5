from ._version import version as __version__

__all__ = [
    "__version__",
    "ConvertError",
    "DocumentPositionLookup",
    "ImportFilter",
    "ImportIgnoreSet",
    "MissingBodyError",
    "render",
    "render_imports",
    "RenderedImportBlock",
    "RenderOptions",
    "SampleConversionError",
    "SampleProcessingService",
    "SampleTreeRenderer",
]

from .document import DocumentPositionLookup
from .errors import ConvertError
from .errors import MissingBodyError
from .errors import SampleConversionError
from .imports import ImportFilter
from .imports import ImportIgnoreSet
from .imports import render_imports
from .imports import RenderedImportBlock
from .rendering import render
from .rendering import SampleTreeRenderer
from .service import RenderOptions
from .service import SampleProcessingService
