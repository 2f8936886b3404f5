"""
Exceptions raised while converting samples, and the `ConvertError` record that the renderer collects when it recovers
from one of them.

Exception hierarchy:

- SampleConversionError
  - NodeConversionError (a single node could not be rewritten; recovered by the renderer)
    - ArgumentShapeError
    - NonLiteralMessageError
  - MissingBodyError (not recovered)
  - ConfigurationError
"""
import traceback
from dataclasses import dataclass
from typing import Tuple
from typing import Union

__all__ = [
    "SampleConversionError",
    "NodeConversionError",
    "ArgumentShapeError",
    "NonLiteralMessageError",
    "MissingBodyError",
    "ConfigurationError",
    "Location",
    "ConvertError",
]


class SampleConversionError(Exception):
    """Root of all errors raised by this package"""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NodeConversionError(SampleConversionError):
    pass


class ArgumentShapeError(NodeConversionError):
    """An assertion call does not have the arguments its rewrite rule needs"""


class NonLiteralMessageError(NodeConversionError):
    """A message argument is not a plain string literal (eg, it is a variable or it uses interpolation)"""


class MissingBodyError(SampleConversionError):
    """A sample declaration has no body to render"""


class ConfigurationError(SampleConversionError):
    pass


Location = Union[Tuple[int, int], int]
"""A 0-based (line, column) pair when it could be resolved, otherwise the raw character offset"""


@dataclass(frozen=True)
class ConvertError:
    """A failure to convert one node. The node's original text was used in the output in place of the conversion."""

    cause: Exception
    text: str
    """The original text of the node that failed"""
    location: Location

    def describe_location(self) -> str:
        if isinstance(self.location, tuple):
            line, column = self.location
            return f"{line}, {column}"
        return f"offset: {self.location}"

    def format_traceback(self) -> str:
        return "".join(traceback.format_exception(type(self.cause), self.cause, self.cause.__traceback__))
