"""
The renderer: a walk over the sample's tree that echoes the original source text, except where it finds an assertion
call. Those are replaced using the rewrite rules in `rewriters`.

The output of this subpackage is plain text, along with a list of the nodes that could not be converted.
"""
from .visitor import render
from .visitor import SampleTreeRenderer
from .rewriters import REWRITERS

__all__ = ["render", "SampleTreeRenderer", "REWRITERS"]
