__version__ = "0.1.0"

from .graph import (
    GfaGraph,
    Header,
    Comment,
    Segment,
    Link,
    Containment,
    Path,
)
from .parsers import parse_graph, parse_file, parse_line
from .tags import Tag
from .cigar import Overlap
from .numeric_array import NumericArray

__all__ = [
    "GfaGraph",
    "Header",
    "Comment",
    "Segment",
    "Link",
    "Containment",
    "Path",
    "parse_graph",
    "parse_file",
    "parse_line",
    "Tag",
    "Overlap",
    "NumericArray",
]
