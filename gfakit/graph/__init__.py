from .gfa_graph import GfaGraph, Entity, ABSENT, VIRTUAL, REAL
from .record import Record, Header, Comment
from .segment import Segment, SegmentEnd, OrientedSegment
from .link import Link, Containment
from .path import Path
from .lines import RECORD_TYPES, parse_line
from .multiplication import copy_number_from_coverage
from . import connectivity, linear_paths, multiplication

__all__ = [
    "GfaGraph",
    "Entity",
    "ABSENT",
    "VIRTUAL",
    "REAL",
    "Record",
    "Header",
    "Comment",
    "Segment",
    "SegmentEnd",
    "OrientedSegment",
    "Link",
    "Containment",
    "Path",
    "RECORD_TYPES",
    "parse_line",
    "copy_number_from_coverage",
    "connectivity",
    "linear_paths",
    "multiplication",
]
