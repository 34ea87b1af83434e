# This module contains the entry points for turning GFA text into GfaGraphs.
#
# parse_line() handles a single line; parse_graph() handles a whole graph
# given as a str (e.g. the contents of a file) or as an iterable of lines;
# parse_file() reads a graph from a filename. Both parse_graph() and
# parse_file() validate the graph once it's been fully loaded, unless the
# validation level is 0.

from . import config
from .graph import GfaGraph
from .graph.lines import parse_line

__all__ = ["parse_line", "parse_graph", "parse_file"]


def parse_graph(text_or_lines, validate=config.DEFAULT_VALIDATE, **kwargs):
    """Creates a GfaGraph from some GFA data.

    Parameters
    ----------
    text_or_lines: str or iterable of str
        If a str, this is split into lines first. Empty lines are skipped.

    validate: int
        Validation level.

    **kwargs
        Passed on to the GfaGraph constructor (e.g. segments_first).

    Returns
    -------
    GfaGraph

    Raises
    ------
    GfaError
        If the data can't be parsed, or if (at level >= 1) the graph has
        unresolved references.
    """
    if isinstance(text_or_lines, str):
        lines = text_or_lines.split(config.LINE_SEP)
    else:
        lines = text_or_lines
    graph = GfaGraph(validate=validate, **kwargs)
    for line in lines:
        # Also strips the "\r" of Windows line endings
        line = line.rstrip("\r" + config.LINE_SEP)
        if len(line) > 0:
            graph.append(line)
    if validate >= config.VALIDATE_FORMAT:
        graph.validate()
    return graph


def parse_file(filename, validate=config.DEFAULT_VALIDATE, **kwargs):
    """Reads a GFA file into a GfaGraph. See GfaGraph.read_file()."""
    return GfaGraph.from_file(filename, validate=validate, **kwargs)
