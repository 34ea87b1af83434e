# Connectivity and sequence-length statistics of a GfaGraph.
#
# Each segment has two ends (config.BEGIN and config.END); links join ends.
# An end without any links is a "dead end".

import networkx as nx
from gfakit import config, seq_utils
from gfakit.misc_utils import fmt_pct
from .graph_utils import to_networkx
from .segment import SegmentEnd


def dead_ends(graph):
    """Returns a list of the SegmentEnds without any incident links."""
    out = []
    for seg in graph.segments:
        for end in (config.END, config.BEGIN):
            se = SegmentEnd(seg.name, end)
            if len(graph.links_of(se)) == 0:
                out.append(se)
    return out


def n_dead_ends(graph):
    return len(dead_ends(graph))


def connected_components(graph):
    """Returns the connected components of the graph.

    Returns
    -------
    list of list of str
        Each component is a list of segment names (in graph order).
        Components are sorted in descending order by total sequence length,
        and then by number of segments.

    Raises
    ------
    ArgumentError
        If some segment's length is unknown.
    """
    lengths = {s.name: s.length_or_raise() for s in graph.segments}
    order = {name: i for i, name in enumerate(lengths)}
    ccs = []
    for cc in nx.connected_components(to_networkx(graph)):
        ccs.append(sorted(cc, key=lambda n: order[n]))
    ccs.sort(
        key=lambda c: (sum(lengths[n] for n in c), len(c)), reverse=True
    )
    return ccs


def component_lengths(graph):
    """Total sequence length of each connected component (largest first)."""
    lengths = {s.name: s.length_or_raise() for s in graph.segments}
    return [
        sum(lengths[n] for n in cc) for cc in connected_components(graph)
    ]


def lenstats(graph):
    """Computes segment length statistics.

    Returns
    -------
    (quartiles, n50, total_length)
        quartiles is a 5-tuple (see seq_utils.quartiles()). If the graph has
        no segments, quartiles and n50 are None and total_length is 0.

    Raises
    ------
    ArgumentError
        If some segment's length is unknown.
    """
    lengths = [s.length_or_raise() for s in graph.segments]
    if len(lengths) == 0:
        return None, None, 0
    return seq_utils.quartiles(lengths), seq_utils.n50(lengths), sum(lengths)


def info(graph, short=False):
    """Describes the graph's sequence and topology.

    Parameters
    ----------
    graph: GfaGraph

    short: bool
        If True, returns a single line of tab-separated key=value pairs:
        ns (number of segments), nl (number of links), cc (number of
        connected components), de (number of dead ends), tl (total sequence
        length), and 50 (N50). Otherwise, returns a multi-line report that
        includes some more information.

    Returns
    -------
    str
    """
    q, n50, tlen = lenstats(graph)
    nseg = len(graph.segments)
    nde = n_dead_ends(graph)
    cclens = component_lengths(graph)
    if short:
        return config.FIELD_SEP.join(
            [
                f"ns={nseg}",
                f"nl={len(graph.links)}",
                f"cc={len(cclens)}",
                f"de={nde}",
                f"tl={tlen}",
                f"50={'N/A' if n50 is None else n50}",
            ]
        )
    if q is None:
        q = (None,) * 5
    largest = cclens[0] if len(cclens) > 0 else None
    rows = [
        ("Segment count", nseg),
        ("Links count", len(graph.links)),
        ("Total length (bp)", tlen),
        ("Dead ends", nde),
        ("Percentage dead ends", fmt_pct(nde, nseg * 2)),
        ("Connected components", len(cclens)),
        ("Largest component (bp)", largest),
        ("N50 (bp)", n50),
        ("Shortest segment (bp)", q[0]),
        ("Lower quartile segment (bp)", q[1]),
        ("Median segment (bp)", q[2]),
        ("Upper quartile segment (bp)", q[3]),
        ("Longest segment (bp)", q[4]),
    ]
    width = max(len(label) for label, _ in rows) + 2
    return config.LINE_SEP.join(
        f"{label + ':':<{width}}{'N/A' if val is None else val}"
        for label, val in rows
    )
