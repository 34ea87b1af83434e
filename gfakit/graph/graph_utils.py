import networkx as nx


def to_networkx(graph):
    """Converts a GfaGraph to an undirected nx.MultiGraph.

    Nodes are the names of the graph's (real) segments; each link becomes one
    edge, with the link's "uid" stored as an edge attribute. Links touching a
    virtual segment are skipped, since there's no node for them to attach to.

    Parameters
    ----------
    graph: GfaGraph

    Returns
    -------
    nx.MultiGraph
    """
    g = nx.MultiGraph()
    for seg in graph.segments:
        g.add_node(seg.name, length=seg.length)
    for link in graph.links:
        if link.from_name in g and link.to_name in g:
            g.add_edge(link.from_name, link.to_name, uid=link.uid)
    return g
