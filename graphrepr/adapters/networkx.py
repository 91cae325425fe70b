"""
NetworkX adapter for graphrepr Graph.

Provides:
    to_nx(G)                 -> nx.DiGraph | nx.Graph
    from_nx(nxG, backend=..) -> Graph

Vertices map to nodes ``0..V-1`` with their attributes as node data; edge
weights travel as the ``weight`` edge attribute.
"""

try:
    import networkx as nx
except ModuleNotFoundError as e:
    raise ModuleNotFoundError(
        "Optional dependency 'networkx' is not installed. "
        "Install with: pip install graphrepr[networkx]"
    ) from e

import warnings

from ..core.graph import Graph


def to_nx(graph: Graph, *, with_attrs: bool = True):
    """
    Export a Graph to a NetworkX DiGraph (directed) or Graph (undirected).

    Parameters
    ----------
    graph : Graph
        Source graph instance.
    with_attrs : bool
        If True, copy vertex attributes into node data.

    Returns
    -------
    networkx.DiGraph | networkx.Graph
    """
    nxG = nx.DiGraph() if graph.directed else nx.Graph()
    nxG.add_nodes_from(graph.vertices())

    if with_attrs and graph.vertex_attributes.height > 0:
        for row in graph.vertex_attributes.iter_rows(named=True):
            v = row.pop("vertex")
            nxG.nodes[v].update({k: val for k, val in row.items() if val is not None})

    nxG.add_weighted_edges_from(graph.edges(), weight="weight")
    return nxG


def from_nx(nxG, *, backend="matrix", label_attr: str = "label", weight: str = "weight", history=True) -> Graph:
    """
    Import a NetworkX graph.

    Parameters
    ----------
    nxG : networkx.Graph | networkx.DiGraph | networkx.MultiGraph | networkx.MultiDiGraph
    backend : str | type, optional
        Storage for the new graph (``"matrix"`` or ``"list"``).
    label_attr : str
        Vertex attribute that keeps the original node label whenever it
        differs from the assigned index.
    weight : str
        Edge data key holding the weight (missing -> 1).
    history : bool
        Whether the new graph logs mutations.

    Returns
    -------
    Graph

    Notes
    -----
    Nodes are numbered in NetworkX iteration order. Parallel edges of a
    multigraph collapse into one edge (last weight wins), with a warning.
    """
    nodes = list(nxG.nodes())
    index = {node: i for i, node in enumerate(nodes)}
    G = Graph(len(nodes), directed=nxG.is_directed(), backend=backend, history=history)

    if nxG.is_multigraph():
        warnings.warn(
            "from_nx: multigraph input; parallel edges are collapsed (last weight wins)",
            stacklevel=2,
        )

    G.add_edges_from(
        (index[u], index[v], data.get(weight, 1)) for u, v, data in nxG.edges(data=True)
    )

    for node, data in nxG.nodes(data=True):
        attrs = dict(data)
        i = index[node]
        if not (isinstance(node, int) and node == i):
            attrs[label_attr] = node
        if attrs:
            G.set_vertex_attrs(i, **attrs)
    return G
