"""graphrepr: one graph contract over interchangeable storage backends.

Main classes:
    Graph: the composed graph (backend x directed/undirected semantics)
    AdjacencyMatrix: dense numpy-backed storage
    EdgeList: sparse per-vertex storage

Example:
    >>> from graphrepr import Graph
    >>> G = Graph(3, directed=False, backend="list")
    >>> G.add_edge(0, 1, 5)
    >>> sorted(G.neighbors(1))
    [0]
"""

__version__ = "0.1.0"

from .core import (
    DIRECTED,
    UNDIRECTED,
    AdjacencyMatrix,
    Directed,
    EdgeList,
    EdgeType,
    Graph,
    GraphBackend,
    NeighborView,
    Undirected,
    VertexOutOfRange,
    available_storage,
    make_backend,
    register_backend,
)

__all__ = [
    "Graph",
    "GraphBackend",
    "AdjacencyMatrix",
    "EdgeList",
    "EdgeType",
    "Directed",
    "Undirected",
    "DIRECTED",
    "UNDIRECTED",
    "NeighborView",
    "VertexOutOfRange",
    "available_storage",
    "make_backend",
    "register_backend",
]
