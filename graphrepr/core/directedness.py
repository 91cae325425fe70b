"""Directed and undirected edge semantics as strategies over a backend.

A modifier never stores anything itself. It maps the logical graph
operations onto backend cells: a directed edge is one cell, an undirected
edge is the mirrored ``(u, v)``/``(v, u)`` pair written through
``set_pair``/``unset_pair`` so both cells change in the same call.
"""

from abc import ABC, abstractmethod
from enum import Enum

__all__ = ["EdgeType", "Directed", "Undirected", "DIRECTED", "UNDIRECTED", "resolve_directedness"]


class EdgeType(Enum):
    DIRECTED = "DIRECTED"
    UNDIRECTED = "UNDIRECTED"


class Directedness(ABC):
    """Base strategy; see :class:`Directed` and :class:`Undirected`."""

    edge_type = None

    @property
    def is_directed(self) -> bool:
        return self.edge_type is EdgeType.DIRECTED

    @abstractmethod
    def add_edge(self, store, u, v, weight):
        """Write the logical edge ``(u, v)`` into ``store``."""

    @abstractmethod
    def remove_edge(self, store, u, v) -> bool:
        """Remove the logical edge ``(u, v)``; return whether it existed."""

    @abstractmethod
    def neighbors(self, store, v):
        """Iterate ``(vertex, weight)`` adjacent to ``v``."""

    @abstractmethod
    def predecessors(self, store, v):
        """Iterate ``(vertex, weight)`` with an edge into ``v``."""

    @abstractmethod
    def edges(self, store):
        """Iterate every logical edge as ``(u, v, weight)``."""

    @abstractmethod
    def edge_count(self, store) -> int:
        """Number of logical edges."""

    @abstractmethod
    def degree(self, store, v) -> int:
        """Number of edge endpoints at ``v``."""

    def __repr__(self):
        return f"{type(self).__name__}()"

    def __eq__(self, other):
        return isinstance(other, Directedness) and other.edge_type is self.edge_type

    def __hash__(self):
        return hash(self.edge_type)


class Directed(Directedness):
    """Edges are ordered pairs; ``neighbors`` yields successors only."""

    edge_type = EdgeType.DIRECTED

    def add_edge(self, store, u, v, weight):
        store.set(u, v, weight)

    def remove_edge(self, store, u, v) -> bool:
        return store.unset(u, v)

    def neighbors(self, store, v):
        return store.successors(v)

    def predecessors(self, store, v):
        return store.predecessors(v)

    def edges(self, store):
        return store.entries()

    def edge_count(self, store) -> int:
        return store.edge_entry_count()

    def degree(self, store, v) -> int:
        # a self-loop is both an out- and an in-entry, so it counts twice
        return sum(1 for _ in store.successors(v)) + sum(1 for _ in store.predecessors(v))


class Undirected(Directedness):
    """Edges are unordered; every write goes through the mirrored pair."""

    edge_type = EdgeType.UNDIRECTED

    def add_edge(self, store, u, v, weight):
        store.set_pair(u, v, weight)

    def remove_edge(self, store, u, v) -> bool:
        return store.unset_pair(u, v)

    def neighbors(self, store, v):
        return store.successors(v)

    # identical to neighbors for undirected graphs
    predecessors = neighbors

    def edges(self, store):
        # each mirrored pair is reported once, as (min, max)
        return ((u, v, w) for u, v, w in store.entries() if u <= v)

    def edge_count(self, store) -> int:
        loops = sum(1 for i in range(store.vertex_count()) if store.get(i, i) is not None)
        return (store.edge_entry_count() + loops) // 2

    def degree(self, store, v) -> int:
        deg = 0
        for x, _ in store.successors(v):
            deg += 2 if x == v else 1
        return deg


DIRECTED = Directed()
UNDIRECTED = Undirected()


def resolve_directedness(directed) -> Directedness:
    """Accept ``bool``, :class:`EdgeType` or a :class:`Directedness` instance."""
    if isinstance(directed, Directedness):
        return directed
    if isinstance(directed, EdgeType):
        return DIRECTED if directed is EdgeType.DIRECTED else UNDIRECTED
    if isinstance(directed, str):
        try:
            return resolve_directedness(EdgeType(directed.upper()))
        except ValueError:
            raise ValueError(f"Unknown edge type '{directed}'") from None
    return DIRECTED if directed else UNDIRECTED
