"""Storage contract shared by every graph representation.

A backend only knows about ordered ``(u, v)`` cells. Directedness is layered
on top by :mod:`graphrepr.core.directedness`, which decides whether a logical
edge write touches one cell or the mirrored pair.
"""

import numbers
import operator
from abc import ABC, abstractmethod
from importlib import import_module

import numpy as np

from .exceptions import VertexOutOfRange

__all__ = [
    "GraphBackend",
    "as_weight",
    "available_storage",
    "make_backend",
    "register_backend",
]


def as_weight(weight) -> float:
    """Validate and normalise an edge weight to ``float``.

    ``bool`` is rejected even though it is an ``int`` subclass.
    """
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise TypeError(f"Edge weight must be a real number, got {type(weight).__name__}")
    return float(weight)


class GraphBackend(ABC):
    """Abstract storage for a graph on dense vertex indices ``[0, n)``.

    Every public method validates its vertex arguments before touching
    storage, so a call either applies fully or raises
    :class:`VertexOutOfRange` with nothing changed.

    Notes
    -----
    - ``set_pair``/``unset_pair`` write both ``(u, v)`` and ``(v, u)`` as one
      operation. Subclasses may override them with a single physical write.
    - ``successors``/``predecessors`` yield ``(vertex, weight)`` tuples in a
      representation-defined but stable order.

    """

    name = None

    # Validation

    def _index(self, vertex) -> int:
        if isinstance(vertex, bool):
            raise TypeError("Vertex index must be an integer, got bool")
        try:
            idx = operator.index(vertex)
        except TypeError:
            raise TypeError(
                f"Vertex index must be an integer, got {type(vertex).__name__}"
            ) from None
        n = self.vertex_count()
        if idx < 0 or idx >= n:
            raise VertexOutOfRange(idx, n)
        return idx

    def check(self, *vertices):
        """Validate vertex indices; return them as plain ``int``.

        Returns
        -------
        int | tuple[int, ...]
            A single int for one argument, a tuple otherwise.

        Raises
        ------
        VertexOutOfRange
            If any index is outside ``[0, vertex_count)``.
        TypeError
            If any index is not an integer.

        """
        out = tuple(self._index(v) for v in vertices)
        return out[0] if len(out) == 1 else out

    # Contract

    @abstractmethod
    def vertex_count(self) -> int:
        """Number of vertices."""

    @abstractmethod
    def get(self, u, v):
        """Weight stored at ``(u, v)`` or ``None``."""

    @abstractmethod
    def set(self, u, v, weight):
        """Insert or overwrite the ``(u, v)`` cell."""

    @abstractmethod
    def unset(self, u, v) -> bool:
        """Clear the ``(u, v)`` cell. Returns whether something was removed."""

    def set_pair(self, u, v, weight):
        u, v = self.check(u, v)
        weight = as_weight(weight)
        self.set(u, v, weight)
        if u != v:
            self.set(v, u, weight)

    def unset_pair(self, u, v) -> bool:
        u, v = self.check(u, v)
        removed = self.unset(u, v)
        if u != v:
            removed = self.unset(v, u) or removed
        return removed

    @abstractmethod
    def successors(self, v):
        """Iterate ``(target, weight)`` for cells in row ``v``."""

    @abstractmethod
    def predecessors(self, v):
        """Iterate ``(source, weight)`` for cells in column ``v``."""

    @abstractmethod
    def add_vertex(self) -> int:
        """Append an isolated vertex and return its index."""

    def add_vertices(self, count: int) -> list[int]:
        count = operator.index(count)
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        return [self.add_vertex() for _ in range(count)]

    @abstractmethod
    def remove_vertex(self, v):
        """Drop ``v`` with every cell in its row and column, then compact."""

    @abstractmethod
    def entries(self):
        """Iterate every stored ``(u, v, weight)`` cell."""

    @abstractmethod
    def edge_entry_count(self) -> int:
        """Number of stored cells (mirrored undirected edges count twice)."""

    def to_coo(self):
        """Return every cell as ``(rows, cols, weights)`` numpy arrays."""
        rows, cols, data = [], [], []
        for u, v, w in self.entries():
            rows.append(u)
            cols.append(v)
            data.append(w)
        return (
            np.asarray(rows, dtype=np.int64),
            np.asarray(cols, dtype=np.int64),
            np.asarray(data, dtype=np.float64),
        )

    @abstractmethod
    def clear(self):
        """Drop every cell, keeping the vertex count."""

    @abstractmethod
    def copy(self) -> "GraphBackend":
        """Independent deep copy."""

    @abstractmethod
    def nbytes(self) -> int:
        """Approximate storage footprint in bytes."""

    def __len__(self):
        return self.vertex_count()

    def __repr__(self):
        return (
            f"{type(self).__name__}(vertices={self.vertex_count()}, "
            f"entries={self.edge_entry_count()})"
        )


# name -> (submodule, class_name)
_BACKENDS = {
    "matrix": (".matrix", "AdjacencyMatrix"),
    "list": (".edgelist", "EdgeList"),
}
_REGISTERED = {}


def register_backend(name: str, cls):
    """Register a :class:`GraphBackend` subclass under ``name``."""
    if not (isinstance(cls, type) and issubclass(cls, GraphBackend)):
        raise TypeError(f"{cls!r} is not a GraphBackend subclass")
    _REGISTERED[name] = cls


def available_storage() -> list[str]:
    return sorted(set(_BACKENDS) | set(_REGISTERED))


def _resolve(name: str):
    if name in _REGISTERED:
        return _REGISTERED[name]
    if name not in _BACKENDS:
        raise ValueError(
            f"Unknown backend '{name}'. Available: {', '.join(available_storage())}"
        )
    submod, cls = _BACKENDS[name]
    mod = import_module(submod, package=__package__)
    return getattr(mod, cls)


def make_backend(backend, n: int = 0) -> GraphBackend:
    """Build a backend from a name, a class, or pass an instance through.

    Parameters
    ----------
    backend : str | type[GraphBackend] | GraphBackend
    n : int
        Initial vertex count (ignored for instances, which must already
        have the vertices they need).

    """
    if isinstance(backend, GraphBackend):
        return backend
    if isinstance(backend, str):
        cls = _resolve(backend)
    elif isinstance(backend, type) and issubclass(backend, GraphBackend):
        cls = backend
    else:
        raise TypeError(f"Cannot build a backend from {backend!r}")
    n = operator.index(n)
    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")
    return cls(n)
