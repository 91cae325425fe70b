class NeighborView:
    """Lazy, restartable view of the vertices adjacent to one vertex.

    Each iteration asks the backend afresh, so the view always reflects the
    current graph. Order is the backend's (stable while the graph is not
    mutated).

    Parameters
    ----------
    source : callable
        Zero-argument callable returning an iterator of ``(vertex, weight)``.
    vertex : int
        The vertex the view was taken from (for ``repr`` only).

    """

    __slots__ = ("_source", "_vertex")

    def __init__(self, source, vertex):
        self._source = source
        self._vertex = vertex

    def __iter__(self):
        for x, _ in self._source():
            yield x

    def items(self):
        """Iterate ``(vertex, weight)`` pairs."""
        return iter(list(self._source()))

    def __len__(self):
        return sum(1 for _ in self._source())

    def __contains__(self, vertex):
        return any(x == vertex for x, _ in self._source())

    def __eq__(self, other):
        if isinstance(other, NeighborView):
            return list(self) == list(other)
        if isinstance(other, (set, frozenset)):
            return set(self) == other
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    __hash__ = None

    def __repr__(self):
        return f"NeighborView({self._vertex}: {list(self)})"
