import sys

from .backend import GraphBackend, as_weight


class EdgeList(GraphBackend):
    """Sparse per-vertex edge storage.

    Each vertex owns a ``{target: weight}`` dict of its out-entries. A mirror
    ``{source: weight}`` dict per vertex indexes in-entries so predecessor
    queries do not scan the whole graph.

    Parameters
    ----------
    n : int, optional
        Initial number of vertices.

    Notes
    -----
    - ``get``/``set``/``unset`` are O(1) (dicts indexed by the other endpoint).
    - ``successors(v)`` is O(out-degree) in insertion order;
      ``predecessors(v)`` is O(in-degree).
    - ``remove_vertex`` is O(V + E): every remaining dict is rebuilt with
      keys above ``v`` shifted down, preserving insertion order.

    """

    name = "list"

    def __init__(self, n: int = 0):
        n = int(n)
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        self._out = [{} for _ in range(n)]  # u -> {v: w}
        self._in = [{} for _ in range(n)]  # v -> {u: w}
        self._count = 0

    def vertex_count(self) -> int:
        return len(self._out)

    def get(self, u, v):
        u, v = self.check(u, v)
        return self._out[u].get(v)

    def set(self, u, v, weight):
        u, v = self.check(u, v)
        weight = as_weight(weight)
        if v not in self._out[u]:
            self._count += 1
        self._out[u][v] = weight
        self._in[v][u] = weight

    def unset(self, u, v) -> bool:
        u, v = self.check(u, v)
        if v not in self._out[u]:
            return False
        del self._out[u][v]
        del self._in[v][u]
        self._count -= 1
        return True

    def successors(self, v):
        v = self.check(v)
        return iter(list(self._out[v].items()))

    def predecessors(self, v):
        v = self.check(v)
        return iter(list(self._in[v].items()))

    def add_vertex(self) -> int:
        self._out.append({})
        self._in.append({})
        return len(self._out) - 1

    def remove_vertex(self, v):
        v = self.check(v)
        out_v, in_v = self._out[v], self._in[v]
        for x in in_v:
            if x != v:
                del self._out[x][v]
        for y in out_v:
            if y != v:
                del self._in[y][v]
        # a self-loop sits in both dicts but is one cell
        self._count -= len(out_v) + len(in_v) - (1 if v in out_v else 0)
        del self._out[v]
        del self._in[v]

        def shift(k):
            return k - 1 if k > v else k

        self._out = [{shift(k): w for k, w in d.items()} for d in self._out]
        self._in = [{shift(k): w for k, w in d.items()} for d in self._in]

    def entries(self):
        for u, targets in enumerate(self._out):
            for v, w in targets.items():
                yield u, v, w

    def edge_entry_count(self) -> int:
        return self._count

    def clear(self):
        for d in self._out:
            d.clear()
        for d in self._in:
            d.clear()
        self._count = 0

    def copy(self) -> "EdgeList":
        other = EdgeList(0)
        other._out = [dict(d) for d in self._out]
        other._in = [dict(d) for d in self._in]
        other._count = self._count
        return other

    def nbytes(self) -> int:
        total = sys.getsizeof(self._out) + sys.getsizeof(self._in)
        total += sum(sys.getsizeof(d) for d in self._out)
        total += sum(sys.getsizeof(d) for d in self._in)
        return total
