import numpy as np

from .backend import GraphBackend, as_weight


class AdjacencyMatrix(GraphBackend):
    """Dense adjacency-matrix backend.

    Edge weights live in a ``(V, V)`` numpy table next to a boolean presence
    mask, so a stored weight of ``0.0`` is still an edge.

    Parameters
    ----------
    n : int, optional
        Initial number of vertices.
    dtype : numpy dtype, optional
        Floating dtype of the weight table. Default ``float64``.

    Notes
    -----
    - Lookups and single-cell writes are O(1); ``successors``/``predecessors``
      scan one row/column (O(V)).
    - Physical capacity grows geometrically so ``add_vertex`` is amortised
      O(V); a regrow copies the whole table (O(V^2)).
    - Cells outside the logical ``[0, V)`` square are always zero/False.
    - ``remove_vertex`` shifts rows and columns above ``v`` down in place
      (O(V^2)).
    - Weights are rounded to ``dtype`` on write. With the default
      ``float64`` every weight reads back exactly; a narrower dtype such as
      ``float32`` trades precision for memory (``0.1`` reads back as
      ``0.10000000149011612``).

    """

    name = "matrix"

    def __init__(self, n: int = 0, dtype=np.float64):
        n = int(n)
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        dtype = np.dtype(dtype)
        if not np.issubdtype(dtype, np.floating):
            raise ValueError(f"dtype must be a floating dtype, got {dtype}")
        self._n = n
        self._weights = np.zeros((n, n), dtype=dtype)
        self._mask = np.zeros((n, n), dtype=bool)

    @property
    def dtype(self):
        return self._weights.dtype

    @property
    def capacity(self) -> int:
        return self._mask.shape[0]

    # grow-only helper to avoid per-insert exact resizes
    def _grow_to(self, target: int):
        cap = self.capacity
        if target <= cap:
            return
        # geometric bump
        new_cap = max(target, cap + max(8, cap >> 1))
        n = self._n
        weights = np.zeros((new_cap, new_cap), dtype=self._weights.dtype)
        mask = np.zeros((new_cap, new_cap), dtype=bool)
        weights[:n, :n] = self._weights[:n, :n]
        mask[:n, :n] = self._mask[:n, :n]
        self._weights = weights
        self._mask = mask

    def vertex_count(self) -> int:
        return self._n

    def get(self, u, v):
        u, v = self.check(u, v)
        if not self._mask[u, v]:
            return None
        return float(self._weights[u, v])

    def set(self, u, v, weight):
        u, v = self.check(u, v)
        self._weights[u, v] = as_weight(weight)
        self._mask[u, v] = True

    def unset(self, u, v) -> bool:
        u, v = self.check(u, v)
        if not self._mask[u, v]:
            return False
        self._mask[u, v] = False
        self._weights[u, v] = 0
        return True

    def set_pair(self, u, v, weight):
        u, v = self.check(u, v)
        weight = as_weight(weight)
        # one fancy-indexed write covers both (u, v) and (v, u)
        rows, cols = [u, v], [v, u]
        self._weights[rows, cols] = weight
        self._mask[rows, cols] = True

    def unset_pair(self, u, v) -> bool:
        u, v = self.check(u, v)
        rows, cols = [u, v], [v, u]
        removed = bool(self._mask[rows, cols].any())
        self._mask[rows, cols] = False
        self._weights[rows, cols] = 0
        return removed

    def successors(self, v):
        v = self.check(v)
        idx = np.flatnonzero(self._mask[v, : self._n])
        return zip(idx.tolist(), self._weights[v, idx].astype(float).tolist())

    def predecessors(self, v):
        v = self.check(v)
        idx = np.flatnonzero(self._mask[: self._n, v])
        return zip(idx.tolist(), self._weights[idx, v].astype(float).tolist())

    def add_vertex(self) -> int:
        self._grow_to(self._n + 1)
        self._n += 1
        return self._n - 1

    def add_vertices(self, count: int) -> list[int]:
        count = int(count)
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        start = self._n
        self._grow_to(start + count)
        self._n += count
        return list(range(start, self._n))

    def remove_vertex(self, v):
        v = self.check(v)
        n = self._n
        for arr in (self._weights, self._mask):
            # rows above v move up, then columns above v move left
            arr[v : n - 1, :n] = arr[v + 1 : n, :n]
            arr[: n - 1, v : n - 1] = arr[: n - 1, v + 1 : n]
            arr[n - 1, :n] = 0
            arr[:n, n - 1] = 0
        self._n = n - 1

    def entries(self):
        rows, cols = np.nonzero(self._mask[: self._n, : self._n])
        data = self._weights[rows, cols].astype(float)
        return zip(rows.tolist(), cols.tolist(), data.tolist())

    def edge_entry_count(self) -> int:
        return int(np.count_nonzero(self._mask[: self._n, : self._n]))

    def to_coo(self):
        n = self._n
        rows, cols = np.nonzero(self._mask[:n, :n])
        data = self._weights[rows, cols].astype(np.float64)
        return rows.astype(np.int64), cols.astype(np.int64), data

    def to_dense(self, nonedge: float = 0.0) -> np.ndarray:
        """Copy of the logical ``(V, V)`` weight table with ``nonedge`` in empty cells."""
        n = self._n
        return np.where(self._mask[:n, :n], self._weights[:n, :n], nonedge)

    def clear(self):
        self._weights[:] = 0
        self._mask[:] = False

    def copy(self) -> "AdjacencyMatrix":
        n = self._n
        other = AdjacencyMatrix(n, dtype=self._weights.dtype)
        other._weights[:, :] = self._weights[:n, :n]
        other._mask[:, :] = self._mask[:n, :n]
        return other

    def nbytes(self) -> int:
        return int(self._weights.nbytes + self._mask.nbytes)
