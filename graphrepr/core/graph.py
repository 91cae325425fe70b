import enum
import inspect
import json
import time
from datetime import UTC, datetime
from functools import wraps

import numpy as np
import polars as pl
import scipy.sparse as sp

from .backend import GraphBackend, as_weight, make_backend
from .directedness import EdgeType, resolve_directedness
from .views import NeighborView


class CacheManager:
    """Cache manager for materialized adjacency views (CSR)."""

    def __init__(self, graph):
        self._G = graph
        self._csr = None
        self._csr_version = None

    @property
    def csr(self):
        """Get the adjacency matrix in CSR (Compressed Sparse Row) format.
        Builds and caches on first access; rebuilt after any mutation.
        """
        if self._csr is None or self._csr_version != self._G._version:
            n = self._G.vertex_count()
            rows, cols, data = self._G._store.to_coo()
            self._csr = sp.csr_matrix((data, (rows, cols)), shape=(n, n))
            self._csr_version = self._G._version
        return self._csr

    def has_csr(self) -> bool:
        """True if CSR cache exists and matches current graph version."""
        return self._csr is not None and self._csr_version == self._G._version

    def invalidate(self):
        self._csr = None
        self._csr_version = None

    def clear(self):
        """Clear all caches."""
        self.invalidate()

    def info(self):
        """Get cache status and memory usage.

        Returns
        -------
        dict

        """
        if self._csr is None:
            return {"csr": {"cached": False}}
        m = self._csr
        size_bytes = m.data.nbytes + m.indices.nbytes + m.indptr.nbytes
        return {
            "csr": {
                "cached": True,
                "version": self._csr_version,
                "size_mb": size_bytes / (1024**2),
                "nnz": m.nnz,
                "shape": m.shape,
            }
        }


class Graph:
    """Graph on dense integer vertices, composed from a storage backend and a
    directedness modifier.

    Parameters
    ----------
    n : int, optional
        Initial number of vertices (default 0). Ignored when ``backend`` is an
        instance, except that it must then match its vertex count.
    directed : bool | EdgeType | str | Directedness, optional
        Edge semantics. Default ``True``.
    backend : str | type[GraphBackend] | GraphBackend, optional
        ``"matrix"`` (dense, O(1) lookups, O(V^2) memory) or ``"list"``
        (sparse, O(V+E) memory), a registered name, a backend class or a
        ready instance. Default ``"matrix"``.
    history : bool, optional
        Start with mutation logging enabled. Default ``True``.

    Notes
    -----
    - Vertices are ``0..V-1``. ``remove_vertex`` compacts: every index above
      the removed one shifts down by one, so callers must treat held indices
      as invalidated.
    - Out-of-range indices raise :class:`~graphrepr.core.exceptions.VertexOutOfRange`
      before anything is changed. Missing edges are never an error.
    - Undirected edges are written and removed as a mirrored pair in one
      backend call; ``(u, v)`` and ``(v, u)`` cannot diverge.
    - Vertex attributes are a Polars DF [DataFrame] keyed by ``vertex``.

    See Also
    --------
    add_edge, neighbors, remove_vertex, history

    """

    _VERTEX_RESERVED = {"vertex"}

    # Construction

    def __init__(self, n=None, directed=True, backend="matrix", *, history=True):
        self._mode = resolve_directedness(directed)
        if isinstance(backend, GraphBackend):
            if n is not None and int(n) != backend.vertex_count():
                raise ValueError(
                    f"n={n} does not match backend vertex count {backend.vertex_count()}"
                )
            if not self._mode.is_directed:
                self._check_symmetric(backend)
            self._store = backend
        else:
            self._store = make_backend(backend, 0 if n is None else n)

        self.vertex_attributes = pl.DataFrame(schema={"vertex": pl.Int64})
        self.cache = CacheManager(self)

        # History and Timeline
        self._history_enabled = bool(history)
        self._history = []  # list[dict]
        self._version = 0
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()  # wrap mutating methods

    @staticmethod
    def _same_weight(a, b):
        # NaN weights are stored as given and compare equal to themselves
        return a == b or (a is not None and b is not None and a != a and b != b)

    @staticmethod
    def _check_symmetric(store):
        for u, v, w in store.entries():
            if not Graph._same_weight(store.get(v, u), w):
                raise ValueError(
                    f"Backend is not symmetric at ({u}, {v}); cannot use it as an undirected graph"
                )

    @classmethod
    def from_edges(cls, edges, n=None, directed=True, backend="matrix", **kwargs):
        """Build a graph from ``(u, v)`` or ``(u, v, weight)`` items.

        Parameters
        ----------
        edges : iterable
        n : int, optional
            Vertex count. Defaults to one more than the largest endpoint.

        Returns
        -------
        Graph

        """
        edges = list(edges)
        if n is None:
            n = 1 + max((max(int(e[0]), int(e[1])) for e in edges), default=-1)
        G = cls(n, directed=directed, backend=backend, **kwargs)
        G.add_edges_from(edges)
        return G

    # Properties

    @property
    def directed(self) -> bool:
        return self._mode.is_directed

    @property
    def edge_type(self) -> EdgeType:
        return self._mode.edge_type

    @property
    def backend(self) -> GraphBackend:
        """The storage backend (read-only access; mutate through the graph)."""
        return self._store

    @property
    def version(self) -> int:
        return self._version

    # Capability contract

    def vertex_count(self) -> int:
        """Number of vertices."""
        return self._store.vertex_count()

    def has_edge(self, u, v) -> bool:
        """Test for the existence of edge ``(u, v)``.

        Raises
        ------
        VertexOutOfRange
            If ``u`` or ``v`` is not a vertex.

        """
        return self._store.get(u, v) is not None

    def edge_weight(self, u, v):
        """Weight of edge ``(u, v)``, or ``None`` when there is no such edge.

        Raises
        ------
        VertexOutOfRange
            If ``u`` or ``v`` is not a vertex.

        """
        return self._store.get(u, v)

    def neighbors(self, v) -> NeighborView:
        """Vertices adjacent to ``v``.

        Successors for directed graphs, every incident vertex for undirected
        ones. The returned view is lazy and can be iterated repeatedly.

        Raises
        ------
        VertexOutOfRange
            If ``v`` is not a vertex.

        """
        v = self._store.check(v)
        return NeighborView(lambda: self._mode.neighbors(self._store, v), v)

    def successors(self, v) -> NeighborView:
        return self.neighbors(v)

    def predecessors(self, v) -> NeighborView:
        """In-neighbors of ``v``. Same as :meth:`neighbors` when undirected."""
        v = self._store.check(v)
        return NeighborView(lambda: self._mode.predecessors(self._store, v), v)

    def add_edge(self, u, v, weight=1):
        """Insert edge ``(u, v)`` or update its weight.

        Parameters
        ----------
        u, v : int
        weight : real, optional
            Default ``1``.

        Raises
        ------
        VertexOutOfRange
            If ``u`` or ``v`` is not a vertex; nothing is written.
        TypeError
            If ``weight`` is not a real number.

        """
        u, v = self._store.check(u, v)
        self._mode.add_edge(self._store, u, v, as_weight(weight))

    def remove_edge(self, u, v) -> bool:
        """Remove edge ``(u, v)``; a missing edge is a no-op.

        Returns
        -------
        bool
            Whether an edge was removed.

        Raises
        ------
        VertexOutOfRange
            If ``u`` or ``v`` is not a vertex.

        """
        u, v = self._store.check(u, v)
        return self._mode.remove_edge(self._store, u, v)

    def add_vertex(self, **attributes) -> int:
        """Append an isolated vertex; return its index.

        Parameters
        ----------
        **attributes
            Optional vertex attributes to store right away.

        """
        idx = self._store.add_vertex()
        if attributes:
            self._set_vertex_attrs(idx, attributes)
        return idx

    def add_vertices(self, count: int) -> list[int]:
        """Append ``count`` isolated vertices; return their indices."""
        return self._store.add_vertices(count)

    def remove_vertex(self, v):
        """Remove ``v`` with all incident edges and compact the indices.

        Every vertex above ``v`` moves down by one; its attributes move
        with it.

        Raises
        ------
        VertexOutOfRange
            If ``v`` is not a vertex.

        """
        v = self._store.check(v)
        self._store.remove_vertex(v)

        df = self.vertex_attributes
        if df.height > 0:
            self.vertex_attributes = df.filter(pl.col("vertex") != v).with_columns(
                pl.when(pl.col("vertex") > v)
                .then(pl.col("vertex") - 1)
                .otherwise(pl.col("vertex"))
                .alias("vertex")
            )

    # Bulk

    def add_edges_from(self, edges):
        """Add many edges at once.

        Every item is validated before the first write, so a bad item leaves
        the graph unchanged.

        Parameters
        ----------
        edges : iterable
            ``(u, v)`` or ``(u, v, weight)`` items.

        Returns
        -------
        int
            Number of items applied.

        """
        staged = []
        for item in edges:
            if len(item) == 2:
                u, v = item
                w = 1
            elif len(item) == 3:
                u, v, w = item
            else:
                raise ValueError(f"Edge items must be (u, v) or (u, v, weight), got {item!r}")
            u, v = self._store.check(u, v)
            staged.append((u, v, as_weight(w)))
        for u, v, w in staged:
            self._mode.add_edge(self._store, u, v, w)
        return len(staged)

    def clear_edges(self):
        """Drop every edge, keeping vertices and their attributes."""
        self._store.clear()

    # Queries

    def vertices(self) -> range:
        return range(self.vertex_count())

    def edges(self) -> list:
        """All edges as ``(u, v, weight)``.

        Undirected graphs report each edge once, with ``u <= v``.
        """
        return list(self._mode.edges(self._store))

    def edge_count(self) -> int:
        return self._mode.edge_count(self._store)

    def out_edges(self, v) -> list:
        """``(target, weight)`` for edges leaving ``v``."""
        v = self._store.check(v)
        return list(self._mode.neighbors(self._store, v))

    def in_edges(self, v) -> list:
        """``(source, weight)`` for edges entering ``v``."""
        v = self._store.check(v)
        return list(self._mode.predecessors(self._store, v))

    def degree(self, v) -> int:
        """Number of edge endpoints at ``v`` (a self-loop counts twice)."""
        v = self._store.check(v)
        return self._mode.degree(self._store, v)

    def out_degree(self, v) -> int:
        return len(self.out_edges(v))

    def in_degree(self, v) -> int:
        return len(self.in_edges(v))

    # Vertex attributes

    def set_vertex_attrs(self, vertex, **attrs):
        """Upsert pure vertex attributes (non-structural) into the vertex DF [DataFrame]."""
        vertex = self._store.check(vertex)
        self._set_vertex_attrs(vertex, attrs)

    def _set_vertex_attrs(self, vertex, attrs):
        clean = {
            k: self._attr_value(v) for k, v in attrs.items() if k not in self._VERTEX_RESERVED
        }
        if not clean:
            return
        self.vertex_attributes = self._upsert_row(self.vertex_attributes, vertex, clean)

    @staticmethod
    def _attr_value(v):
        # keep attribute columns on plain Polars dtypes
        if isinstance(v, enum.Enum):
            return v.name
        if isinstance(v, dict):
            return json.dumps(v, sort_keys=True, default=str)
        if isinstance(v, np.generic):
            return v.item()
        return v

    def get_vertex_attrs(self, vertex) -> dict:
        """Return the attribute dict for a single vertex.

        Attributes never set on this vertex are omitted; ``{}`` when it has
        none.
        """
        vertex = self._store.check(vertex)
        for row in self.vertex_attributes.filter(pl.col("vertex") == vertex).iter_rows(named=True):
            return {k: val for k, val in row.items() if k != "vertex" and val is not None}
        return {}

    def get_attr_vertex(self, vertex, key, default=None):
        """Get a single vertex attribute (scalar) or default if missing.

        Parameters
        ----------
        vertex : int
        key : str
        default : Any, optional

        Returns
        -------
        Any

        """
        vertex = self._store.check(vertex)
        df = self.vertex_attributes
        if key not in df.columns:
            return default
        rows = df.filter(pl.col("vertex") == vertex)
        if rows.height == 0:
            return default
        val = rows.get_column(key).to_list()[0]
        return default if val is None else val

    def vertices_view(self, copy=True):
        """Read-only vertex attribute table.

        Returns
        -------
        polars.DataFrame
            Columns: ``vertex`` plus pure attributes (may be empty).

        """
        df = self.vertex_attributes.sort("vertex")
        return df.clone() if copy else df

    def edges_view(self):
        """Polars DF [DataFrame] of edges with columns ``source``, ``target``, ``weight``."""
        src, tgt, wts = [], [], []
        for u, v, w in self._mode.edges(self._store):
            src.append(u)
            tgt.append(v)
            wts.append(w)
        return pl.DataFrame(
            {"source": src, "target": tgt, "weight": wts},
            schema={"source": pl.Int64, "target": pl.Int64, "weight": pl.Float64},
        )

    def _pl_dtype_for_value(self, v):
        """INTERNAL: Infer an appropriate Polars dtype for a Python value.

        Notes
        -----
        - Lists/tuples infer inner dtype from the first element (defaults to ``Utf8``).

        """
        if v is None:
            return pl.Null
        if isinstance(v, bool):
            return pl.Boolean
        if isinstance(v, (int, np.integer)):
            return pl.Int64
        if isinstance(v, (float, np.floating)):
            return pl.Float64
        if isinstance(v, (bytes, bytearray)):
            return pl.Binary
        if isinstance(v, (list, tuple)):
            inner = self._pl_dtype_for_value(v[0]) if len(v) else pl.Utf8
            return pl.List(pl.Utf8 if inner == pl.Null else inner)
        return pl.Utf8

    @staticmethod
    def _common_dtype(left, right):
        if left == right:
            return left
        if {left, right} == {pl.Int64, pl.Float64}:
            return pl.Float64
        if isinstance(left, pl.List) and isinstance(right, pl.List):
            return pl.List(pl.Utf8)
        # mixed over time: fall back to Utf8
        return pl.Utf8

    def _ensure_attr_columns(self, df: pl.DataFrame, attrs: dict) -> pl.DataFrame:
        """INTERNAL: Create/align attribute columns and dtypes to accept ``attrs``.

        Notes
        -----
        - New columns are created with the inferred dtype.
        - A ``Null`` column is cast to the incoming dtype.
        - Int/float mixes widen to ``Float64``; lists with different inner
          dtypes become ``List(Utf8)``; other conflicts upcast to ``Utf8``
          (list cells turn into JSON text).

        """
        schema = df.schema
        for col, val in attrs.items():
            target = self._pl_dtype_for_value(val)
            if col not in schema:
                df = df.with_columns(pl.lit(None).cast(target).alias(col))
                continue
            cur = schema[col]
            if cur == pl.Null and target != pl.Null:
                df = df.with_columns(pl.col(col).cast(target))
            elif cur != target and target != pl.Null:
                df = df.with_columns(self._cast_attr(col, cur, self._common_dtype(cur, target)))
        return df

    @staticmethod
    def _cast_attr(col, cur, target):
        if isinstance(cur, pl.List) and not isinstance(target, pl.List):
            return pl.col(col).map_elements(
                lambda s: json.dumps(s.to_list(), default=str), return_dtype=pl.Utf8
            )
        return pl.col(col).cast(target)

    @staticmethod
    def _fit_value(v, dtype):
        # align an incoming value with the (possibly widened) column dtype
        if not isinstance(v, (list, tuple)):
            return v
        if not isinstance(dtype, pl.List):
            return json.dumps(list(v), default=str)
        if dtype == pl.List(pl.Utf8):
            return [None if x is None else str(x) for x in v]
        return list(v)

    @staticmethod
    def _lit(v, dtype):
        if isinstance(dtype, pl.List):
            return pl.lit(pl.Series([v], dtype=dtype))
        return pl.lit(v).cast(dtype)

    def _upsert_row(self, df: pl.DataFrame, vertex: int, attrs: dict) -> pl.DataFrame:
        """INTERNAL: Upsert the row keyed by ``vertex`` in the attribute DF."""
        df = self._ensure_attr_columns(df, attrs)
        schema = df.schema
        attrs = {k: self._fit_value(v, schema[k]) for k, v in attrs.items()}
        cond = pl.col("vertex") == pl.lit(vertex)

        if df.filter(cond).height > 0:
            # cast literals to column dtypes; keep exact semantics
            upds = [
                pl.when(cond).then(self._lit(v, schema[k])).otherwise(pl.col(k)).alias(k)
                for k, v in attrs.items()
            ]
            return df.with_columns(upds)

        # build a single row aligned to df schema
        new_row = dict.fromkeys(df.columns)
        new_row["vertex"] = vertex
        new_row.update(attrs)
        to_append = pl.DataFrame([new_row])

        # Resolve dtype mismatches:
        #  - df Null + to_append non-Null -> cast df to right
        #  - to_append Null + df non-Null -> cast to_append to left
        #  - left != right -> both to the common dtype
        left_schema = df.schema
        right_schema = to_append.schema
        df_casts = []
        app_casts = []
        for c in df.columns:
            left = left_schema[c]
            right = right_schema[c]
            if left == pl.Null and right != pl.Null:
                df_casts.append(pl.col(c).cast(right))
            elif right == pl.Null and left != pl.Null:
                app_casts.append(pl.col(c).cast(left).alias(c))
            elif left != right:
                common = self._common_dtype(left, right)
                df_casts.append(self._cast_attr(c, left, common))
                app_casts.append(self._cast_attr(c, right, common).alias(c))
        if df_casts:
            df = df.with_columns(df_casts)
        if app_casts:
            to_append = to_append.with_columns(app_casts)
        return df.vstack(to_append.select(df.columns))

    # Matrix exports

    def adjacency_matrix(self, sparse: bool = False, nonedge: float = 0.0):
        """Return the ``(V, V)`` weighted adjacency matrix.

        Parameters
        ----------
        sparse : bool, optional (default=False)
            If `True`, return a SciPy CSR matrix (a copy of the cached one).
            If `False`, return a dense NumPy ndarray.
        nonedge : float, optional
            Fill value for absent edges in the dense form.

        Returns
        -------
        scipy.sparse.csr_matrix | numpy.ndarray

        Notes
        -----
        - Undirected graphs produce a symmetric matrix.
        - The dense form does not distinguish a ``0.0``-weight edge from a
          missing one unless ``nonedge`` is set to something else (e.g. ``np.inf``).

        """
        if sparse:
            return self.cache.csr.copy()
        to_dense = getattr(self._store, "to_dense", None)
        if to_dense is not None:
            return to_dense(nonedge)
        n = self.vertex_count()
        out = np.full((n, n), nonedge, dtype=np.float64)
        rows, cols, data = self._store.to_coo()
        out[rows, cols] = data
        return out

    def memory_usage(self):
        """Approximate total memory usage in bytes (storage + attribute DF)."""
        return self._store.nbytes() + int(self.vertex_attributes.estimated_size())

    # Copying / comparison

    def copy(self, backend=None, history=None):
        """Deep copy the graph, optionally onto another backend.

        Parameters
        ----------
        backend : str | type[GraphBackend], optional
            Target storage. Default: same backend type (a direct storage copy).
        history : bool, optional
            Whether the copy logs mutations. Default: same as this graph.
            The event log itself is not copied.

        Returns
        -------
        Graph

        """
        if history is None:
            history = self._history_enabled
        if backend is None:
            new_graph = Graph(directed=self._mode, backend=self._store.copy(), history=history)
        else:
            new_graph = Graph(self.vertex_count(), directed=self._mode, backend=backend, history=history)
            for u, v, w in self._mode.edges(self._store):
                new_graph._mode.add_edge(new_graph._store, u, v, w)
        new_graph.vertex_attributes = self.vertex_attributes.clone()
        return new_graph

    def _edge_map(self):
        return {(u, v): w for u, v, w in self._mode.edges(self._store)}

    def __eq__(self, other):
        if not isinstance(other, Graph):
            return NotImplemented
        if self.directed != other.directed or self.vertex_count() != other.vertex_count():
            return False
        mine, theirs = self._edge_map(), other._edge_map()
        if mine.keys() != theirs.keys():
            return False
        return all(self._same_weight(w, theirs[k]) for k, w in mine.items())

    __hash__ = None

    def __len__(self):
        return self.vertex_count()

    def __contains__(self, vertex):
        if isinstance(vertex, bool) or not isinstance(vertex, (int, np.integer)):
            return False
        return 0 <= vertex < self.vertex_count()

    def __repr__(self):
        return (
            f"Graph(directed={self.directed}, backend={self._store.name!r}, "
            f"vertices={self.vertex_count()}, edges={self.edge_count()})"
        )

    # History and Timeline

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple, range)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        # NumPy scalars
        if isinstance(x, (np.generic,)):
            return x.item()
        if isinstance(x, enum.Enum):
            return x.value
        # Polars, SciPy, or other heavy objects -> just a tag
        t = type(x).__name__
        return f"<<{t}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        evt = {
            "version": self._version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        # sanitize
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                result = fn(*args, **kwargs)
                # only successful calls reach here
                self._version += 1
                payload = {}
                for k, v in bound.arguments.items():
                    if k != "self":
                        payload[k] = v
                payload["result"] = result
                self._log_event(op, **payload)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        # Mutating methods to wrap. Add here if you add new mutators.
        to_wrap = [
            "add_vertex",
            "add_vertices",
            "add_edge",
            "add_edges_from",
            "remove_edge",
            "remove_vertex",
            "set_vertex_attrs",
            "clear_edges",
        ]
        for name in to_wrap:
            fn = getattr(self, name)
            # Avoid double-wrapping
            if getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._log_mutation(name)(fn))

    def _history_frame(self) -> pl.DataFrame:
        keys = []
        for evt in self._history:
            for k in evt:
                if k not in keys:
                    keys.append(k)
        data = {}
        for k in keys:
            vals = [evt.get(k) for evt in self._history]
            kinds = {type(v) for v in vals if v is not None}
            if kinds == {int, float}:
                data[k] = pl.Series(
                    k, [None if v is None else float(v) for v in vals], dtype=pl.Float64
                )
                continue
            # columns polars cannot type as one scalar dtype are stored as JSON text
            if len(kinds) > 1:
                vals = [None if v is None else json.dumps(v) for v in vals]
            elif kinds & {list, dict}:
                vals = [None if v is None else json.dumps(v) for v in vals]
            elif not kinds:
                data[k] = pl.Series(k, vals, dtype=pl.Utf8)
                continue
            data[k] = vals
        return pl.DataFrame(data)

    def history(self, as_df: bool = False):
        """Return the append-only mutation history.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise return a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Each event includes: 'version', 'ts_utc' (UTC ISO-8601), 'mono_ns'
            (monotonic nanoseconds since the graph was created), 'op', the call
            arguments and 'result'. In the DF form, columns mixing value types
            (e.g. list results next to ints) hold JSON text.

        Notes
        -----
        Only successful mutations are recorded. Ordering is guaranteed by
        'mono_ns'; 'version' is the graph version after the call.

        """
        return self._history_frame() if as_df else list(self._history)

    def export_history(self, path: str):
        """Write the mutation history to disk.

        Parameters
        ----------
        path : str
            Output path. Supported extensions: '.parquet', '.ndjson' (a.k.a. '.jsonl'),
            '.json', '.csv'. Unknown extensions default to Parquet by appending '.parquet'.

        Returns
        -------
        int
            Number of events written. Returns 0 if the history is empty.

        Raises
        ------
        OSError
            If the file cannot be written.

        """
        if not self._history:
            return 0
        path = str(path)
        p = path.lower()
        if p.endswith(".ndjson") or p.endswith(".jsonl"):
            with open(path, "w", encoding="utf-8") as f:
                for evt in self._history:
                    f.write(json.dumps(evt, ensure_ascii=False) + "\n")
            return len(self._history)
        if p.endswith(".json"):
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._history, f, ensure_ascii=False)
            return len(self._history)
        df = self._history_frame()
        if p.endswith(".csv"):
            df.write_csv(path)
            return len(df)
        if p.endswith(".parquet"):
            df.write_parquet(path)
            return len(df)
        # Default to Parquet if unknown
        df.write_parquet(path + ".parquet")
        return len(df)

    def enable_history(self, flag: bool = True):
        """Enable or disable in-memory mutation logging.

        The graph version keeps counting while logging is paused.
        """
        self._history_enabled = bool(flag)

    def clear_history(self):
        """Clear the in-memory mutation log (exported files are untouched)."""
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker into the mutation history.

        Parameters
        ----------
        label : str
            Human-readable tag for the marker event.

        Notes
        -----
        The event is recorded with 'op'='mark'. Logging must be enabled for
        the marker to be recorded. Markers do not change the graph version.

        """
        self._log_event("mark", label=label)

    # Lazy proxies
    ## Lazy NX proxy

    @property
    def nx(self):
        """Accessor for the lazy NX proxy.
        Usage: G.nx.algorithm(G, ...); e.g: G.nx.shortest_path_length(G, 0, weight="weight")
        """
        if not hasattr(self, "_nx_proxy"):
            self._nx_proxy = self._LazyNXProxy(self)
        return self._nx_proxy

    class _LazyNXProxy:
        """Lazy, cached NX (NetworkX) adapter:
        - On-demand conversion, reused until the owner's version changes.
        - Only arguments that *are* the owner graph get replaced by the
          NetworkX graph; nothing is injected implicitly.
        """

        def __init__(self, owner: "Graph"):
            self._G = owner
            self._nxG = None
            self._nx_version = None

        def clear(self):
            """Drop the cached NX graph."""
            self._nxG = None
            self._nx_version = None

        def backend(self):
            """Return the (cached) NetworkX conversion of the owner graph."""
            if self._nxG is None or self._nx_version != self._G._version:
                from ..adapters.networkx import to_nx

                self._nxG = to_nx(self._G)
                self._nx_version = self._G._version
            return self._nxG

        def __getattr__(self, name: str):
            if name.startswith("_"):
                raise AttributeError(name)
            from ..adapters import load_module

            nx = load_module("networkx")
            fn = getattr(nx, name, None)
            if fn is None or not callable(fn):
                raise AttributeError(f"networkx has no callable '{name}'")

            def wrapper(*args, **kwargs):
                owner = self._G
                if any(a is owner for a in args) or any(v is owner for v in kwargs.values()):
                    nxG = self.backend()
                    args = [nxG if a is owner else a for a in args]
                    kwargs = {k: (nxG if v is owner else v) for k, v in kwargs.items()}
                return fn(*args, **kwargs)

            wrapper.__name__ = name
            return wrapper
