class VertexOutOfRange(IndexError):
    """Raised when a vertex index is outside ``[0, vertex_count)``.

    Parameters
    ----------
    vertex : int
        The offending index.
    vertex_count : int
        Number of vertices at the time of the call.

    """

    def __init__(self, vertex, vertex_count):
        self.vertex = vertex
        self.vertex_count = vertex_count
        super().__init__(f"Vertex {vertex} out of range [0, {vertex_count})")
