from .backend import GraphBackend, available_storage, make_backend, register_backend
from .directedness import DIRECTED, UNDIRECTED, Directed, EdgeType, Undirected
from .edgelist import EdgeList
from .exceptions import VertexOutOfRange
from .graph import Graph
from .matrix import AdjacencyMatrix
from .views import NeighborView
