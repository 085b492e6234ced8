"""diagramforge - Declarative builder for clustered Graphviz diagrams.

diagramforge assembles a tree of groups, nodes and edges with a fluent
builder API and serializes it into Graphviz DOT.
"""

__version__ = "0.1.0"
__description__ = "Declarative builder for clustered Graphviz diagrams"

from diagramforge.config import DiagramforgeConfig
from diagramforge.diagram import Diagram, Edge, Group, Node

__all__ = [
    "__version__",
    "__description__",
    "DiagramforgeConfig",
    "Diagram",
    "Group",
    "Node",
    "Edge",
]
