"""Builder API for hierarchical diagrams.

Build a tree of groups, nodes and edges, then render it through a
``GraphRenderer``.
"""

from .diagram import Diagram
from .edge import Edge, edge_id
from .group import Group
from .node import Node
from .options import (
    Background,
    DiagramOptions,
    Direction,
    EdgeDirection,
    EdgeOptions,
    Font,
    GroupOptions,
    NodeOptions,
    OptionSet,
    merge_option_sets,
)

__all__ = [
    "Diagram",
    "Group",
    "Node",
    "Edge",
    "edge_id",
    "Background",
    "Direction",
    "EdgeDirection",
    "Font",
    "GroupOptions",
    "NodeOptions",
    "EdgeOptions",
    "DiagramOptions",
    "OptionSet",
    "merge_option_sets",
]
