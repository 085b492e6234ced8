"""Groups: hierarchical containers rendered as Graphviz clusters."""

import logging

from ..errors import GroupCycleError
from ..graph.framework import GraphRenderer
from .edge import Edge
from .node import Node
from .options import Background, EdgeOption, GroupOption, default_group_options, format_number, trim_attrs

logger = logging.getLogger(__name__)

CLUSTER_PREFIX = "cluster_"


class Group:
    """A container owning nodes, edges and child groups.

    Builder methods return the group (or the child group for ``group`` and
    ``new_group``) so calls can be chained. Nodes, edges and children are
    kept in plain dicts keyed by identity; later insertions with the same
    identity overwrite earlier ones without error.

    Groups are not thread-safe. Callers building a diagram from several
    threads must serialize access to the tree, or build disjoint subtrees
    separately and attach them with ``group`` once they are complete.
    """

    def __init__(
        self,
        name: str,
        *opts: GroupOption,
        background: Background = Background.BLUE,
        parent: "Group | None" = None,
    ):
        self._id = CLUSTER_PREFIX + name
        self._bg = background
        self.options = default_group_options(background, *opts)
        self._parent = parent
        self._children: dict[str, Group] = {}
        self._nodes: dict[str, Node] = {}
        self._edges: dict[str, Edge] = {}

    @property
    def id(self) -> str:
        return self._id

    @property
    def parent(self) -> "Group | None":
        return self._parent

    @property
    def background(self) -> Background:
        return self._bg

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def edges(self) -> list[Edge]:
        return list(self._edges.values())

    def children(self) -> list["Group"]:
        return list(self._children.values())

    def add(self, *nodes: Node) -> "Group":
        for node in nodes:
            self._nodes[node.id] = node
        return self

    def connect(self, start: Node, end: Node, *opts: EdgeOption) -> "Group":
        """Add both nodes to this group and record an edge between them."""
        self.add(start, end)
        return self.connect_by_id(start.id, end.id, *opts)

    def connect_by_id(self, start: str, end: str, *opts: EdgeOption) -> "Group":
        """Record an edge without requiring either node to be in this group."""
        edge = Edge(start, end, *opts)
        self._edges[edge.id] = edge
        return self

    def connect_all_to(self, end: str, *opts: EdgeOption) -> "Group":
        """Connect every node held directly by this group to ``end``.

        Nodes held by child groups are not included.
        """
        for node_id in list(self._nodes):
            self.connect_by_id(node_id, end, *opts)
        return self

    def connect_all_from(self, start: str, *opts: EdgeOption) -> "Group":
        """Connect ``start`` to every node held directly by this group."""
        for node_id in list(self._nodes):
            self.connect_by_id(start, node_id, *opts)
        return self

    def group(self, child: "Group") -> "Group":
        """Attach an existing group as a child and return it.

        A child that already has a parent is detached from it first, so a
        group is only ever listed under one parent.

        Raises:
            GroupCycleError: If ``child`` is this group or one of its ancestors
        """
        if child is self or child in self._ancestors():
            raise GroupCycleError(f"cannot attach '{child.id}' under '{self._id}': would create a cycle")

        previous = child._parent
        if previous is not None and previous is not self:
            logger.warning(f"Re-parenting group '{child.id}' from '{previous.id}' to '{self._id}'")
            previous._children.pop(child.id, None)

        self._children[child.id] = child
        child._parent = self
        return child

    def new_group(self, name: str, *opts: GroupOption) -> "Group":
        """Create a child group one background tier below this one."""
        child = Group(name, *opts, background=self._bg.next(), parent=self)
        self._children[child.id] = child
        return child

    def label(self, text: str) -> "Group":
        self.options.label = text
        return self

    def background_color(self, color: str) -> "Group":
        self.options.background_color = color
        return self

    def attrs(self) -> dict[str, str]:
        o = self.options
        attrs = {
            "label": o.label,
            "labeljust": o.label_justify,
            "pencolor": o.pen_color,
            "bgcolor": o.background_color,
            "shape": o.shape,
            "style": o.style,
            "fontname": o.font.name,
            "fontsize": format_number(o.font.size),
            "fontcolor": o.font.color,
        }
        attrs.update(o.attributes)

        return trim_attrs(attrs)

    def render(self, renderer: GraphRenderer) -> None:
        """Declare this group, its nodes, its edges, then its children.

        The first error raised by the renderer propagates immediately.
        """
        parent_id = self._parent.id if self._parent is not None else renderer.top_level
        renderer.add_subgraph(parent_id, self._id, self.attrs())

        for node in self._nodes.values():
            node.render(self._id, renderer)

        for edge in self._edges.values():
            edge.render(renderer)

        for child in self._children.values():
            child.render(renderer)

    def _ancestors(self) -> list["Group"]:
        ancestors = []
        current = self._parent
        while current is not None:
            ancestors.append(current)
            current = current._parent
        return ancestors

    def __repr__(self) -> str:
        return (
            f"Group(id={self._id!r}, nodes={len(self._nodes)}, "
            f"edges={len(self._edges)}, children={len(self._children)})"
        )
