"""Graphviz DOT renderer backed by the ``graphviz`` package."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import graphviz

from ..errors import DuplicateIdentityError, InvalidIdentityError, UnknownParentError
from .framework import TOP_LEVEL, Declaration, DeclarationKind, GraphRenderer

logger = logging.getLogger(__name__)


def _plain(attrs: dict[str, str]) -> dict[str, str]:
    """Mark values as plain text so "<...>" is not emitted as an HTML label."""
    return {key: graphviz.nohtml(value) for key, value in attrs.items()}


@dataclass
class _Subgraph:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[str] = field(default_factory=list)
    nodes: list[str] = field(default_factory=list)


class DotRenderer(GraphRenderer):
    """Collects declarations and emits them as a nested Graphviz digraph.

    Subgraph identities must be unique. A node declared a second time is
    moved to the most recent parent and takes the most recent attributes,
    so a node held by several groups ends up in whichever renders last.
    Edges may reference identities that were never declared; Graphviz
    creates a placeholder node for them.
    """

    def __init__(
        self,
        name: str = "G",
        graph_attrs: dict[str, str] | None = None,
        node_attrs: dict[str, str] | None = None,
        edge_attrs: dict[str, str] | None = None,
    ):
        self.name = name
        self.graph_attrs = dict(graph_attrs or {})
        self.node_attrs = dict(node_attrs or {})
        self.edge_attrs = dict(edge_attrs or {})
        self.declarations: list[Declaration] = []

        self._subgraphs: dict[str, _Subgraph] = {TOP_LEVEL: _Subgraph(TOP_LEVEL)}
        self._nodes: dict[str, tuple[str, dict[str, str]]] = {}
        self._edges: list[tuple[str, str, dict[str, str]]] = []

    @property
    def format_name(self) -> str:
        return "dot"

    def get_file_extension(self) -> str:
        return ".dot"

    def add_subgraph(self, parent_id: str, name: str, attrs: dict[str, str]) -> None:
        self._check_identity(name, allow_port=True)
        if name in self._subgraphs:
            raise DuplicateIdentityError("subgraph", name)
        parent = self._parent(parent_id, name)

        self._subgraphs[name] = _Subgraph(name, dict(attrs))
        parent.children.append(name)
        self._record(DeclarationKind.SUBGRAPH, name, parent=parent_id, attrs=attrs)

    def add_node(self, parent_id: str, name: str, attrs: dict[str, str]) -> None:
        self._check_identity(name)
        parent = self._parent(parent_id, name)

        previous = self._nodes.get(name)
        if previous is not None:
            old_parent, _ = previous
            logger.debug(f"Node '{name}' re-declared, moving from '{old_parent}' to '{parent_id}'")
            self._subgraphs[old_parent].nodes.remove(name)

        self._nodes[name] = (parent_id, dict(attrs))
        parent.nodes.append(name)
        self._record(DeclarationKind.NODE, name, parent=parent_id, attrs=attrs)

    def add_edge(self, start: str, end: str, attrs: dict[str, str], name: str | None = None) -> None:
        self._check_identity(start)
        self._check_identity(end)

        self._edges.append((start, end, dict(attrs)))
        self.declarations.append(Declaration(
            kind=DeclarationKind.EDGE,
            identity=name or f"{start}->{end}",
            start=start,
            end=end,
            attrs=dict(attrs),
        ))

    def subgraph_parent(self, name: str) -> str | None:
        """Return the identity a subgraph was declared under, if declared."""
        for parent_id, subgraph in self._subgraphs.items():
            if name in subgraph.children:
                return parent_id
        return None

    def node_parent(self, name: str) -> str | None:
        """Return the subgraph a node currently belongs to, if declared."""
        entry = self._nodes.get(name)
        return entry[0] if entry else None

    def dangling_edges(self) -> list[tuple[str, str]]:
        """Edges with at least one endpoint that was never declared as a node."""
        return [
            (start, end) for start, end, _ in self._edges
            if start not in self._nodes or end not in self._nodes
        ]

    def to_digraph(self) -> graphviz.Digraph:
        """Build a ``graphviz.Digraph`` from everything declared so far."""
        dot = graphviz.Digraph(
            name=self.name,
            graph_attr=_plain(self.graph_attrs),
            node_attr=_plain(self.node_attrs),
            edge_attr=_plain(self.edge_attrs),
        )
        self._emit(dot, TOP_LEVEL)

        for start, end, attrs in self._edges:
            dot.edge(start, end, _attributes=_plain(attrs))

        return dot

    @property
    def source(self) -> str:
        """DOT source text for the declared graph."""
        return self.to_digraph().source

    def write(self, path: Path) -> Path:
        """Write the DOT source to ``path`` and return it."""
        path = Path(path)
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.source)
        logger.info(f"Wrote {len(self._nodes)} nodes and {len(self._edges)} edges to {path}")
        return path

    def _emit(self, target: graphviz.Digraph, subgraph_id: str) -> None:
        subgraph = self._subgraphs[subgraph_id]

        for node_id in subgraph.nodes:
            _, attrs = self._nodes[node_id]
            target.node(node_id, _attributes=_plain(attrs))

        for child_id in subgraph.children:
            child = graphviz.Digraph(name=child_id, graph_attr=_plain(self._subgraphs[child_id].attrs))
            self._emit(child, child_id)
            target.subgraph(child)

    def _parent(self, parent_id: str, name: str) -> _Subgraph:
        parent = self._subgraphs.get(parent_id)
        if parent is None:
            raise UnknownParentError(parent_id, name)
        return parent

    def _record(self, kind: DeclarationKind, name: str, parent: str, attrs: dict[str, str]) -> None:
        logger.debug(f"Declared {kind.value} '{name}' under '{parent}'")
        self.declarations.append(Declaration(kind=kind, identity=name, parent=parent, attrs=dict(attrs)))

    @staticmethod
    def _check_identity(identity: str, allow_port: bool = False) -> None:
        if not identity:
            raise InvalidIdentityError(identity, "identity is empty")
        if any(ord(ch) < 32 or ord(ch) == 127 for ch in identity):
            raise InvalidIdentityError(identity, "identity contains control characters")
        # The graphviz package reads "node:port" in edge endpoints.
        if not allow_port and ":" in identity:
            raise InvalidIdentityError(identity, "identity contains the port separator ':'")
