"""Renderer adapter contract for serializing a group tree."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

# Parent identity used for subgraphs and nodes declared at the top level.
# Empty identities are never valid declarations, so it cannot collide.
TOP_LEVEL = ""


class DeclarationKind(str, Enum):
    """Kinds of declarations a renderer accepts."""
    SUBGRAPH = "subgraph"
    NODE = "node"
    EDGE = "edge"


@dataclass(frozen=True)
class Declaration:
    """One declaration received by a renderer, in arrival order."""
    kind: DeclarationKind
    identity: str
    parent: str | None = None  # Enclosing subgraph, None for edges
    start: str | None = None
    end: str | None = None
    attrs: dict[str, str] = field(default_factory=dict)


class GraphRenderer(ABC):
    """Abstract base class for graph renderers.

    Implementations raise a ``RenderError`` subclass to reject a
    declaration; callers stop at the first error.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @property
    def top_level(self) -> str:
        """Identity that stands for "no parent"."""
        return TOP_LEVEL

    @abstractmethod
    def add_subgraph(self, parent_id: str, name: str, attrs: dict[str, str]) -> None:
        """Declare subgraph ``name`` nested under ``parent_id``."""
        pass

    @abstractmethod
    def add_node(self, parent_id: str, name: str, attrs: dict[str, str]) -> None:
        """Declare node ``name`` inside subgraph ``parent_id``."""
        pass

    @abstractmethod
    def add_edge(self, start: str, end: str, attrs: dict[str, str], name: str | None = None) -> None:
        """Declare a directed edge between two identities.

        ``name`` identifies the edge in the declaration log and defaults to
        ``start->end``.
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format."""
        pass
