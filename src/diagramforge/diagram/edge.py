"""Directed edges between node identities."""

from ..graph.framework import GraphRenderer
from .options import EdgeOption, default_edge_options, format_number, trim_attrs


def edge_id(start: str, end: str, suffix: str = "") -> str:
    """Identity of an edge; the suffix separates parallel edges."""
    base = f"{start}->{end}"
    return f"{base}#{suffix}" if suffix else base


class Edge:
    """A directed relation between two node identities.

    Edges hold identity strings only, never the nodes themselves. An edge
    whose endpoints were never declared still renders.
    """

    def __init__(self, start: str, end: str, *opts: EdgeOption):
        self.start = start
        self.end = end
        self.options = default_edge_options(*opts)
        self._id = edge_id(start, end, self.options.name)

    @property
    def id(self) -> str:
        return self._id

    def attrs(self) -> dict[str, str]:
        o = self.options
        attrs = {
            "label": o.label,
            "color": o.color,
            "dir": o.direction,
            "style": o.style,
            "fontname": o.font.name,
            "fontsize": format_number(o.font.size),
            "fontcolor": o.font.color,
        }
        attrs.update(o.attributes)

        return trim_attrs(attrs)

    def render(self, renderer: GraphRenderer) -> None:
        renderer.add_edge(self.start, self.end, self.attrs(), name=self.id)

    def __repr__(self) -> str:
        return f"Edge({self.start!r} -> {self.end!r})"
