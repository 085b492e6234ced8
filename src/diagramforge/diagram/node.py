"""Diagram nodes."""

from ..graph.framework import GraphRenderer
from ..utils import randstr
from .options import NodeOption, default_node_options, format_number, trim_attrs


ID_LENGTH = 15


class Node:
    """A single renderable entity with an identity and visual attributes.

    The identity comes from the ``name`` option, or is a random string of
    ``ID_LENGTH`` lowercase letters when no name is given. It must be unique
    within a diagram; a second node with the same identity overwrites the
    first wherever both are added.
    """

    def __init__(self, *opts: NodeOption):
        self.options = default_node_options(*opts)
        if not self.options.name:
            self.options.name = randstr.string(ID_LENGTH)
        self._id = self.options.name

    @property
    def id(self) -> str:
        return self._id

    def label(self, text: str) -> "Node":
        self.options.label = text
        return self

    def color(self, color: str) -> "Node":
        self.options.color = color
        return self

    def attrs(self) -> dict[str, str]:
        """Merged attribute map; provider attributes override base ones."""
        o = self.options
        attrs = {
            "label": o.label,
            "labelloc": o.label_location,
            "shape": o.shape,
            "style": o.style,
            "image": o.image,
            "imagepos": o.image_position,
            "imagescale": o.image_scale,
            "width": format_number(o.width),
            "height": format_number(o.height),
            "fixedsize": format_number(o.fixed_size),
            "color": o.color,
            "penwidth": format_number(o.pen_width) if o.pen_width is not None else "",
            "fontname": o.font.name,
            "fontsize": format_number(o.font.size),
            "fontcolor": o.font.color,
        }
        attrs.update(o.attributes)

        return trim_attrs(attrs)

    def render(self, parent_id: str, renderer: GraphRenderer) -> None:
        renderer.add_node(parent_id, self._id, self.attrs())

    def __repr__(self) -> str:
        return f"Node(id={self._id!r}, label={self.options.label!r})"
