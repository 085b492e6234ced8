"""Attribute and option model for groups, nodes, edges and diagrams.

Every entity kind has a dataclass of defaults. Options are plain functions
that mutate such a dataclass in place; they are applied strictly in call
order, so the last option touching a field wins.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Background(int, Enum):
    """Background tiers for nested groups. Tiers cycle after YELLOW."""
    BLUE = 0
    GREEN = 1
    PURPLE = 2
    YELLOW = 3

    @property
    def color(self) -> str:
        return _BACKGROUND_COLORS[self]

    def next(self) -> "Background":
        """Tier used by a group nested directly under this one."""
        return Background((self.value + 1) % len(Background))


_BACKGROUND_COLORS = {
    Background.BLUE: "#E5F5FD",
    Background.GREEN: "#EBF3E7",
    Background.PURPLE: "#ECE8F6",
    Background.YELLOW: "#FDF7E3",
}


class Direction(str, Enum):
    """Graph layout direction (Graphviz ``rankdir``)."""
    TOP_TO_BOTTOM = "TB"
    BOTTOM_TO_TOP = "BT"
    LEFT_TO_RIGHT = "LR"
    RIGHT_TO_LEFT = "RL"


class EdgeDirection(str, Enum):
    """Arrow placement on an edge (Graphviz ``dir``)."""
    FORWARD = "forward"
    REVERSE = "back"
    BOTH = "both"
    NONE = "none"


@dataclass
class Font:
    """Font settings shared by every entity kind."""
    name: str = "Sans-Serif"
    size: float = 13
    color: str = "#2D3436"


@dataclass
class GroupOptions:
    label: str = ""
    label_justify: str = "l"
    pen_color: str = "#AEB6BE"
    background_color: str = ""
    shape: str = "box"
    style: str = "rounded"
    font: Font = field(default_factory=lambda: Font(size=12))
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class NodeOptions:
    name: str = ""
    label: str = ""
    label_location: str = "b"
    provider: str = ""
    shape: str = "box"
    style: str = "rounded"
    image: str = ""
    image_position: str = "tc"
    image_scale: str = "true"
    width: float = 1.4
    height: float = 1.4
    fixed_size: bool = True
    color: str = ""
    pen_width: float | None = None
    font: Font = field(default_factory=Font)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class EdgeOptions:
    name: str = ""
    label: str = ""
    color: str = "#7B8894"
    style: str = ""
    direction: str = EdgeDirection.FORWARD.value
    font: Font = field(default_factory=Font)
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class DiagramOptions:
    name: str = "diagram"
    filename: str = ""
    label: str = ""
    direction: str = Direction.LEFT_TO_RIGHT.value
    output_format: str = "dot"
    pad: float = 2.0
    splines: str = "ortho"
    node_separation: float = 0.6
    rank_separation: float = 0.75
    font: Font = field(default_factory=lambda: Font(size=15))
    attributes: dict[str, str] = field(default_factory=dict)


GroupOption = Callable[[GroupOptions], None]
NodeOption = Callable[[NodeOptions], None]
EdgeOption = Callable[[EdgeOptions], None]
DiagramOption = Callable[[DiagramOptions], None]

# A reusable bundle of options, e.g. the defaults of a provider icon family.
OptionSet = list


def apply_options(options: Any, opts: Iterable[Callable[[Any], None]]) -> Any:
    """Apply option functions to a defaults value in call order."""
    for opt in opts:
        opt(options)
    return options


def merge_option_sets(*sets: Iterable[Callable[[Any], None]]) -> OptionSet:
    """Flatten several option sets into one, preserving left-to-right order.

    Later sets override earlier ones once applied, so provider defaults go
    first and caller options last.
    """
    merged: OptionSet = []
    for opts in sets:
        merged.extend(opts)
    return merged


def format_number(value: float | int) -> str:
    """Format a number for the renderer, independent of locale.

    Integral values lose their fractional part (``12.0`` -> ``"12"``), all
    other values use the shortest round-trip decimal form.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def trim_attrs(attrs: dict[str, str]) -> dict[str, str]:
    """Drop attributes whose value is an empty string."""
    return {k: v for k, v in attrs.items() if v != ""}


def _set_font(font: Font, name: str | None, size: float | None, color: str | None) -> None:
    if name is not None:
        font.name = name
    if size is not None:
        font.size = size
    if color is not None:
        font.color = color


# Group options

def group_label(label: str) -> GroupOption:
    def option(o: GroupOptions) -> None:
        o.label = label
    return option


def background_color(color: str) -> GroupOption:
    def option(o: GroupOptions) -> None:
        o.background_color = color
    return option


def with_background(bg: Background) -> GroupOption:
    return background_color(bg.color)


def label_justify(justify: str) -> GroupOption:
    def option(o: GroupOptions) -> None:
        o.label_justify = justify
    return option


def pen_color(color: str) -> GroupOption:
    def option(o: GroupOptions) -> None:
        o.pen_color = color
    return option


def group_style(style: str) -> GroupOption:
    def option(o: GroupOptions) -> None:
        o.style = style
    return option


def group_font(name: str | None = None, size: float | None = None, color: str | None = None) -> GroupOption:
    def option(o: GroupOptions) -> None:
        _set_font(o.font, name, size, color)
    return option


def group_attribute(key: str, value: str) -> GroupOption:
    def option(o: GroupOptions) -> None:
        o.attributes[key] = value
    return option


def default_group_options(bg: Background = Background.BLUE, *opts: GroupOption) -> GroupOptions:
    """Build group options for a tier, then apply caller options."""
    options = GroupOptions()
    with_background(bg)(options)
    return apply_options(options, opts)


# Node options

def name(node_name: str) -> NodeOption:
    """Set the node identity explicitly instead of generating one."""
    def option(o: NodeOptions) -> None:
        o.name = node_name
    return option


def node_label(label: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.label = label
    return option


def label_location(location: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.label_location = location
    return option


def provider(provider_name: str) -> NodeOption:
    """Tag the node with the icon provider it came from."""
    def option(o: NodeOptions) -> None:
        o.provider = provider_name
    return option


def node_shape(shape: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.shape = shape
    return option


def node_style(style: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.style = style
    return option


def icon(path: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.image = path
    return option


def set_color(color: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.color = color
    return option


def pen_width(width: float) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.pen_width = width
    return option


def width(value: float) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.width = value
    return option


def height(value: float) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.height = value
    return option


def fixed_size(fixed: bool) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.fixed_size = fixed
    return option


def node_font(name: str | None = None, size: float | None = None, color: str | None = None) -> NodeOption:
    def option(o: NodeOptions) -> None:
        _set_font(o.font, name, size, color)
    return option


def node_attribute(key: str, value: str) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.attributes[key] = value
    return option


def node_attributes(attrs: dict[str, str]) -> NodeOption:
    def option(o: NodeOptions) -> None:
        o.attributes.update(attrs)
    return option


def default_node_options(*opts: NodeOption) -> NodeOptions:
    return apply_options(NodeOptions(), opts)


# Edge options

def edge_name(suffix: str) -> EdgeOption:
    """Distinguish parallel edges between the same pair of nodes."""
    def option(o: EdgeOptions) -> None:
        o.name = suffix
    return option


def edge_label(label: str) -> EdgeOption:
    def option(o: EdgeOptions) -> None:
        o.label = label
    return option


def edge_color(color: str) -> EdgeOption:
    def option(o: EdgeOptions) -> None:
        o.color = color
    return option


def edge_style(style: str) -> EdgeOption:
    def option(o: EdgeOptions) -> None:
        o.style = style
    return option


def edge_direction(direction: EdgeDirection) -> EdgeOption:
    def option(o: EdgeOptions) -> None:
        o.direction = direction.value
    return option


def forward() -> EdgeOption:
    return edge_direction(EdgeDirection.FORWARD)


def reverse() -> EdgeOption:
    return edge_direction(EdgeDirection.REVERSE)


def bidirectional() -> EdgeOption:
    return edge_direction(EdgeDirection.BOTH)


def undirected() -> EdgeOption:
    return edge_direction(EdgeDirection.NONE)


def edge_font(name: str | None = None, size: float | None = None, color: str | None = None) -> EdgeOption:
    def option(o: EdgeOptions) -> None:
        _set_font(o.font, name, size, color)
    return option


def edge_attribute(key: str, value: str) -> EdgeOption:
    def option(o: EdgeOptions) -> None:
        o.attributes[key] = value
    return option


def default_edge_options(*opts: EdgeOption) -> EdgeOptions:
    return apply_options(EdgeOptions(), opts)


# Diagram options

def diagram_name(diagram: str) -> DiagramOption:
    def option(o: DiagramOptions) -> None:
        o.name = diagram
    return option


def filename(value: str) -> DiagramOption:
    def option(o: DiagramOptions) -> None:
        o.filename = value
    return option


def diagram_label(label: str) -> DiagramOption:
    def option(o: DiagramOptions) -> None:
        o.label = label
    return option


def direction(value: Direction | str) -> DiagramOption:
    def option(o: DiagramOptions) -> None:
        o.direction = Direction(value).value
    return option


def output_format(fmt: str) -> DiagramOption:
    def option(o: DiagramOptions) -> None:
        o.output_format = fmt
    return option


def graph_attribute(key: str, value: str) -> DiagramOption:
    def option(o: DiagramOptions) -> None:
        o.attributes[key] = value
    return option


def default_diagram_options(*opts: DiagramOption) -> DiagramOptions:
    return apply_options(DiagramOptions(), opts)
