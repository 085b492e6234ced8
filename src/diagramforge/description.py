"""Declarative diagram description files.

A description is a JSON or YAML document holding nodes, edges and nested
groups. It is validated with Pydantic and built into a ``Diagram`` using
the regular builder API, so it follows the same identity and overwrite
rules as hand-written diagrams.
"""

import json
import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .config import DiagramforgeConfig, create_default_config
from .diagram import options as o
from .diagram.diagram import Diagram
from .diagram.group import Group
from .diagram.node import Node
from .diagram.options import Direction, EdgeDirection
from .errors import DescriptionError
from .nodes import PROVIDERS

logger = logging.getLogger(__name__)


class NodeDescription(BaseModel):
    """A node; ``provider`` and ``kind`` select a provider icon family."""
    id: str
    label: str = ""
    provider: str | None = None
    kind: str | None = None  # "<family>.<node>", e.g. "api.endpoints"
    icon: str | None = None
    shape: str | None = None
    color: str | None = None
    attributes: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid")


class EdgeDescription(BaseModel):
    """A directed edge between two node identities."""
    from_node: str = Field(alias="from")
    to_node: str = Field(alias="to")
    name: str = ""
    label: str = ""
    color: str | None = None
    style: str = ""
    direction: EdgeDirection | None = None
    attributes: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class GroupDescription(BaseModel):
    """A group with its own nodes, edges and child groups."""
    name: str
    label: str = ""
    background_color: str | None = Field(alias="backgroundColor", default=None)
    nodes: list[NodeDescription] = Field(default_factory=list)
    edges: list[EdgeDescription] = Field(default_factory=list)
    groups: list["GroupDescription"] = Field(default_factory=list)
    connect_all_to: str | None = Field(alias="connectAllTo", default=None)
    connect_all_from: str | None = Field(alias="connectAllFrom", default=None)

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


GroupDescription.model_rebuild()


class DiagramDescription(BaseModel):
    """Top-level description of a diagram."""
    name: str = "diagram"
    label: str = ""
    filename: str = ""
    direction: Direction | None = None
    nodes: list[NodeDescription] = Field(default_factory=list)
    edges: list[EdgeDescription] = Field(default_factory=list)
    groups: list[GroupDescription] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


def load_description(path: str | Path) -> DiagramDescription:
    """Load and validate a description file.

    Files ending in ``.yaml`` or ``.yml`` are parsed as YAML, everything
    else as JSON.

    Raises:
        FileNotFoundError: If the file does not exist
        DescriptionError: If the file cannot be parsed or validated
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Description file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DescriptionError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise DescriptionError(f"Description {path} must contain a mapping at the top level")

    try:
        description = DiagramDescription.model_validate(data)
    except ValidationError as e:
        raise DescriptionError(f"Invalid description {path}: {e}") from e

    logger.debug(f"Loaded description '{description.name}' from {path}")
    return description


def build_diagram(
    description: DiagramDescription,
    config: DiagramforgeConfig | None = None,
) -> Diagram:
    """Build a ``Diagram`` from a validated description.

    Settings missing from the description fall back to ``config``.

    Raises:
        DescriptionError: If a node names an unknown provider family
    """
    config = config or create_default_config()

    opts = [
        o.diagram_name(description.name),
        o.direction(description.direction or config.render.direction),
        o.output_format(config.output.format),
        o.graph_attribute("splines", config.render.splines),
    ]
    if description.label:
        opts.append(o.diagram_label(description.label))
    if description.filename:
        opts.append(o.filename(description.filename))

    diagram = Diagram(*opts)
    diagram.add(*(_build_node(n) for n in description.nodes))
    for edge in description.edges:
        diagram.connect_by_id(edge.from_node, edge.to_node, *_edge_options(edge))

    for group in description.groups:
        child = diagram.new_group(group.name, *_group_options(group))
        _fill_group(child, group)

    logger.info(f"Built diagram '{description.name}' with {len(description.groups)} top-level groups")
    return diagram


def _fill_group(group: Group, description: GroupDescription) -> None:
    group.add(*(_build_node(n) for n in description.nodes))

    # Fan-out helpers only see the nodes listed directly in this group.
    if description.connect_all_to:
        group.connect_all_to(description.connect_all_to)
    if description.connect_all_from:
        group.connect_all_from(description.connect_all_from)

    for edge in description.edges:
        group.connect_by_id(edge.from_node, edge.to_node, *_edge_options(edge))

    for child_description in description.groups:
        child = group.new_group(child_description.name, *_group_options(child_description))
        _fill_group(child, child_description)


def _group_options(description: GroupDescription) -> list:
    opts = []
    if description.label:
        opts.append(o.group_label(description.label))
    if description.background_color:
        opts.append(o.background_color(description.background_color))
    return opts


def _build_node(description: NodeDescription) -> Node:
    opts = [o.name(description.id)]
    if description.label:
        opts.append(o.node_label(description.label))
    if description.icon:
        opts.append(o.icon(description.icon))
    if description.shape:
        opts.append(o.node_shape(description.shape))
    if description.color:
        opts.append(o.set_color(description.color))
    if description.attributes:
        opts.append(o.node_attributes(description.attributes))

    if description.provider is None:
        return Node(*opts)

    return _provider_node(description, opts)


def _provider_node(description: NodeDescription, opts: list) -> Node:
    module = PROVIDERS.get(description.provider)
    if module is None:
        raise DescriptionError(
            f"Node '{description.id}': unknown provider '{description.provider}'. "
            f"Available: {sorted(PROVIDERS)}"
        )

    family_name, _, kind = (description.kind or "").partition(".")
    family = module.FAMILIES.get(family_name)
    if family is None or kind not in family.kinds():
        raise DescriptionError(
            f"Node '{description.id}': unknown kind '{description.kind}' "
            f"for provider '{description.provider}'"
        )

    return getattr(family, kind)(*opts)


def _edge_options(description: EdgeDescription) -> list:
    opts = []
    if description.name:
        opts.append(o.edge_name(description.name))
    if description.label:
        opts.append(o.edge_label(description.label))
    if description.color:
        opts.append(o.edge_color(description.color))
    if description.style:
        opts.append(o.edge_style(description.style))
    if description.direction:
        opts.append(o.edge_direction(EdgeDirection(description.direction)))
    for key, value in description.attributes.items():
        opts.append(o.edge_attribute(key, value))
    return opts
