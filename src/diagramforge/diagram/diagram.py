"""Top-level diagram: graph options, a root group and output writing."""

import logging
from pathlib import Path

import graphviz
from slugify import slugify

from ..errors import RenderError
from ..graph.dot import DotRenderer
from .group import Group
from .node import Node
from .options import (
    DiagramOption,
    EdgeOption,
    GroupOption,
    default_diagram_options,
    format_number,
    group_style,
    trim_attrs,
)

logger = logging.getLogger(__name__)


class Diagram:
    """A complete diagram rooted in an invisible group.

    Groups created through ``new_group`` start at the first background tier;
    groups nested below them cycle through the palette from there.
    """

    def __init__(self, *opts: DiagramOption):
        self.options = default_diagram_options(*opts)
        self.root = Group(self.options.name, group_style("invis"))

    @property
    def filename(self) -> str:
        """Output file stem, derived from the label or name when not set."""
        if self.options.filename:
            return self.options.filename
        return slugify(self.options.label or self.options.name, separator="_") or "diagram"

    def add(self, *nodes: Node) -> "Diagram":
        self.root.add(*nodes)
        return self

    def connect(self, start: Node, end: Node, *opts: EdgeOption) -> "Diagram":
        self.root.connect(start, end, *opts)
        return self

    def connect_by_id(self, start: str, end: str, *opts: EdgeOption) -> "Diagram":
        self.root.connect_by_id(start, end, *opts)
        return self

    def group(self, child: Group) -> Group:
        return self.root.group(child)

    def new_group(self, name: str, *opts: GroupOption) -> Group:
        return self.root.group(Group(name, *opts))

    def graph_attrs(self) -> dict[str, str]:
        o = self.options
        attrs = {
            "label": o.label,
            "rankdir": o.direction,
            "pad": format_number(o.pad),
            "splines": o.splines,
            "nodesep": format_number(o.node_separation),
            "ranksep": format_number(o.rank_separation),
            "fontname": o.font.name,
            "fontsize": format_number(o.font.size),
            "fontcolor": o.font.color,
        }
        attrs.update(o.attributes)

        return trim_attrs(attrs)

    def build(self) -> DotRenderer:
        """Render the group tree into a fresh ``DotRenderer``."""
        renderer = DotRenderer(name=self.options.name, graph_attrs=self.graph_attrs())
        self.root.render(renderer)
        return renderer

    def source(self) -> str:
        return self.build().source

    def render(self, outdir: str | Path = "diagrams", renderer: DotRenderer | None = None) -> Path:
        """Render the diagram into ``outdir`` and return the written file.

        The DOT file is always written. For any other output format the
        Graphviz ``dot`` executable is invoked on it and the image path is
        returned instead. A ``renderer`` already returned by ``build`` is
        written as is; otherwise the diagram is built here.

        Raises:
            RenderError: If a declaration is rejected or Graphviz fails
        """
        outdir = Path(outdir)
        outdir.mkdir(parents=True, exist_ok=True)

        renderer = renderer or self.build()
        dot_path = renderer.write(outdir / f"{self.filename}{renderer.get_file_extension()}")

        fmt = self.options.output_format
        if fmt == renderer.format_name:
            return dot_path

        image_path = outdir / f"{self.filename}.{fmt}"
        logger.info(f"Rendering {dot_path} to {fmt}")
        try:
            graphviz.render("dot", format=fmt, filepath=dot_path, outfile=image_path)
        except graphviz.ExecutableNotFound as e:
            raise RenderError(f"Graphviz 'dot' executable not found: {e}") from e
        except graphviz.CalledProcessError as e:
            raise RenderError(f"Graphviz failed to render {dot_path}: {e}") from e

        return image_path

    def __repr__(self) -> str:
        return f"Diagram(name={self.options.name!r}, root={self.root!r})"
