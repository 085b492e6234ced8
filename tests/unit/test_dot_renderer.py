"""Unit tests for the Graphviz DOT renderer."""

import pytest

from diagramforge.errors import (
    DuplicateIdentityError,
    InvalidIdentityError,
    RenderError,
    UnknownParentError,
)
from diagramforge.graph import TOP_LEVEL, DeclarationKind, DotRenderer


class TestDotRendererDeclarations:
    """Test declaration bookkeeping and rejection."""

    def test_format(self):
        """Test renderer format metadata."""
        renderer = DotRenderer()
        assert renderer.format_name == "dot"
        assert renderer.get_file_extension() == ".dot"
        assert renderer.top_level == TOP_LEVEL

    def test_duplicate_subgraph_rejected(self):
        """Test declaring the same subgraph twice fails distinguishably."""
        renderer = DotRenderer()
        renderer.add_subgraph(TOP_LEVEL, "cluster_a", {})

        with pytest.raises(DuplicateIdentityError) as exc_info:
            renderer.add_subgraph(TOP_LEVEL, "cluster_a", {})

        assert exc_info.value.identity == "cluster_a"
        assert isinstance(exc_info.value, RenderError)

    def test_invalid_identity_rejected(self):
        """Test empty and control-character identities are rejected."""
        renderer = DotRenderer()

        with pytest.raises(InvalidIdentityError):
            renderer.add_node(TOP_LEVEL, "", {})
        with pytest.raises(InvalidIdentityError):
            renderer.add_subgraph(TOP_LEVEL, "bad\nname", {})
        with pytest.raises(InvalidIdentityError):
            renderer.add_edge("a", "\x00", {})

    def test_port_separator_rejected_in_nodes_and_edges(self):
        """Test ':' is refused where graphviz would read a node:port reference."""
        renderer = DotRenderer()

        with pytest.raises(InvalidIdentityError) as exc_info:
            renderer.add_node(TOP_LEVEL, "db:primary", {})
        assert exc_info.value.identity == "db:primary"
        with pytest.raises(InvalidIdentityError):
            renderer.add_edge("db:primary", "api", {})
        with pytest.raises(InvalidIdentityError):
            renderer.add_edge("api", "db:primary", {})

        renderer.add_subgraph(TOP_LEVEL, "cluster_zone:a", {})
        assert renderer.subgraph_parent("cluster_zone:a") == TOP_LEVEL

    def test_edge_name_used_as_identity(self):
        """Test a named edge is logged under its name, unnamed ones under start->end."""
        renderer = DotRenderer()
        renderer.add_edge("a", "b", {})
        renderer.add_edge("a", "b", {}, name="a->b#backup")

        identities = [d.identity for d in renderer.declarations]
        assert identities == ["a->b", "a->b#backup"]

    def test_unknown_parent_rejected(self):
        """Test nodes need a declared parent subgraph."""
        renderer = DotRenderer()
        with pytest.raises(UnknownParentError):
            renderer.add_node("cluster_missing", "a", {})

    def test_node_redeclaration_moves_node(self):
        """Test the latest declaration decides node membership and attributes."""
        renderer = DotRenderer()
        renderer.add_subgraph(TOP_LEVEL, "cluster_one", {})
        renderer.add_subgraph(TOP_LEVEL, "cluster_two", {})
        renderer.add_node("cluster_one", "n", {"label": "old"})
        renderer.add_node("cluster_two", "n", {"label": "new"})

        assert renderer.node_parent("n") == "cluster_two"
        assert renderer.source.count('label=new') == 1
        assert "label=old" not in renderer.source

    def test_declarations_log(self):
        """Test declarations are recorded in arrival order."""
        renderer = DotRenderer()
        renderer.add_subgraph(TOP_LEVEL, "cluster_a", {"label": "A"})
        renderer.add_node("cluster_a", "n", {})
        renderer.add_edge("n", "m", {})

        kinds = [d.kind for d in renderer.declarations]
        assert kinds == [DeclarationKind.SUBGRAPH, DeclarationKind.NODE, DeclarationKind.EDGE]
        assert renderer.subgraph_parent("cluster_a") == TOP_LEVEL
        assert renderer.dangling_edges() == [("n", "m")]


class TestDotRendererOutput:
    """Test DOT source generation."""

    def _build(self) -> DotRenderer:
        renderer = DotRenderer(name="demo", graph_attrs={"rankdir": "LR"})
        renderer.add_subgraph(TOP_LEVEL, "cluster_outer", {"label": "Outer"})
        renderer.add_subgraph("cluster_outer", "cluster_inner", {"label": "Inner"})
        renderer.add_node("cluster_inner", "db", {"label": "Database"})
        renderer.add_node("cluster_outer", "api", {"label": "API"})
        renderer.add_edge("api", "db", {"color": "#7B8894"})
        return renderer

    def test_source_nests_subgraphs(self):
        """Test subgraphs nest in the emitted source."""
        source = self._build().source

        assert source.startswith("digraph demo {")
        assert "subgraph cluster_outer {" in source
        assert "subgraph cluster_inner {" in source
        assert source.index("subgraph cluster_outer") < source.index("subgraph cluster_inner")
        assert source.index("subgraph cluster_inner") < source.index("db [label=Database]")
        assert "api -> db" in source
        assert "rankdir=LR" in source

    def test_write(self, tmp_path):
        """Test the source is written to disk."""
        path = self._build().write(tmp_path / "demo.dot")

        assert path.exists()
        assert "subgraph cluster_inner" in path.read_text(encoding="utf-8")

    def test_angle_bracket_values_stay_plain_text(self):
        """Test "<...>" values are quoted strings rather than HTML labels."""
        renderer = DotRenderer(graph_attrs={"label": "<system>"})
        renderer.add_subgraph(TOP_LEVEL, "cluster_q", {"label": "<workers>"})
        renderer.add_node("cluster_q", "q", {"label": "<queue>"})
        renderer.add_edge("q", "w", {"label": "<job>"})

        source = renderer.source

        for text in ("<system>", "<workers>", "<queue>", "<job>"):
            assert f'label="{text}"' in source
            assert f"label={text}" not in source
