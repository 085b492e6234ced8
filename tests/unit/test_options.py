"""Unit tests for the attribute and option model."""

from diagramforge.diagram import options as o
from diagramforge.diagram.options import Background, Direction


class TestBackground:
    """Test background tiers."""

    def test_palette(self):
        """Test each tier maps to its color."""
        assert Background.BLUE.color == "#E5F5FD"
        assert Background.GREEN.color == "#EBF3E7"
        assert Background.PURPLE.color == "#ECE8F6"
        assert Background.YELLOW.color == "#FDF7E3"

    def test_next_cycles(self):
        """Test the tier after YELLOW wraps around to BLUE."""
        assert Background.BLUE.next() == Background.GREEN
        assert Background.YELLOW.next() == Background.BLUE

    def test_next_wraps_on_every_cycle(self):
        """Test deep nesting keeps cycling through the four tiers."""
        tier = Background.BLUE
        seen = []
        for _ in range(9):
            seen.append(tier)
            tier = tier.next()
        assert seen == [
            Background.BLUE, Background.GREEN, Background.PURPLE, Background.YELLOW,
        ] * 2 + [Background.BLUE]


class TestOptionApplication:
    """Test option ordering and merging."""

    def test_last_option_wins(self):
        """Test later options override earlier ones."""
        options = o.default_node_options(o.set_color("red"), o.set_color("blue"))
        assert options.color == "blue"

    def test_defaults(self):
        """Test documented defaults for each entity kind."""
        node = o.default_node_options()
        edge = o.default_edge_options()
        group = o.default_group_options()

        assert node.shape == "box"
        assert node.font.size == 13
        assert edge.color == "#7B8894"
        assert edge.direction == "forward"
        assert group.pen_color == "#AEB6BE"
        assert group.font.size == 12
        assert group.background_color == Background.BLUE.color

    def test_group_tier_then_caller_override(self):
        """Test caller background overrides the tier color."""
        options = o.default_group_options(Background.PURPLE, o.background_color("#FFFFFF"))
        assert options.background_color == "#FFFFFF"

    def test_font_option_updates_given_fields_only(self):
        """Test font options leave unspecified fields alone."""
        options = o.default_node_options(o.node_font(size=20))
        assert options.font.size == 20
        assert options.font.name == "Sans-Serif"

    def test_defaults_are_not_shared(self):
        """Test attribute maps are independent between instances."""
        first = o.default_node_options(o.node_attribute("tooltip", "x"))
        second = o.default_node_options()
        assert second.attributes == {}
        assert first.attributes == {"tooltip": "x"}

    def test_merge_option_sets_preserves_order(self):
        """Test merged sets apply left to right."""
        merged = o.merge_option_sets([o.node_label("base")], [], [o.node_label("caller")])
        assert len(merged) == 2
        assert o.default_node_options(*merged).label == "caller"

    def test_edge_direction_helpers(self):
        """Test edge direction options."""
        assert o.default_edge_options(o.reverse()).direction == "back"
        assert o.default_edge_options(o.bidirectional()).direction == "both"
        assert o.default_edge_options(o.undirected()).direction == "none"

    def test_diagram_direction_accepts_string(self):
        """Test diagram direction accepts enum or raw value."""
        assert o.default_diagram_options(o.direction("TB")).direction == "TB"
        assert o.default_diagram_options(o.direction(Direction.RIGHT_TO_LEFT)).direction == "RL"


class TestFormatting:
    """Test attribute value helpers."""

    def test_format_number(self):
        """Test locale-independent number formatting."""
        assert o.format_number(12) == "12"
        assert o.format_number(12.0) == "12"
        assert o.format_number(1.4) == "1.4"
        assert o.format_number(0.75) == "0.75"
        assert o.format_number(True) == "true"
        assert o.format_number(False) == "false"

    def test_trim_attrs(self):
        """Test empty values are dropped and others kept."""
        assert o.trim_attrs({"a": "", "b": "x", "c": "0"}) == {"b": "x", "c": "0"}
