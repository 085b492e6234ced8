"""Unit tests for the diagramforge CLI."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from diagramforge import __version__
from diagramforge.cli import app
from diagramforge.diagram import Diagram

runner = CliRunner()


def _write_description(path: Path, edges=None) -> Path:
    description = {
        "name": "shop",
        "label": "Shop",
        "groups": [
            {
                "name": "backend",
                "nodes": [{"id": "api"}, {"id": "db"}],
                "edges": edges if edges is not None else [{"from": "api", "to": "db"}],
            }
        ],
    }
    file = path / "shop.json"
    file.write_text(json.dumps(description), encoding="utf-8")
    return file


class TestRenderCLI:
    """Test the render command."""

    def test_version(self):
        """Test --version prints the version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_render_writes_dot(self, tmp_path):
        """Test render writes the DOT file into the output directory."""
        description = _write_description(tmp_path)
        outdir = tmp_path / "out"

        result = runner.invoke(app, [
            "render", str(description), "--output", str(outdir),
            "--config", str(tmp_path / "none.json"),
        ])

        assert result.exit_code == 0
        dot_file = outdir / "shop.dot"
        assert dot_file.exists()
        assert "api -> db" in dot_file.read_text(encoding="utf-8")

    def test_render_builds_diagram_once(self, tmp_path):
        """Test the build used for the dangling-edge check is the one written."""
        description = _write_description(tmp_path)

        with patch.object(Diagram, "build", autospec=True, side_effect=Diagram.build) as mock_build:
            result = runner.invoke(app, [
                "render", str(description), "--output", str(tmp_path / "out"),
                "--config", str(tmp_path / "none.json"),
            ])

        assert result.exit_code == 0
        assert mock_build.call_count == 1
        assert (tmp_path / "out" / "shop.dot").exists()

    def test_render_missing_description(self, tmp_path):
        """Test a missing description file exits with an error."""
        result = runner.invoke(app, ["render", str(tmp_path / "missing.json")])

        assert result.exit_code == 1
        assert "Error:" in result.stdout

    def test_render_dangling_edges_fail_when_configured(self, tmp_path):
        """Test failOnDangling turns dangling edges into an error."""
        description = _write_description(tmp_path, edges=[{"from": "api", "to": "ghost"}])
        config = tmp_path / ".diagramforge.json"
        config.write_text(json.dumps({"render": {"failOnDangling": True}}))

        result = runner.invoke(app, [
            "render", str(description), "--output", str(tmp_path / "out"), "--config", str(config),
        ])

        assert result.exit_code == 1
        assert "undeclared nodes" in result.stdout
        assert not (tmp_path / "out" / "shop.dot").exists()

    def test_render_dangling_edges_warn_by_default(self, tmp_path):
        """Test dangling edges only warn without failOnDangling."""
        description = _write_description(tmp_path, edges=[{"from": "api", "to": "ghost"}])

        result = runner.invoke(app, [
            "render", str(description), "--output", str(tmp_path / "out"),
            "--config", str(tmp_path / "none.json"),
        ])

        assert result.exit_code == 0
        assert "Warning" in result.stdout
        assert (tmp_path / "out" / "shop.dot").exists()


class TestValidateCLI:
    """Test the validate command."""

    def test_validate_counts(self, tmp_path):
        """Test validate reports declaration counts without writing output."""
        description = _write_description(tmp_path)

        result = runner.invoke(app, ["validate", str(description), "--config", str(tmp_path / "none.json")])

        assert result.exit_code == 0
        assert "Description is valid" in result.stdout
        assert "subgraph" in result.stdout
        assert not (tmp_path / "diagrams").exists()

    def test_validate_invalid_description(self, tmp_path):
        """Test validation errors exit with code 1."""
        file = tmp_path / "bad.json"
        file.write_text(json.dumps({"name": "x", "bogus": True}))

        result = runner.invoke(app, ["validate", str(file)])

        assert result.exit_code == 1
        assert "Invalid description" in result.stdout
