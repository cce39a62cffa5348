"""Unit tests for the command line interface."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from stencilstation import __version__
from stencilstation.cli import app
from stencilstation.cli.app import _resolve_settings
from stencilstation.config import Generator


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestGeneral:
    """Tests for the command group."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        for command in ("build", "svg", "pens", "map"):
            assert command in result.output


class TestPensCommand:
    """Tests for the pens command."""

    def test_catalog(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["pens"])
        assert result.exit_code == 0
        assert "Pen catalog" in result.output
        assert "marker" in result.output
        assert "too deep" not in result.output

    def test_thin_plate_marks_deep_pens(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["pens", "--plate-thickness", "1.0"])
        assert result.exit_code == 0
        assert "too deep" in result.output


class TestMapCommand:
    """Tests for the map command."""

    def test_graph_to_scene(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["map", "5", "5"])
        assert result.exit_code == 0
        assert result.output.strip() == "25 25"

    def test_virtual_to_graph(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["map", "--from", "virtual", "--to", "graph", "0.5", "1"])
        assert result.exit_code == 0
        assert result.output.strip() == "5 10"

    def test_negative_coordinates(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["map", "--", "-5", "2"])
        assert result.exit_code == 0
        assert result.output.strip() == "-25 10"

    def test_custom_graph_bounds(self, runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "settings.json"
        config.write_text('{"graph": {"x_min": 0, "x_max": 100}}', encoding="utf-8")
        result = runner.invoke(app, ["map", "-c", str(config), "50", "0"])
        assert result.exit_code == 0
        assert result.output.strip() == "0 0"

    def test_invalid_space(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["map", "--from", "polar", "1", "1"])
        assert result.exit_code == 1
        assert "Invalid space" in result.output

    def test_missing_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["map", "-c", str(tmp_path / "nope.json"), "1", "1"])
        assert result.exit_code == 1
        assert "Cannot read settings file" in result.output


class TestRejectedInput:
    """Tests for build and svg argument errors (no geometry is built)."""

    def test_pen_out_of_range(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["build", "--pen", "9", "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Rejected configuration" in result.output

    def test_plate_thinner_than_shaft(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["build", "--pen", "6", "--plate-thickness", "1.0", "-o", str(tmp_path)]
        )
        assert result.exit_code == 1

    def test_missing_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["build", "-c", str(tmp_path / "nope.json")])
        assert result.exit_code == 1

    def test_unknown_generator(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["build", "--generator", "fractal"])
        assert result.exit_code != 0

    def test_missing_svg(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["svg", str(tmp_path / "nope.svg"), "-o", str(tmp_path)])
        assert result.exit_code == 1
        assert "Failed to import SVG" in result.output
        assert not list(tmp_path.glob("*.stl"))


class TestResolveSettings:
    """Tests for merging command line options over a config file."""

    @pytest.fixture
    def config(self, tmp_path: Path) -> Path:
        path = tmp_path / "settings.json"
        path.write_text(
            '{"render": {"generator": "base"}, "logging": {"log_level": "INFO"}}',
            encoding="utf-8",
        )
        return path

    def test_unset_options_keep_config_values(self, config: Path) -> None:
        settings = _resolve_settings(
            config,
            {
                "render": {"generator": None, "facets": None},
                "logging": {"log_file": None, "log_level": None},
            },
        )
        assert settings.render.generator == Generator.BASE
        assert settings.logging.log_level == "INFO"

    def test_explicit_option_wins(self, config: Path) -> None:
        settings = _resolve_settings(
            config, {"render": {"generator": Generator.MISC}, "logging": {"log_level": "DEBUG"}}
        )
        assert settings.render.generator == Generator.MISC
        assert settings.logging.log_level == "DEBUG"

    def test_defaults_without_config(self) -> None:
        settings = _resolve_settings(None, {"render": {"generator": None}})
        assert settings.render.generator == Generator.GRAPHING
