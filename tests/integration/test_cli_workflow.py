"""Integration tests for end-to-end CLI workflows."""

import json
import re

import pytest
from click.testing import CliRunner

from physcalc import __version__
from physcalc.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestFluidCommand:
    def test_hydrostatic(self, runner):
        result = runner.invoke(cli, ["fluid", "hydrostatic", "-i", "rho=1000", "-i", "h=10"])
        assert result.exit_code == 0, result.output
        assert "98066.50" in result.output

    def test_reynolds_regime(self, runner):
        result = runner.invoke(
            cli, ["fluid", "reynolds", "-i", "rho=1000", "-i", "v=2.5", "-i", "L=0.05", "-i", "mu=1:cP"]
        )
        assert result.exit_code == 0, result.output
        assert "125000.00" in result.output
        assert "Regime: Turbulent" in result.output

    def test_units_in_assignment(self, runner):
        result = runner.invoke(
            cli, ["fluid", "continuity", "-i", "a1=1000:cm²", "-i", "v1=2", "-i", "a2=0.05:m²"]
        )
        assert result.exit_code == 0, result.output
        assert "4.000" in result.output

    def test_invalid_value(self, runner):
        result = runner.invoke(cli, ["fluid", "hydrostatic", "-i", "rho=1000", "-i", "h=deep"])
        assert result.exit_code == 1
        assert "Invalid value for Depth (h)" in result.output

    def test_bernoulli_overflow(self, runner):
        args = ["fluid", "bernoulli", "-i", "p1=0", "-i", "v1=1e200", "-i", "v2=1", "-i", "rho=1"]
        result = runner.invoke(cli, args)
        assert result.exit_code == 1
        assert "Check inputs" in result.output

    def test_domain_error(self, runner):
        result = runner.invoke(cli, ["fluid", "continuity", "-i", "a1=1", "-i", "v1=1", "-i", "a2=0"])
        assert result.exit_code == 1
        assert "Check inputs" in result.output

    def test_unknown_field(self, runner):
        result = runner.invoke(cli, ["fluid", "hydrostatic", "-i", "depth=10"])
        assert result.exit_code == 2
        assert "Unknown field" in result.output

    def test_malformed_assignment(self, runner):
        result = runner.invoke(cli, ["fluid", "hydrostatic", "-i", "10"])
        assert result.exit_code == 2

    def test_unknown_unit_warns(self, runner):
        result = runner.invoke(cli, ["fluid", "hydrostatic", "-i", "rho=1000", "-i", "h=10:fathom"])
        assert result.exit_code == 0, result.output
        assert "unknown unit" in result.output
        assert "98066.50" in result.output

    def test_show_fields(self, runner):
        result = runner.invoke(cli, ["fluid", "bernoulli", "--show-fields"])
        assert result.exit_code == 0, result.output
        assert "p1" in result.output
        assert "psi" in result.output


class TestBeamCommand:
    def test_defaults(self, runner):
        result = runner.invoke(cli, ["beam"])
        assert result.exit_code == 0, result.output
        assert "1250.00 Nm" in result.output
        assert "0.1302 mm" in result.output

    def test_cantilever_udl(self, runner):
        result = runner.invoke(cli, ["beam", "--support", "cantilever", "--load", "udl"])
        assert result.exit_code == 0, result.output
        assert "2500.00 Nm" in result.output
        assert "N/A" in result.output

    def test_units(self, runner):
        result = runner.invoke(
            cli, ["beam", "-L", "5000", "--length-unit", "mm", "-P", "1", "--point-load-unit", "kN"]
        )
        assert result.exit_code == 0, result.output
        assert "1250.00 Nm" in result.output

    def test_invalid_length(self, runner):
        result = runner.invoke(cli, ["beam", "-L", "0"])
        assert result.exit_code == 1
        assert "Check inputs" in result.output

    def test_huge_span(self, runner):
        result = runner.invoke(cli, ["beam", "-L", "1e110"])
        assert result.exit_code == 1
        assert "Check inputs" in result.output

    def test_parse_error(self, runner):
        result = runner.invoke(cli, ["beam", "-E", "steel"])
        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_deflection_warning(self, runner):
        result = runner.invoke(cli, ["beam", "-I", "1", "--inertia-unit", "cm⁴"])
        assert result.exit_code == 0, result.output
        assert "Warning" in result.output

    def test_plot(self, runner, tmp_path):
        out = tmp_path / "beam.png"
        result = runner.invoke(cli, ["beam", "--load", "udl", "--plot", str(out)])
        assert result.exit_code == 0, result.output
        assert out.read_bytes()[:4] == b"\x89PNG"


class TestUnitsCommand:
    def test_all_categories(self, runner):
        result = runner.invoke(cli, ["units"])
        assert result.exit_code == 0, result.output
        assert "km/h" in result.output
        assert "lbf/ft" in result.output

    def test_single_category(self, runner):
        result = runner.invoke(cli, ["units", "pressure"])
        assert result.exit_code == 0, result.output
        assert "101325" in result.output
        assert "km/h" not in result.output

    def test_audit(self, runner):
        result = runner.invoke(cli, ["units", "--audit"])
        assert result.exit_code == 0, result.output
        assert "agree with pint" in result.output


class TestAnimateCommand:
    def test_runs_frames(self, runner):
        result = runner.invoke(
            cli,
            ["animate", "reynolds", "-i", "rho=1000", "-i", "v=2.5", "-i", "L=0.05", "-i", "mu=0.001",
             "--frames", "12", "--seed", "3"],
        )
        assert result.exit_code == 0, result.output
        assert re.search(r"Frames\D+12\b", result.output)
        assert "Turbulent" in result.output

    def test_without_result(self, runner):
        result = runner.invoke(cli, ["animate", "hydrostatic", "-i", "h=25", "--frames", "5"])
        assert result.exit_code == 0, result.output
        assert "No result" in result.output

    def test_explicit_result(self, runner):
        result = runner.invoke(cli, ["animate", "reynolds", "--result", "1200", "--frames", "3"])
        assert result.exit_code == 0, result.output
        assert "Laminar" in result.output

    def test_png(self, runner, tmp_path):
        out = tmp_path / "frame.png"
        result = runner.invoke(
            cli,
            ["animate", "continuity", "-i", "a1=0.1", "-i", "v1=2", "-i", "a2=0.05",
             "--frames", "4", "--png", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert out.read_bytes()[:4] == b"\x89PNG"

    def test_settings_file(self, runner, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"particle_count": 7, "canvas_width": 640, "canvas_height": 360}))
        result = runner.invoke(cli, ["--settings", str(settings), "animate", "bernoulli", "--frames", "2"])
        assert result.exit_code == 0, result.output
        assert re.search(r"Particles\D+7\b", result.output)

    def test_invalid_settings_fall_back(self, runner, tmp_path):
        settings = tmp_path / "settings.json"
        settings.write_text(json.dumps({"particle_count": 7, "canvas_width": 100}))
        result = runner.invoke(cli, ["--settings", str(settings), "animate", "bernoulli", "--frames", "2"])
        assert result.exit_code == 0, result.output
        assert re.search(r"Particles\D+7\b", result.output)


class TestGlobalOptions:
    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_log_file(self, runner, tmp_path):
        log = tmp_path / "run.log"
        result = runner.invoke(
            cli, ["-vv", "--log-file", str(log), "fluid", "hydrostatic", "-i", "rho=1000", "-i", "h=10"]
        )
        assert result.exit_code == 0, result.output
        assert "Recorded" in log.read_text(encoding="utf-8")

    def test_gui_receives_settings(self, runner, monkeypatch):
        import physcalc.ui.app

        launched = []
        monkeypatch.setattr(physcalc.ui.app, "run", launched.append)
        result = runner.invoke(cli, ["gui"])
        assert result.exit_code == 0, result.output
        assert launched[0].history_limit == 50
