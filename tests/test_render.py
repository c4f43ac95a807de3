"""Tests for matplotlib rendering."""

import numpy as np
import pytest

from physcalc.core.beam import BeamConfiguration, LoadType, SupportType, beam_diagrams, solve_beam
from physcalc.viz.beam_curve import deflection_curve
from physcalc.viz.engine import VisualizationEngine, VisualMode
from physcalc.viz.render import save_beam_png, save_frame_png

PNG_MAGIC = b"\x89PNG"


class TestFramePng:
    @pytest.mark.parametrize("mode", list(VisualMode))
    def test_every_mode_renders(self, mode, tmp_path):
        engine = VisualizationEngine(mode, width=400, height=300, particle_count=15, rng=np.random.default_rng(5))
        inputs = {"v": "2", "v1": "1", "v2": "3", "a1": "0.2", "a2": "0.05", "h": "20"}
        frame = engine.step(1 / 60, inputs, "5000 Regime: Turbulent")
        path = tmp_path / f"{mode.value}.png"
        save_frame_png(frame, path)
        assert path.read_bytes()[:4] == PNG_MAGIC

    def test_empty_population(self, tmp_path):
        engine = VisualizationEngine(VisualMode.REYNOLDS, width=400, height=300, particle_count=0)
        path = tmp_path / "empty.png"
        save_frame_png(engine.step(1 / 60, {}), path)
        assert path.exists()


class TestBeamPng:
    @pytest.mark.parametrize("support", list(SupportType))
    @pytest.mark.parametrize("load", list(LoadType))
    def test_diagrams_with_preview(self, support, load, tmp_path):
        config = BeamConfiguration(support, load, 4.0, 70e9, 2e-6, point_load=500.0, distributed_load=100.0)
        path = tmp_path / "beam.png"
        curve = deflection_curve(support, load, solve_beam(config))
        save_beam_png(beam_diagrams(config), path, curve=curve)
        assert path.read_bytes()[:4] == PNG_MAGIC
