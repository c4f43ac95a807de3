"""Particle visualization engine for the fluid calculators.

The engine is an illustrative, per-frame particle simulation driven by the
raw magnitudes the user is typing and by the latest formatted result.  It
is not a physics integrator: its obligations are that every emitted
coordinate is finite and inside the canvas, and that faster inputs look
faster and higher Reynolds numbers look more agitated.

Usage::

    engine = VisualizationEngine(VisualMode.REYNOLDS, rng=np.random.default_rng(7))
    frame = engine.step(1 / 60, {"v": "2.5"}, "4500.00 Regime: Turbulent")
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Mapping

import numpy as np

from physcalc.core.config import ColorConfig
from physcalc.core.formulas import FlowRegime, classify_regime
from physcalc.utils.constants import TWO_PI
from physcalc.utils.interpolation import linear_interp_1d, monotone_profile

logger = logging.getLogger(__name__)

FRAME_SECONDS = 1.0 / 60.0  # motion constants are expressed per 60 Hz frame
MAX_FRAMES_PER_STEP = 4.0
PADDING = 40.0
DEFAULT_PARTICLE_COUNT = 100

# Reynolds pipe
RE_PIPE_HEIGHT = 120.0
RE_JITTER_MAX = 35.0  # px
RE_JITTER_SATURATION = 8000.0
RE_SPEED_RANGE = (0.3, 15.0)  # input velocity clamp
RE_SPEED_SCALE = 2.5  # px per frame per unit velocity

# Bernoulli pipe
BERNOULLI_PIPE_HEIGHT = 100.0
BERNOULLI_SPEED_RANGE = (0.4, 15.0)
BERNOULLI_SPEED_SCALE = 3.0

# Continuity channel
CHANNEL_SCALE = 80.0  # px per sqrt(area)
CHANNEL_MIN_HALF_WIDTH = 20.0
CHANNEL_STEP_RANGE = (0.4, 25.0)  # px per frame
CHANNEL_SPEED_SCALE = 4.0
CHANNEL_WALL_SAMPLES = 41

# Hydrostatic tank
TANK_MAX_DEPTH = 100.0
TANK_RISE_SPEED = 1.2  # px per frame

_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class VisualMode(str, Enum):
    """Visualization modes, one per fluid formula."""

    REYNOLDS = "reynolds"
    BERNOULLI = "bernoulli"
    CONTINUITY = "continuity"
    HYDROSTATIC = "hydrostatic"


@dataclass
class ParticleState:
    """Mutable state of one particle.  Owned by a single engine."""

    x: float
    y: float
    size: float
    phase_offset: float
    alpha: float
    ratio: float | None = None


@dataclass(frozen=True)
class VisualizationFrame:
    """Read-only snapshot produced by one engine step."""

    mode: VisualMode
    width: float
    height: float
    tick: int
    geometry: dict[str, Any] = field(default_factory=dict)
    particles: tuple[ParticleState, ...] = ()


def leading_number(text: str | None) -> float | None:
    """Parse the number at the start of *text*, ignoring any trailing text.

    Returns None for empty, non-numeric or non-finite text.
    """
    if not text:
        return None
    match = _LEADING_NUMBER.match(text)
    if match is None:
        return None
    value = float(match.group(1))
    return value if math.isfinite(value) else None


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def frames_for(dt: float | None) -> float:
    """Convert a time step [s] into 60 Hz frame units.

    Non-finite or negative steps count as one frame; long stalls are capped
    so a resumed loop does not teleport particles.
    """
    if dt is None or not math.isfinite(dt) or dt < 0:
        return 1.0
    return min(dt / FRAME_SECONDS, MAX_FRAMES_PER_STEP)


class VisualizationEngine:
    """Per-panel particle simulation for the fluid visualizations.

    Args:
        mode: Initial visualization mode.
        colors: Explicit color configuration.
        width: Canvas width [px].
        height: Canvas height [px].
        particle_count: Size of the particle population.
        rng: Random source; pass a seeded generator for reproducible runs.
    """

    def __init__(
        self,
        mode: VisualMode | str = VisualMode.REYNOLDS,
        colors: ColorConfig | None = None,
        width: float = 1200.0,
        height: float = 600.0,
        particle_count: int = DEFAULT_PARTICLE_COUNT,
        rng: np.random.Generator | None = None,
    ) -> None:
        if width <= 4 * PADDING or height <= 4 * PADDING:
            raise ValueError(f"Canvas {width}x{height} is too small (min > {4 * PADDING:.0f} px)")
        if particle_count < 0:
            raise ValueError(f"particle_count must be non-negative, got {particle_count}")
        self.width = float(width)
        self.height = float(height)
        self.particle_count = particle_count
        self.colors = colors or ColorConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self._mode = VisualMode(mode)
        self.tick = 0
        self.particles: list[ParticleState] = []
        self._seed_particles()

    @property
    def mode(self) -> VisualMode:
        return self._mode

    def set_mode(self, mode: VisualMode | str) -> bool:
        """Switch mode, reseeding the population if it changed.

        Returns:
            True if the mode changed.
        """
        mode = VisualMode(mode)
        if mode == self._mode:
            return False
        logger.debug("Visualization mode %s -> %s", self._mode.value, mode.value)
        self._mode = mode
        self.reset()
        return True

    def set_colors(self, colors: ColorConfig) -> None:
        self.colors = colors

    def reset(self) -> None:
        """Discard the particle population and seed a new one."""
        self.tick = 0
        self._seed_particles()

    # --- Stepping ---

    def step(
        self,
        dt: float | None,
        inputs: Mapping[str, str] | None,
        result: str | None = None,
    ) -> VisualizationFrame:
        """Advance the simulation and return a frame snapshot.

        Args:
            dt: Elapsed time since the previous step [s].
            inputs: Raw, unconverted field text keyed by field id.
            result: Latest formatted result string, if any.
        """
        frames = frames_for(dt)
        inputs = inputs or {}
        handler = {
            VisualMode.REYNOLDS: self._step_reynolds,
            VisualMode.BERNOULLI: self._step_bernoulli,
            VisualMode.CONTINUITY: self._step_continuity,
            VisualMode.HYDROSTATIC: self._step_hydrostatic,
        }[self._mode]
        geometry, emitted = handler(frames, inputs, result)
        self.tick += 1
        return VisualizationFrame(
            mode=self._mode,
            width=self.width,
            height=self.height,
            tick=self.tick,
            geometry=geometry,
            particles=tuple(self._contain(p) for p in emitted),
        )

    # --- Helpers ---

    def _random(self) -> float:
        return float(self.rng.random())

    @staticmethod
    def _read(inputs: Mapping[str, str], key: str, default: float) -> float:
        value = leading_number(inputs.get(key))
        return default if value is None else value

    def _pipe(self, pipe_height: float) -> tuple[float, float, float, float]:
        """(left, right, top, bottom) of a centred horizontal pipe."""
        top = self.height / 2.0 - pipe_height / 2.0
        return PADDING, self.width - PADDING, top, top + pipe_height

    def _tank(self) -> tuple[float, float, float, float]:
        """(left, right, top, bottom) of the hydrostatic tank."""
        tank_width = self.width / 1.5
        left = (self.width - tank_width) / 2.0
        return left, left + tank_width, PADDING, self.height - PADDING

    def _seed_particles(self) -> None:
        self.particles = [self._new_particle() for _ in range(self.particle_count)]

    def _new_particle(self) -> ParticleState:
        r = self._random
        if self._mode == VisualMode.REYNOLDS:
            left, right, top, bottom = self._pipe(RE_PIPE_HEIGHT)
        elif self._mode == VisualMode.BERNOULLI:
            left, right, top, bottom = self._pipe(BERNOULLI_PIPE_HEIGHT)
        elif self._mode == VisualMode.HYDROSTATIC:
            left, right, top, bottom = self._tank()
            left, right, top, bottom = left + 10, right - 10, top + 4, bottom - 8
        else:
            left, right, top, bottom = 0.0, self.width, self.height / 2.0, self.height / 2.0
        return ParticleState(
            x=left + r() * (right - left),
            y=top + r() * (bottom - top),
            size=r() * 2.0 + 1.0,
            phase_offset=r() * TWO_PI,
            alpha=r() * 0.6 + 0.2,
            ratio=(r() - 0.5) * 1.8,
        )

    def _contain(self, p: ParticleState) -> ParticleState:
        x, y = p.x, p.y
        if not (math.isfinite(x) and math.isfinite(y)):
            logger.debug("Non-finite particle position (%r, %r) replaced", x, y)
            x = x if math.isfinite(x) else self.width / 2.0
            y = y if math.isfinite(y) else self.height / 2.0
        return replace(p, x=clamp(x, 0.0, self.width), y=clamp(y, 0.0, self.height))

    # --- Modes ---

    def _step_reynolds(
        self, frames: float, inputs: Mapping[str, str], result: str | None
    ) -> tuple[dict[str, Any], list[ParticleState]]:
        left, right, top, bottom = self._pipe(RE_PIPE_HEIGHT)
        reynolds = max(leading_number(result) or 0.0, 0.0)
        turbulence = min(reynolds / RE_JITTER_SATURATION, 1.0) * RE_JITTER_MAX
        speed = clamp(self._read(inputs, "v", 1.0), *RE_SPEED_RANGE) * RE_SPEED_SCALE

        regime = classify_regime(reynolds)
        color = {
            FlowRegime.LAMINAR: self.colors.accent,
            FlowRegime.TRANSITIONAL: self.colors.transitional,
            FlowRegime.TURBULENT: self.colors.turbulent,
        }[regime]

        emitted = []
        for p in self.particles:
            p.x += speed * frames
            if p.x > right - 5:
                p.x = left + 5
                p.y = top + self._random() * (bottom - top)
            jitter = (self._random() - 0.5) * turbulence
            emitted.append(replace(p, y=clamp(p.y + jitter, top + 4, bottom - 4)))

        geometry = {
            "pipe": (left, top, right - left, bottom - top),
            "reynolds": reynolds,
            "regime": regime.value,
            "turbulence": turbulence,
            "speed": speed,
            "particle_color": color,
        }
        return geometry, emitted

    def _step_bernoulli(
        self, frames: float, inputs: Mapping[str, str], result: str | None
    ) -> tuple[dict[str, Any], list[ParticleState]]:
        left, right, top, bottom = self._pipe(BERNOULLI_PIPE_HEIGHT)
        split = self.width / 2.0
        v1 = self._read(inputs, "v1", 1.0)
        v2 = self._read(inputs, "v2", 2.0)
        speed1 = clamp(v1, *BERNOULLI_SPEED_RANGE) * BERNOULLI_SPEED_SCALE
        speed2 = clamp(v2, *BERNOULLI_SPEED_RANGE) * BERNOULLI_SPEED_SCALE

        emitted = []
        for p in self.particles:
            p.x += (speed1 if p.x < split else speed2) * frames
            if p.x > right - 5:
                p.x = left + 5
                p.y = top + self._random() * (bottom - top)
            emitted.append(replace(p, y=clamp(p.y, top + 4, bottom - 4)))

        if speed1 > speed2:
            faster, gradient = "inlet", (self.colors.marker, self.colors.primary)
        elif speed2 > speed1:
            faster, gradient = "outlet", (self.colors.primary, self.colors.marker)
        else:
            faster, gradient = None, (self.colors.primary, self.colors.primary)
        geometry = {
            "pipe": (left, top, right - left, bottom - top),
            "split_x": split,
            "speeds": (speed1, speed2),
            "faster_half": faster,
            "gradient": gradient,
            "particle_color": "#ffffff",
        }
        return geometry, emitted

    def _half_width(self, area: float) -> float:
        if area <= 0:
            return CHANNEL_MIN_HALF_WIDTH
        return clamp(math.sqrt(area) * CHANNEL_SCALE, CHANNEL_MIN_HALF_WIDTH, self.height / 2.0 - 10.0)

    def _step_continuity(
        self, frames: float, inputs: Mapping[str, str], result: str | None
    ) -> tuple[dict[str, Any], list[ParticleState]]:
        w, mid_y, split = self.width, self.height / 2.0, self.width / 2.0
        a1 = self._read(inputs, "a1", 1.0)
        a2 = self._read(inputs, "a2", 1.0)
        v1 = max(0.1, self._read(inputs, "v1", 1.0))
        v2 = a1 * v1 / (a2 or 1.0)
        if not math.isfinite(v2):
            v2 = v1
        half1, half2 = self._half_width(a1), self._half_width(a2)
        step1 = clamp(v1 * CHANNEL_SPEED_SCALE, *CHANNEL_STEP_RANGE)
        step2 = clamp(v2 * CHANNEL_SPEED_SCALE, *CHANNEL_STEP_RANGE)

        knots_x = np.array([0.0, split, w])
        knots_y = np.array([half1, half1, half2])

        for p in self.particles:
            p.x += (step1 if p.x < split else step2) * frames
            if p.x > w:
                p.x = 0.0
            if p.ratio is None:
                p.ratio = (self._random() - 0.5) * 1.8

        xs = np.array([p.x for p in self.particles])
        halves = monotone_profile(knots_x, knots_y, xs) if len(xs) else xs
        emitted = []
        for p, half in zip(self.particles, halves):
            p.y = mid_y + p.ratio * float(half)
            emitted.append(replace(p))

        wall_x = np.linspace(0.0, w, CHANNEL_WALL_SAMPLES)
        wall_half = monotone_profile(knots_x, knots_y, wall_x)
        geometry = {
            "center_y": mid_y,
            "split_x": split,
            "half_widths": (half1, half2),
            "velocities": (v1, v2),
            "wall_x": tuple(float(x) for x in wall_x),
            "wall_half": tuple(float(h) for h in wall_half),
            "particle_color": self.colors.primary,
        }
        return geometry, emitted

    def _step_hydrostatic(
        self, frames: float, inputs: Mapping[str, str], result: str | None
    ) -> tuple[dict[str, Any], list[ParticleState]]:
        left, right, top, bottom = self._tank()
        depth = clamp(self._read(inputs, "h", 10.0), 0.0, TANK_MAX_DEPTH)
        marker_y = linear_interp_1d(np.array([0.0, TANK_MAX_DEPTH]), np.array([top, bottom]), depth)

        emitted = []
        for p in self.particles:
            p.y -= TANK_RISE_SPEED * frames
            if p.y < top + 4:
                p.y = bottom - 8
            if p.x < left + 10 or p.x > right - 10:
                p.x = left + 10 + self._random() * (right - left - 20)
            emitted.append(replace(p))

        geometry = {
            "tank": (left, top, right - left, bottom - top),
            "depth": depth,
            "marker_y": marker_y,
            "marker_label": f"Depth: {depth:g}m",
            "marker_color": self.colors.marker,
            "particle_color": "#ffffff",
        }
        return geometry, emitted
