"""Application settings and settings-file I/O for PhysCalc.

Settings cover presentation only (canvas size, particle population, frame
rate, colors, history capacity).  Calculation inputs and results are never
written to disk.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any

from physcalc.utils.validation import validate_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColorConfig:
    """Explicit color configuration passed to the visualization engines."""

    primary: str = "#6366f1"
    accent: str = "#22d3ee"
    transitional: str = "#fbbf24"
    turbulent: str = "#fb7185"
    marker: str = "#f43f5e"
    background: str = "#020617"


@dataclass
class AppSettings:
    """Presentation settings shared by the CLI and the desktop shell."""

    canvas_width: int = 1200
    canvas_height: int = 600
    particle_count: int = 100
    frame_rate: float = 60.0  # Hz
    seed: int | None = None
    history_limit: int = 50
    colors: ColorConfig = field(default_factory=ColorConfig)

    @property
    def frame_interval(self) -> float:
        """Seconds between animation frames."""
        return 1.0 / self.frame_rate if self.frame_rate > 0 else 1.0 / 60.0


def _known(cls: type, data: dict[str, Any], section: str) -> dict[str, Any]:
    names = {f.name for f in fields(cls)}
    for key in data:
        if key not in names:
            logger.warning("Ignoring unknown %s setting '%s'", section, key)
    return {k: v for k, v in data.items() if k in names}


def settings_from_dict(data: dict[str, Any]) -> AppSettings:
    """Build settings from a plain dictionary.

    Missing keys take defaults, and so do values that fail
    :func:`validate_settings` (logged as warnings).
    """
    data = dict(data)
    colors = ColorConfig(**_known(ColorConfig, data.pop("colors", None) or {}, "color"))
    values = _known(AppSettings, data, "application")
    for message in validate_settings(values).errors:
        logger.warning("%s; using the default", message.message)
        values.pop(message.parameter)
    return AppSettings(colors=colors, **values)


def save_settings_json(settings: AppSettings, path: str | Path) -> None:
    """Save settings to a JSON file."""
    path = Path(path)
    with open(path, "w") as f:
        json.dump(asdict(settings), f, indent=2)
    logger.info("Saved settings to %s", path)


def load_settings_json(path: str | Path) -> AppSettings:
    """Load settings from a JSON file."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)
    settings = settings_from_dict(data)
    logger.info("Loaded settings from %s", path)
    return settings
