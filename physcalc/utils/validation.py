"""Input validation and design rule checking for PhysCalc."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for validation messages."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding."""

    severity: Severity
    parameter: str
    message: str
    value: Any = None
    limit: Any = None


@dataclass
class ValidationResult:
    """Aggregated validation result."""

    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not any(m.severity == Severity.ERROR for m in self.messages)

    @property
    def has_warnings(self) -> bool:
        return any(m.severity == Severity.WARNING for m in self.messages)

    @property
    def errors(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    def add(self, severity: Severity, parameter: str, message: str, **kwargs: Any) -> None:
        self.messages.append(
            ValidationMessage(severity=severity, parameter=parameter, message=message, **kwargs)
        )

    def error(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, parameter, message, **kwargs)

    def warning(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, parameter, message, **kwargs)

    def info(self, parameter: str, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, parameter, message, **kwargs)

    def merge(self, other: ValidationResult) -> None:
        self.messages.extend(other.messages)


# --- Common validators ---


def validate_finite(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is a finite number."""
    if not math.isfinite(value):
        result.error(name, f"{name} must be finite, got {value}")


def validate_positive(name: str, value: float, result: ValidationResult) -> None:
    """Validate that a value is finite and strictly positive."""
    if not math.isfinite(value) or value <= 0:
        result.error(name, f"{name} must be positive, got {value}")


def validate_range(
    name: str,
    value: float,
    low: float,
    high: float,
    result: ValidationResult,
    severity: Severity = Severity.ERROR,
) -> None:
    """Validate that a value falls within [low, high]."""
    if value < low or value > high:
        result.add(severity, name, f"{name} = {value} is outside [{low}, {high}]")


# Serviceability limit for live-load deflection (span / 360).
SPAN_DEFLECTION_LIMIT = 360.0


def validate_beam_design(design: dict) -> ValidationResult:
    """Run validation checks on a beam design dictionary (SI values).

    Recognised keys: ``length``, ``modulus``, ``moment_of_inertia``,
    ``max_deflection_mm``.
    """
    result = ValidationResult()

    length = design.get("length")
    if length is not None:
        validate_positive("length", length, result)

    modulus = design.get("modulus")
    if modulus is not None:
        validate_positive("modulus", modulus, result)
        if math.isfinite(modulus) and 0 < modulus < 1e6:
            result.warning("modulus", f"Young's modulus {modulus:.3g} Pa is unusually low")

    inertia = design.get("moment_of_inertia")
    if inertia is not None:
        validate_positive("moment_of_inertia", inertia, result)

    deflection_mm = design.get("max_deflection_mm")
    if deflection_mm is not None and length and length > 0:
        limit_mm = length * 1e3 / SPAN_DEFLECTION_LIMIT
        if abs(deflection_mm) > limit_mm:
            result.warning(
                "max_deflection_mm",
                f"Deflection {deflection_mm:.2f} mm exceeds span/{SPAN_DEFLECTION_LIMIT:.0f} "
                f"({limit_mm:.2f} mm)",
                value=deflection_mm,
                limit=limit_mm,
            )

    return result


# Smallest canvas the particle engine lays out (padding on every side).
MIN_CANVAS_SIZE = 160


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_settings(settings: dict) -> ValidationResult:
    """Run validation checks on a presentation settings dictionary.

    Recognised keys: ``canvas_width``, ``canvas_height``,
    ``particle_count``, ``frame_rate``, ``seed``, ``history_limit``.
    Missing keys are not checked.
    """
    result = ValidationResult()

    for name in ("canvas_width", "canvas_height"):
        if name in settings:
            value = settings[name]
            if not _is_int(value) or value <= MIN_CANVAS_SIZE:
                result.error(name, f"{name} must be an integer above {MIN_CANVAS_SIZE} px, got {value!r}")

    if "particle_count" in settings:
        value = settings["particle_count"]
        if not _is_int(value) or value < 0:
            result.error("particle_count", f"particle_count must be a non-negative integer, got {value!r}")

    if "history_limit" in settings:
        value = settings["history_limit"]
        if not _is_int(value) or value <= 0:
            result.error("history_limit", f"history_limit must be a positive integer, got {value!r}")

    if "frame_rate" in settings:
        value = settings["frame_rate"]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            result.error("frame_rate", f"frame_rate must be a finite number, got {value!r}")

    if settings.get("seed") is not None:
        value = settings["seed"]
        if not _is_int(value) or value < 0:
            result.error("seed", f"seed must be a non-negative integer, got {value!r}")

    return result
