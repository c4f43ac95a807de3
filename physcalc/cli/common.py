"""Helpers shared by the CLI commands."""

from __future__ import annotations

from typing import Iterable

import click
from rich.console import Console

from physcalc.core.config import AppSettings
from physcalc.core.formulas import FieldDescriptor
from physcalc.utils.units import is_known_unit


def parse_assignments(values: Iterable[str]) -> tuple[dict[str, str], dict[str, str]]:
    """Split ``FIELD=VALUE[:UNIT]`` options into raw-text and unit maps.

    Values are kept as text; numeric parsing is the facade's job.
    """
    inputs: dict[str, str] = {}
    units: dict[str, str] = {}
    for item in values:
        if "=" not in item:
            raise click.BadParameter(f"Expected FIELD=VALUE[:UNIT], got '{item}'", param_hint="--input")
        field_id, _, rest = item.partition("=")
        field_id = field_id.strip()
        text, sep, unit = rest.partition(":")
        inputs[field_id] = text.strip()
        if sep:
            units[field_id] = unit.strip()
    return inputs, units


def check_fields(
    fields: Iterable[FieldDescriptor],
    inputs: dict[str, str],
    units: dict[str, str],
    console: Console,
) -> None:
    """Reject unknown field ids and warn about unknown unit symbols."""
    known = {f.id: f for f in fields}
    unknown = sorted(set(inputs) - set(known))
    if unknown:
        raise click.BadParameter(
            f"Unknown field(s) {', '.join(unknown)}. Available: {', '.join(known)}",
            param_hint="--input",
        )
    for field_id, unit in units.items():
        if not is_known_unit(unit):
            console.print(
                f"[yellow]Warning:[/yellow] unknown unit '{unit}' for {field_id}; "
                "value is used unconverted"
            )


def get_console(ctx: click.Context) -> Console:
    return ctx.obj.get("console", Console()) if ctx.obj else Console()


def get_settings(ctx: click.Context) -> AppSettings:
    return ctx.obj.get("settings", AppSettings()) if ctx.obj else AppSettings()
