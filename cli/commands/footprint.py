"""Footprint command.

Reports the camera ground footprint and the grid cell derived from it.
"""
import math
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from core.coverage import FootprintCalculator
from core.exceptions import CoveragePlanningError
from utils.json_utils import dumps

from ..utils import load_survey, setup_logging


@click.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Survey configuration file (YAML, JSON or INI)")
@click.option("--altitude", type=float, help="Override flight altitude")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]),
              default="table", show_default=True, help="Output format")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
def footprint(config_path: Optional[str], altitude: Optional[float],
              output_format: str, log_level: Optional[str]):
    """Compute the camera footprint and grid cell size."""
    survey = load_survey(config_path, altitude=altitude)
    setup_logging(survey, level=log_level)

    try:
        result = FootprintCalculator().calculate(survey.camera)
    except CoveragePlanningError as e:
        raise click.ClickException(str(e)) from e

    if output_format == "json":
        click.echo(dumps({"camera": survey.camera, "footprint": result}))
        return

    camera = survey.camera
    table = Table(title="Camera footprint")
    table.add_column("Quantity", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Vertical half-angle",
                  f"{camera.vertical_half_angle} rad ({math.degrees(camera.vertical_half_angle):.2f}°)")
    table.add_row("Horizontal half-angle",
                  f"{camera.horizontal_half_angle} rad ({math.degrees(camera.horizontal_half_angle):.2f}°)")
    table.add_row("Flight altitude", f"{camera.altitude}")
    table.add_row("FOV width", f"{result.fov_width:.4f}")
    table.add_row("FOV length", f"{result.fov_length:.4f}")
    table.add_row("Grid cell width (°)", f"{result.grid_cell.width:.10f}")
    table.add_row("Grid cell length (°)", f"{result.grid_cell.length:.10f}")
    Console().print(table)
