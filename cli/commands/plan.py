"""Plan command.

Computes the serpentine coverage path for the configured survey area.
"""
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from core.coverage import FootprintCalculator
from core.exceptions import CoveragePlanningError
from core.planner import PathPlanner
from utils.data_export import DataExporter, DataExportError, format_waypoints, waypoint_rows
from utils.json_utils import dumps

from ..utils import load_survey, setup_logging


def _print_summary(survey, footprint, rows: int, columns: int, waypoints) -> None:
    table = Table(title="Coverage plan")
    table.add_column("Item", style="cyan")
    table.add_column("Value", justify="right")
    rect = survey.rectangle
    table.add_row("Left bottom", f"({rect.left_bottom.x}, {rect.left_bottom.y})")
    table.add_row("Right top", f"({rect.right_top.x}, {rect.right_top.y})")
    table.add_row("FOV width x length", f"{footprint.fov_width:.4f} x {footprint.fov_length:.4f}")
    table.add_row("Grid", f"{rows} rows x {columns} columns")
    table.add_row("Waypoints", str(len(waypoints)))
    Console(stderr=True).print(table)


@click.command()
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Survey configuration file (YAML, JSON or INI)")
@click.option("--left-bottom", nargs=2, type=float, default=None,
              help="Override bottom-left corner: X Y")
@click.option("--right-top", nargs=2, type=float, default=None,
              help="Override top-right corner: X Y")
@click.option("--altitude", type=float, help="Override flight altitude")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", show_default=True, help="Waypoint output format")
@click.option("--output", "-o", type=click.Path(dir_okay=False),
              help="Write waypoints to a .csv or .json file")
@click.option("--plot", type=click.Path(dir_okay=False), help="Save a path plot image")
@click.option("--summary", is_flag=True, help="Print a plan summary table to stderr")
@click.option("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Also write logs to this file")
def plan(config_path: Optional[str], left_bottom: Optional[Tuple[float, float]],
         right_top: Optional[Tuple[float, float]], altitude: Optional[float],
         output_format: str, output: Optional[str], plot: Optional[str],
         summary: bool, log_level: Optional[str], log_file: Optional[str]):
    """Plan the lawn-mower coverage path."""
    # click 对未提供的 nargs=2 选项给出 None 或空元组
    survey = load_survey(config_path, altitude=altitude,
                         left_bottom=left_bottom or None, right_top=right_top or None)
    logger = setup_logging(survey, level=log_level, log_file=log_file)

    planner = PathPlanner(max_waypoints=survey.max_waypoints)
    try:
        footprint = FootprintCalculator().calculate(survey.camera)
        waypoints, rows, columns = planner.plan_with_shape(
            survey.rectangle, footprint.grid_cell
        )
    except CoveragePlanningError as e:
        logger.error({"message": "Planning failed", "error": str(e)})
        raise click.ClickException(str(e)) from e

    logger.info({
        "message": "Coverage plan computed",
        "rows": rows,
        "columns": columns,
        "waypoints": len(waypoints),
    })

    if output:
        try:
            DataExporter().export(waypoints, output)
        except DataExportError as e:
            raise click.ClickException(str(e)) from e

    if plot:
        from visualization.path_plot import PathPlotter

        plotter = PathPlotter()
        fig = plotter.plot(survey.rectangle, waypoints, cell=footprint.grid_cell)
        plotter.save(fig, plot)

    if summary:
        _print_summary(survey, footprint, rows, columns, waypoints)

    if output_format == "json":
        click.echo(dumps(waypoint_rows(waypoints)))
    else:
        click.echo("Navigation as: " + format_waypoints(waypoints))
