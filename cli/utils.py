"""Shared helpers for CLI commands."""
from typing import Optional, Tuple

import click

from core.models import CameraGeometry, GeoPoint, Rectangle
from utils.config_loader import ConfigLoadError, ConfigValidationError, SurveyConfig
from utils.logger import Logger, LoggerConfigError, configure_logging


def load_survey(
    config_path: Optional[str],
    altitude: Optional[float] = None,
    left_bottom: Optional[Tuple[float, float]] = None,
    right_top: Optional[Tuple[float, float]] = None,
) -> SurveyConfig:
    """
    Load the survey configuration and apply command line overrides.

    Raises:
        click.ClickException: If the configuration cannot be loaded
    """
    try:
        survey = SurveyConfig.load(config_path)
    except (ConfigLoadError, ConfigValidationError) as e:
        raise click.ClickException(str(e)) from e

    camera = survey.camera
    if altitude is not None:
        camera = CameraGeometry(
            vertical_half_angle=camera.vertical_half_angle,
            horizontal_half_angle=camera.horizontal_half_angle,
            altitude=altitude,
        )

    rect = survey.rectangle
    if left_bottom is not None or right_top is not None:
        rect = Rectangle(
            left_bottom=GeoPoint(*left_bottom) if left_bottom else rect.left_bottom,
            right_top=GeoPoint(*right_top) if right_top else rect.right_top,
        )

    return SurveyConfig(
        camera=camera,
        rectangle=rect,
        max_waypoints=survey.max_waypoints,
        log_level=survey.log_level,
        log_format=survey.log_format,
    )


def setup_logging(
    survey: SurveyConfig,
    level: Optional[str] = None,
    log_file: Optional[str] = None,
) -> Logger:
    """Configure core logging from the survey config and CLI overrides."""
    try:
        return configure_logging(
            level=level or survey.log_level,
            log_file=log_file,
            format=survey.log_format,
        )
    except LoggerConfigError as e:
        raise click.ClickException(str(e)) from e
