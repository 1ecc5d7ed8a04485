"""
核心模块 - 无人机航拍覆盖路径规划

包含几何数据模型、相机足迹计算与蛇形（牛耕式）路径规划
"""

from .models import GeoPoint, Rectangle, CameraGeometry, GridCell
from .exceptions import (
    CoveragePlanningError,
    InvalidGeometryError,
    DegenerateGridCellError,
    DegenerateRectangleError,
    WaypointLimitExceededError,
)
from .coverage import FootprintCalculator, Footprint, compute_grid_cell
from .planner import PathPlanner, plan_path, iter_path

__all__ = [
    'GeoPoint', 'Rectangle', 'CameraGeometry', 'GridCell',
    'CoveragePlanningError', 'InvalidGeometryError', 'DegenerateGridCellError',
    'DegenerateRectangleError', 'WaypointLimitExceededError',
    'FootprintCalculator', 'Footprint', 'compute_grid_cell',
    'PathPlanner', 'plan_path', 'iter_path',
]
