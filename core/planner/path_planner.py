"""
蛇形路径规划器

将矩形区域按网格单元切分，逐行自下而上扫描，行内方向交替
（奇数行从左到右，偶数行从右到左），输出每个网格中心作为拍摄航点。

    ----------------------------------------- (右上角)
    |___16___|___15____|___14____|____13___|
    |___9____|___10____|___11____|___12____|
    |___8____|____7____|____6____|____5____|
    |___1____|___2_____|____3____|____4____|
    -----------------------------------------
  (左下角)
"""

import logging
import math
from typing import Iterator, List, Optional, Tuple

from core.exceptions import (
    DegenerateGridCellError,
    DegenerateRectangleError,
    WaypointLimitExceededError,
)
from core.models import GeoPoint, GridCell, Rectangle

logger = logging.getLogger(__name__)


class PathPlanner:
    """
    蛇形（牛耕式）覆盖路径规划器

    Attributes:
        max_waypoints: 单次规划允许的最大航点数，None 表示不限制
    """

    DEFAULT_MAX_WAYPOINTS = 1_000_000

    def __init__(self, max_waypoints: Optional[int] = DEFAULT_MAX_WAYPOINTS):
        """
        初始化路径规划器

        Args:
            max_waypoints: 最大航点数，默认1000000
        """
        if max_waypoints is not None and max_waypoints <= 0:
            raise ValueError(f"max_waypoints must be positive, got {max_waypoints}")
        self.max_waypoints = max_waypoints

    def plan(self, rect: Rectangle, cell: GridCell) -> List[GeoPoint]:
        """
        规划覆盖路径

        Args:
            rect: 覆盖区域
            cell: 网格单元（度）

        Returns:
            List[GeoPoint]: 按访问顺序排列的航点

        Raises:
            DegenerateGridCellError: 网格单元尺寸非正或非有限值
            DegenerateRectangleError: 矩形坐标非有限值
            WaypointLimitExceededError: 航点数量超过上限
        """
        return self.plan_with_shape(rect, cell)[0]

    def plan_with_shape(
        self,
        rect: Rectangle,
        cell: GridCell
    ) -> Tuple[List[GeoPoint], int, int]:
        """
        规划覆盖路径并返回扫描网格的行列数

        Returns:
            Tuple[List[GeoPoint], int, int]: (航点, 行数, 列数)
        """
        rows, columns = self._checked_shape(rect, cell)
        waypoints = list(self._sweep(rect, cell, rows, columns))
        logger.info("Planned %d waypoints", len(waypoints))
        return waypoints, rows, columns

    def iter_path(self, rect: Rectangle, cell: GridCell) -> Iterator[GeoPoint]:
        """
        逐个生成航点

        前置条件在调用时立即检查，而不是在首次迭代时。每次调用返回新的迭代器。
        """
        rows, columns = self._checked_shape(rect, cell)
        return self._sweep(rect, cell, rows, columns)

    def grid_shape(self, rect: Rectangle, cell: GridCell) -> Tuple[int, int]:
        """
        计算扫描网格的行数与列数

        Args:
            rect: 覆盖区域
            cell: 网格单元（度）

        Returns:
            Tuple[int, int]: (行数, 列数)；退化矩形返回 (0, 0)
        """
        self._validate(rect, cell)

        if rect.is_degenerate():
            logger.warning(
                "Degenerate rectangle %s, nothing to cover", rect
            )
            return 0, 0

        rows = self._count_steps(rect.height, cell.width)
        columns = self._count_steps(rect.width, cell.length)
        return rows, columns

    def _checked_shape(self, rect: Rectangle, cell: GridCell) -> Tuple[int, int]:
        rows, columns = self.grid_shape(rect, cell)
        if self.max_waypoints is not None and rows * columns > self.max_waypoints:
            raise WaypointLimitExceededError(
                f"Sweep of {rows} rows x {columns} columns exceeds "
                f"max_waypoints={self.max_waypoints}"
            )
        if rows and columns:
            logger.debug(
                "Sweeping %s with cell %s: %d rows x %d columns",
                rect, cell, rows, columns,
            )
        return rows, columns

    @staticmethod
    def _sweep(
        rect: Rectangle,
        cell: GridCell,
        rows: int,
        columns: int
    ) -> Iterator[GeoPoint]:
        left, bottom = rect.left_bottom.x, rect.left_bottom.y
        right = rect.right_top.x
        half_length = cell.length / 2

        # 行列数由 grid_shape 给出，每行航点数相同
        for row in range(rows):
            point_y = bottom + row * cell.width + cell.width / 2
            if row % 2 == 0:
                for column in range(columns):
                    yield GeoPoint(left + column * cell.length + half_length, point_y)
            else:
                for column in range(columns):
                    yield GeoPoint(right - column * cell.length - half_length, point_y)

    @staticmethod
    def _validate(rect: Rectangle, cell: GridCell) -> None:
        if not cell.is_valid():
            raise DegenerateGridCellError(
                f"Grid cell dimensions must be positive and finite, "
                f"got length={cell.length}, width={cell.width}"
            )
        if not rect.is_finite():
            raise DegenerateRectangleError(
                f"Rectangle coordinates must be finite, got {rect}"
            )

    @staticmethod
    def _count_steps(span: float, step: float) -> int:
        ratio = span / step
        if not math.isfinite(ratio):
            raise WaypointLimitExceededError(
                f"Span {span} is too large for step {step}"
            )
        return math.ceil(ratio)


def iter_path(rect: Rectangle, cell: GridCell) -> Iterator[GeoPoint]:
    """逐个生成覆盖航点"""
    return PathPlanner().iter_path(rect, cell)


def plan_path(rect: Rectangle, cell: GridCell) -> List[GeoPoint]:
    """
    规划矩形区域的蛇形覆盖路径

    Args:
        rect: 覆盖区域（左下角、右上角）
        cell: 网格单元（度）

    Returns:
        List[GeoPoint]: 按访问顺序排列的网格中心点
    """
    return PathPlanner().plan(rect, cell)
