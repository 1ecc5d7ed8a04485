"""
Footprint Calculator - Camera Ground Footprint Calculator

Calculates the ground area seen by a nadir-pointing camera and converts it
into a grid cell expressed in geographic degrees.
"""

from dataclasses import dataclass
from typing import Tuple
import logging
import math

from core.exceptions import InvalidGeometryError
from core.models import CameraGeometry, GridCell

logger = logging.getLogger(__name__)

# 参考纬度（度），下列换算常数仅在该纬度附近有效
REFERENCE_LATITUDE_DEG = 33.1519

# 每10米对应的纬度差（度）：1°纬度 ≈ 69.172英里
LAT_DEG_PER_10M = 0.0000904

# 每10米对应的经度差（度）：1°经度 = cos(33.1519°) * 69.172英里 ≈ 57.912英里
LON_DEG_PER_10M = 0.0000898


@dataclass(frozen=True)
class Footprint:
    """相机单次拍摄的地面足迹"""
    fov_width: float   # 米，由垂直视场角决定
    fov_length: float  # 米，由水平视场角决定
    grid_cell: GridCell


class FootprintCalculator:
    """
    相机足迹计算器

    足迹公式：
        W = 2 * h * tan(a / 2)
        L = 2 * h * tan(b / 2)
    其中 h 为飞行高度，a 为垂直视场半角，b 为水平视场半角。

    线性距离到经纬度的换算使用固定常数（参考纬度约33.15°），
    不适用于任意纬度，也不做大地测量修正。
    """

    def compute_footprint(
        self,
        vertical_half_angle: float,
        horizontal_half_angle: float,
        altitude: float
    ) -> Tuple[float, float]:
        """
        计算地面足迹宽度与长度

        Args:
            vertical_half_angle: 垂直视场半角（弧度），取值 (0, π)
            horizontal_half_angle: 水平视场半角（弧度），取值 (0, π)
            altitude: 飞行高度（米），必须为正

        Returns:
            Tuple[float, float]: (fov_width, fov_length)，单位米

        Raises:
            InvalidGeometryError: 角度或高度无效
        """
        self._validate_angle("vertical_half_angle", vertical_half_angle)
        self._validate_angle("horizontal_half_angle", horizontal_half_angle)
        if not math.isfinite(altitude) or altitude <= 0:
            raise InvalidGeometryError(
                f"altitude must be a positive finite number, got {altitude}"
            )

        tan_vertical = math.tan(vertical_half_angle / 2)
        tan_horizontal = math.tan(horizontal_half_angle / 2)
        logger.debug(
            "Camera geometry: vertical=%s rad, horizontal=%s rad, altitude=%s, "
            "tan(a/2)=%s, tan(b/2)=%s",
            vertical_half_angle, horizontal_half_angle, altitude,
            tan_vertical, tan_horizontal,
        )

        fov_width = 2 * altitude * tan_vertical
        fov_length = 2 * altitude * tan_horizontal
        logger.debug("FOV width: %s, FOV length: %s", fov_width, fov_length)

        return fov_width, fov_length

    def to_grid_cell(self, fov_width: float, fov_length: float) -> GridCell:
        """
        将线性足迹换算为经纬度网格单元

        宽度沿纬度方向（Y），长度沿经度方向（X）。

        Args:
            fov_width: 足迹宽度（米）
            fov_length: 足迹长度（米）

        Returns:
            GridCell: 网格单元（度）
        """
        width_deg = (LAT_DEG_PER_10M * fov_width) / 10
        length_deg = (LON_DEG_PER_10M * fov_length) / 10
        logger.debug(
            "FOV width in degree: %s, FOV length in degree: %s",
            width_deg, length_deg,
        )
        return GridCell(length=length_deg, width=width_deg)

    def calculate(self, camera: CameraGeometry) -> Footprint:
        """
        计算相机足迹及对应网格单元

        Args:
            camera: 相机几何参数

        Returns:
            Footprint: 足迹对象（包含中间结果）
        """
        fov_width, fov_length = self.compute_footprint(
            camera.vertical_half_angle,
            camera.horizontal_half_angle,
            camera.altitude,
        )
        return Footprint(
            fov_width=fov_width,
            fov_length=fov_length,
            grid_cell=self.to_grid_cell(fov_width, fov_length),
        )

    def compute_grid_cell(self, camera: CameraGeometry) -> GridCell:
        """计算相机参数对应的网格单元"""
        return self.calculate(camera).grid_cell

    @staticmethod
    def _validate_angle(name: str, value: float) -> None:
        if not math.isfinite(value) or not 0 < value < math.pi:
            raise InvalidGeometryError(
                f"{name} must be a finite angle in (0, pi) radians, got {value}"
            )


def compute_grid_cell(camera: CameraGeometry) -> GridCell:
    """
    计算相机参数对应的网格单元

    Args:
        camera: 相机几何参数

    Returns:
        GridCell: 网格单元（度）
    """
    return FootprintCalculator().compute_grid_cell(camera)
