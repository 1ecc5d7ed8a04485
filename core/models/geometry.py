"""
几何模型 - 定义航拍覆盖规划使用的值类型

- GeoPoint: 地理坐标点（X为经度方向，Y为纬度方向，单位：度）
- Rectangle: 由左下角与右上角定义的矩形覆盖区域
- CameraGeometry: 相机视场半角与飞行高度
- GridCell: 以度为单位的网格单元尺寸
"""

import math
from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class GeoPoint:
    """
    地理坐标点

    Attributes:
        x: 经度方向坐标（度）
        y: 纬度方向坐标（度）
    """
    x: float
    y: float

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoPoint":
        """
        从字典创建坐标点

        同时接受 {"X": .., "Y": ..} 与 {"x": .., "y": ..} 两种键名。
        """
        x = data["X"] if "X" in data else data["x"]
        y = data["Y"] if "Y" in data else data["y"]
        return cls(x=float(x), y=float(y))


@dataclass(frozen=True)
class Rectangle:
    """
    矩形覆盖区域

    构造时不检查 left_bottom < right_top，由路径规划器负责处理退化情况。

    Attributes:
        left_bottom: 左下角坐标
        right_top: 右上角坐标
    """
    left_bottom: GeoPoint
    right_top: GeoPoint

    @property
    def width(self) -> float:
        """X方向跨度（度）"""
        return self.right_top.x - self.left_bottom.x

    @property
    def height(self) -> float:
        """Y方向跨度（度）"""
        return self.right_top.y - self.left_bottom.y

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (
            self.left_bottom.x, self.left_bottom.y,
            self.right_top.x, self.right_top.y,
        ))

    def is_degenerate(self) -> bool:
        """左下角在任一轴上不严格小于右上角"""
        return self.width <= 0 or self.height <= 0

    def contains(self, point: GeoPoint) -> bool:
        """判断点是否在矩形内（包含边界）"""
        return (self.left_bottom.x <= point.x <= self.right_top.x and
                self.left_bottom.y <= point.y <= self.right_top.y)

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "left_bottom": self.left_bottom.to_dict(),
            "right_top": self.right_top.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rectangle":
        """
        从字典创建矩形

        支持两种格式：
        - {"LeftBottom": {"X": .., "Y": ..}, "RightTop": {"X": .., "Y": ..}}
        - {"left_bottom": {"x": .., "y": ..}, "right_top": {"x": .., "y": ..}}

        Args:
            data: 矩形描述字典

        Returns:
            Rectangle: 矩形对象

        Raises:
            KeyError: 缺少角点字段
        """
        left_bottom = data["LeftBottom"] if "LeftBottom" in data else data["left_bottom"]
        right_top = data["RightTop"] if "RightTop" in data else data["right_top"]
        return cls(
            left_bottom=GeoPoint.from_dict(left_bottom),
            right_top=GeoPoint.from_dict(right_top),
        )


@dataclass(frozen=True)
class CameraGeometry:
    """
    相机几何参数

    Attributes:
        vertical_half_angle: 垂直视场半角（弧度）
        horizontal_half_angle: 水平视场半角（弧度）
        altitude: 飞行高度（米）
    """
    vertical_half_angle: float
    horizontal_half_angle: float
    altitude: float

    @classmethod
    def from_degrees(
        cls,
        vertical_half_angle_deg: float,
        horizontal_half_angle_deg: float,
        altitude: float
    ) -> "CameraGeometry":
        """以角度（度）创建相机参数"""
        return cls(
            vertical_half_angle=math.radians(vertical_half_angle_deg),
            horizontal_half_angle=math.radians(horizontal_half_angle_deg),
            altitude=altitude,
        )


@dataclass(frozen=True)
class GridCell:
    """
    网格单元尺寸（度）

    Attributes:
        length: X方向步长（经度差）
        width: Y方向步长（纬度差）
    """
    length: float
    width: float

    def is_valid(self) -> bool:
        """两个方向的步长均为有限正数"""
        return (math.isfinite(self.length) and math.isfinite(self.width) and
                self.length > 0 and self.width > 0)
