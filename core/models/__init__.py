"""核心数据模型"""

from .geometry import GeoPoint, Rectangle, CameraGeometry, GridCell

__all__ = [
    'GeoPoint', 'Rectangle', 'CameraGeometry', 'GridCell',
]
