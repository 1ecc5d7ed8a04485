"""
航点导出模块

功能：
- 将航点序列格式化为显示字符串 "(x, y), (x, y), "
- 导出为CSV
- 导出为JSON
"""

import csv
from pathlib import Path
from typing import Any, Dict, List, Sequence

from core.models import GeoPoint

from .json_utils import save_json


class DataExportError(Exception):
    """数据导出错误"""
    pass


def format_waypoints(points: Sequence[GeoPoint], separator: str = ", ") -> str:
    """
    将航点格式化为显示字符串

    每个坐标对后都附加分隔符，例如 "(0.5, 0.5), (1.5, 0.5), "。

    Args:
        points: 航点序列
        separator: 分隔符

    Returns:
        str: 格式化后的字符串，空序列返回空字符串
    """
    return "".join(f"({p.x}, {p.y}){separator}" for p in points)


def waypoint_rows(points: Sequence[GeoPoint]) -> List[Dict[str, Any]]:
    """将航点转换为 {index, x, y} 行，index 从1开始"""
    return [
        {"index": i, "x": p.x, "y": p.y}
        for i, p in enumerate(points, start=1)
    ]


class DataExporter:
    """
    航点导出器

    支持将航点序列导出为CSV或JSON文件
    """

    FIELDNAMES = ["index", "x", "y"]

    def _validate_data(self, points: Any) -> None:
        """
        验证航点数据有效性

        Raises:
            DataExportError: 数据无效时抛出
        """
        if points is None:
            raise DataExportError("航点数据不能为None")

        if not isinstance(points, (list, tuple)):
            raise DataExportError(f"航点数据必须是序列类型，当前类型: {type(points).__name__}")

        for i, point in enumerate(points):
            if not isinstance(point, GeoPoint):
                raise DataExportError(f"第{i}个元素不是GeoPoint: {type(point).__name__}")

    def to_csv(self, points: Sequence[GeoPoint], path: str) -> None:
        """
        导出航点为CSV文件

        Args:
            points: 航点序列
            path: 输出文件路径

        Raises:
            DataExportError: 导出失败时抛出
        """
        self._validate_data(points)

        try:
            Path(path).parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8', newline='') as f:
                writer = csv.DictWriter(f, fieldnames=self.FIELDNAMES)
                writer.writeheader()
                writer.writerows(waypoint_rows(points))
        except OSError as e:
            raise DataExportError(f"导出CSV失败: {e}") from e

    def to_json(self, points: Sequence[GeoPoint], path: str, indent: int = 2) -> None:
        """
        导出航点为JSON文件

        Args:
            points: 航点序列
            path: 输出文件路径
            indent: 缩进空格数

        Raises:
            DataExportError: 导出失败时抛出
        """
        self._validate_data(points)

        try:
            save_json(waypoint_rows(points), path, indent=indent)
        except (OSError, TypeError) as e:
            raise DataExportError(f"导出JSON失败: {e}") from e

    def export(self, points: Sequence[GeoPoint], path: str) -> str:
        """
        按文件扩展名选择导出格式

        Args:
            points: 航点序列
            path: 输出文件路径（.csv 或 .json）

        Returns:
            str: 使用的格式

        Raises:
            DataExportError: 不支持的扩展名或导出失败
        """
        suffix = Path(path).suffix.lower()
        if suffix == ".csv":
            self.to_csv(points, path)
            return "csv"
        if suffix == ".json":
            self.to_json(points, path)
            return "json"
        raise DataExportError(f"不支持的导出格式: {suffix or path}")
