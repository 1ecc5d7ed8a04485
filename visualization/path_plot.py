"""
覆盖路径可视化器

绘制覆盖区域、网格划分以及蛇形航点路径
"""

import matplotlib
matplotlib.use('Agg')  # 使用非交互式后端
import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle as RectPatch
import numpy as np
from pathlib import Path
from typing import Optional, Sequence

from core.models import GeoPoint, GridCell, Rectangle


class PathPlotter:
    """覆盖路径可视化器"""

    def __init__(self, figsize: tuple = (10, 8)):
        """
        初始化路径可视化器

        Args:
            figsize: 图表尺寸 (宽, 高)
        """
        self.figsize = figsize

    def plot(
        self,
        rect: Rectangle,
        waypoints: Sequence[GeoPoint],
        cell: Optional[GridCell] = None,
        title: str = "Coverage path",
        annotate_ends: bool = True
    ) -> plt.Figure:
        """
        绘制覆盖路径

        Args:
            rect: 覆盖区域
            waypoints: 按访问顺序排列的航点
            cell: 网格单元，给出时绘制每个航点对应的网格
            title: 图表标题
            annotate_ends: 是否标注起点和终点

        Returns:
            matplotlib Figure对象
        """
        fig, ax = plt.subplots(figsize=self.figsize)

        ax.add_patch(RectPatch(
            (rect.left_bottom.x, rect.left_bottom.y),
            rect.width, rect.height,
            fill=False, edgecolor='black', linewidth=1.5,
        ))

        coords = np.array([p.to_tuple() for p in waypoints], dtype=float).reshape(-1, 2)

        if cell is not None:
            for x, y in coords:
                ax.add_patch(RectPatch(
                    (x - cell.length / 2, y - cell.width / 2),
                    cell.length, cell.width,
                    fill=False, edgecolor='lightgray', linewidth=0.5,
                ))

        if len(coords):
            ax.plot(coords[:, 0], coords[:, 1], '-', color='steelblue', linewidth=1)
            ax.plot(coords[:, 0], coords[:, 1], 'o', color='steelblue', markersize=3)

            if annotate_ends:
                ax.plot(*coords[0], 'g^', markersize=10, label='start')
                ax.plot(*coords[-1], 'rs', markersize=8, label='end')
                ax.legend(loc='upper right')

        # 航点可能略超出区域边界（最后一列/行不足一个网格时）
        all_x = np.concatenate([coords[:, 0], [rect.left_bottom.x, rect.right_top.x]])
        all_y = np.concatenate([coords[:, 1], [rect.left_bottom.y, rect.right_top.y]])
        margin_x = (all_x.max() - all_x.min()) * 0.05 or 1e-6
        margin_y = (all_y.max() - all_y.min()) * 0.05 or 1e-6
        ax.set_xlim(all_x.min() - margin_x, all_x.max() + margin_x)
        ax.set_ylim(all_y.min() - margin_y, all_y.max() + margin_y)

        ax.set_xlabel('X / longitude (°)', fontsize=11)
        ax.set_ylabel('Y / latitude (°)', fontsize=11)
        ax.set_title(f"{title} ({len(coords)} waypoints)", fontsize=13, weight='bold')
        ax.grid(True, linestyle='--', alpha=0.3)

        plt.tight_layout()
        return fig

    def save(self, fig: plt.Figure, filepath: str, dpi: int = 150) -> None:
        """
        保存图表并关闭

        Args:
            fig: matplotlib Figure对象
            filepath: 保存路径
            dpi: 分辨率
        """
        Path(filepath).parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(filepath, dpi=dpi, bbox_inches='tight')
        plt.close(fig)
