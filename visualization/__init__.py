"""可视化模块"""

from .path_plot import PathPlotter

__all__ = [
    'PathPlotter',
]
