"""
路径规划模块

将矩形区域切分为网格并生成蛇形覆盖航点序列
"""

from .path_planner import PathPlanner, plan_path, iter_path

__all__ = [
    'PathPlanner',
    'plan_path',
    'iter_path',
]
