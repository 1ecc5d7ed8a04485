"""
覆盖规划异常定义

所有异常均为输入前置条件错误，不可重试。
"""


class CoveragePlanningError(ValueError):
    """覆盖规划错误基类"""
    pass


class InvalidGeometryError(CoveragePlanningError):
    """相机角度或飞行高度无效（非有限值、超出范围或非正）"""
    pass


class DegenerateGridCellError(CoveragePlanningError):
    """网格单元尺寸非正，继续规划将导致死循环"""
    pass


class DegenerateRectangleError(CoveragePlanningError):
    """矩形区域坐标无效"""
    pass


class WaypointLimitExceededError(CoveragePlanningError):
    """规划航点数量超过上限"""
    pass
