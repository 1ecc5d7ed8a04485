"""
覆盖路径规划演示

计算默认相机参数下的网格单元，并规划示例区域的蛇形航点
"""

from core.coverage import FootprintCalculator
from core.models import CameraGeometry, GeoPoint, Rectangle
from core.planner import PathPlanner
from utils.data_export import format_waypoints
from utils.logger import configure_logging


def main():
    configure_logging(level="DEBUG")

    camera = CameraGeometry(
        vertical_half_angle=0.523599,
        horizontal_half_angle=1.0472,
        altitude=30.48,
    )
    footprint = FootprintCalculator().calculate(camera)

    print("=" * 60)
    print(f"FOV width: {footprint.fov_width:.4f}  FOV length: {footprint.fov_length:.4f}")
    print(f"Grid cell: {footprint.grid_cell}")
    print("=" * 60)

    rect = Rectangle(
        left_bottom=GeoPoint(6.54853888889, 46.5196583333),
        right_top=GeoPoint(6.55609166667, 46.5243833333),
    )
    planner = PathPlanner()
    waypoints, rows, columns = planner.plan_with_shape(rect, footprint.grid_cell)

    print(f"{rows} rows x {columns} columns, {len(waypoints)} waypoints")
    print("Navigation as: " + format_waypoints(waypoints[:8]) + "...")


if __name__ == "__main__":
    main()
