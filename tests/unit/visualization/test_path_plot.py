"""
覆盖路径可视化测试
"""

import matplotlib
matplotlib.use('Agg')  # 使用非交互式后端
import matplotlib.pyplot as plt

from core.models import GeoPoint, GridCell, Rectangle
from core.planner import plan_path


def _rect():
    return Rectangle(GeoPoint(0, 0), GeoPoint(3, 2))


class TestPathPlotter:
    """路径可视化器测试"""

    def test_creation_with_custom_figsize(self):
        from visualization.path_plot import PathPlotter

        assert PathPlotter(figsize=(6, 4)).figsize == (6, 4)

    def test_plot_draws_path(self):
        from visualization.path_plot import PathPlotter

        cell = GridCell(1, 1)
        waypoints = plan_path(_rect(), cell)
        fig = PathPlotter().plot(_rect(), waypoints, cell=cell, title="demo")

        ax = fig.axes[0]
        xs, ys = ax.lines[0].get_data()
        assert list(xs) == [p.x for p in waypoints]
        assert list(ys) == [p.y for p in waypoints]
        assert "6 waypoints" in ax.get_title()
        plt.close(fig)

    def test_plot_empty_path(self):
        from visualization.path_plot import PathPlotter

        fig = PathPlotter().plot(_rect(), [])
        assert "0 waypoints" in fig.axes[0].get_title()
        plt.close(fig)

    def test_save(self, tmp_path):
        from visualization.path_plot import PathPlotter

        plotter = PathPlotter(figsize=(4, 3))
        fig = plotter.plot(_rect(), plan_path(_rect(), GridCell(1, 1)))
        output = tmp_path / "plots" / "path.png"
        plotter.save(fig, str(output), dpi=50)
        assert output.exists()
        assert output.stat().st_size > 0
