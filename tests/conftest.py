"""
Pytest 配置文件

定义共享 fixtures：原始默认任务的相机参数与覆盖区域
"""

import logging

import pytest

from core.models import CameraGeometry, GeoPoint, Rectangle


@pytest.fixture
def default_camera():
    """默认相机：30°/60° 视场半角，30.48米飞行高度"""
    return CameraGeometry(
        vertical_half_angle=0.523599,
        horizontal_half_angle=1.0472,
        altitude=30.48,
    )


@pytest.fixture
def default_rectangle():
    """默认覆盖区域"""
    return Rectangle(
        left_bottom=GeoPoint(6.54853888889, 46.5196583333),
        right_top=GeoPoint(6.55609166667, 46.5243833333),
    )


@pytest.fixture(autouse=True)
def reset_core_logger():
    """恢复 core logger 的默认状态，避免测试之间互相影响"""
    yield
    core_logger = logging.getLogger("core")
    for handler in list(core_logger.handlers):
        core_logger.removeHandler(handler)
        handler.close()
    core_logger.propagate = True
    core_logger.setLevel(logging.NOTSET)
