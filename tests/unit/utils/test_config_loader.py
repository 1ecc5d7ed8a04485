"""
ConfigLoader / SurveyConfig 单元测试
"""

import json
import math
import os
import tempfile
from unittest import TestCase

import pytest

from core.models import GeoPoint


class TestConfigLoader(TestCase):
    """ConfigLoader测试类"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _create_temp_file(self, content: str, suffix: str = ".json") -> str:
        fd, path = tempfile.mkstemp(suffix=suffix, dir=self.temp_dir)
        with os.fdopen(fd, 'w') as f:
            f.write(content)
        return path

    # ==================== 基础加载测试 ====================

    def test_load_json_file(self):
        from utils.config_loader import ConfigLoader

        path = self._create_temp_file(json.dumps({"camera": {"altitude": 50}}), ".json")
        loader = ConfigLoader()
        result = loader.load(path)

        self.assertEqual(result["camera"]["altitude"], 50)
        self.assertEqual(loader.get_file_path(), path)
        self.assertEqual(loader.get_loaded_config(), result)

    def test_load_yaml_file(self):
        from utils.config_loader import ConfigLoader

        yaml_content = """
camera:
  altitude: 60
area:
  LeftBottom: {X: 0, Y: 0}
  RightTop: {X: 80, Y: 50}
"""
        path = self._create_temp_file(yaml_content, ".yaml")
        result = ConfigLoader().load(path)

        self.assertEqual(result["camera"]["altitude"], 60)
        self.assertEqual(result["area"]["RightTop"]["X"], 80)

    def test_load_ini_file(self):
        from utils.config_loader import ConfigLoader

        ini_content = """
[camera]
altitude = 45.5
angle_unit = degrees

[planner]
max_waypoints = 5000

[area.left_bottom]
x = 0
y = 0
"""
        path = self._create_temp_file(ini_content, ".ini")
        result = ConfigLoader().load(path)

        self.assertEqual(result["camera"]["altitude"], 45.5)
        self.assertEqual(result["camera"]["angle_unit"], "degrees")
        self.assertEqual(result["planner"]["max_waypoints"], 5000)
        self.assertEqual(result["area"]["left_bottom"], {"x": 0, "y": 0})

    def test_cfg_suffix_is_ini(self):
        from utils.config_loader import ConfigLoader

        path = self._create_temp_file("[logging]\nlevel = DEBUG\n", ".cfg")
        self.assertEqual(ConfigLoader().load(path), {"logging": {"level": "DEBUG"}})

    def test_invalid_ini(self):
        from utils.config_loader import ConfigLoader, ConfigLoadError

        path = self._create_temp_file("altitude = 10\n", ".ini")
        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(path)

    def test_empty_yaml_file(self):
        from utils.config_loader import ConfigLoader

        path = self._create_temp_file("", ".yml")
        self.assertEqual(ConfigLoader().load(path), {})

    def test_missing_file(self):
        from utils.config_loader import ConfigLoader, ConfigLoadError

        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(os.path.join(self.temp_dir, "missing.yaml"))

    def test_unknown_extension(self):
        from utils.config_loader import ConfigLoader, ConfigLoadError

        path = self._create_temp_file("a=1", ".toml")
        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(path)

    def test_invalid_json(self):
        from utils.config_loader import ConfigLoader, ConfigLoadError

        path = self._create_temp_file('{"camera": ', ".json")
        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(path)

    def test_invalid_yaml(self):
        from utils.config_loader import ConfigLoader, ConfigLoadError

        path = self._create_temp_file("camera: [unclosed", ".yaml")
        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(path)

    def test_top_level_must_be_mapping(self):
        from utils.config_loader import ConfigLoader, ConfigLoadError

        path = self._create_temp_file("[1, 2, 3]", ".json")
        with self.assertRaises(ConfigLoadError):
            ConfigLoader().load(path)

    # ==================== 环境变量测试 ====================

    def test_load_from_env(self):
        from utils.config_loader import ConfigLoader

        env = {"UAVPATH_ALTITUDE": "45.5", "uavpath_log_level": "DEBUG", "OTHER": "x"}
        result = ConfigLoader().load_from_env(environ=env)
        self.assertEqual(result, {"altitude": "45.5", "log_level": "DEBUG"})

    # ==================== 验证测试 ====================

    def test_validate_ok(self):
        from utils.config_loader import ConfigLoader, DEFAULT_SURVEY_CONFIG, SURVEY_SCHEMA

        is_valid, errors = ConfigLoader().validate(DEFAULT_SURVEY_CONFIG, SURVEY_SCHEMA)
        self.assertTrue(is_valid)
        self.assertEqual(errors, [])

    def test_validate_type_errors(self):
        from utils.config_loader import ConfigLoader, SURVEY_SCHEMA

        config = {
            "camera": {"vertical_half_angle": "wide", "horizontal_half_angle": 1.0,
                       "altitude": True},
            "area": {},
        }
        is_valid, errors = ConfigLoader().validate(config, SURVEY_SCHEMA)
        self.assertFalse(is_valid)
        self.assertEqual(len(errors), 2)

    def test_validate_required_and_enum(self):
        from utils.config_loader import ConfigLoader, SURVEY_SCHEMA

        config = {"camera": {"vertical_half_angle": 1.0, "horizontal_half_angle": 1.0,
                             "altitude": 10, "angle_unit": "gradians"}}
        is_valid, errors = ConfigLoader().validate(config, SURVEY_SCHEMA)
        self.assertFalse(is_valid)
        self.assertTrue(any("area" in e for e in errors))
        self.assertTrue(any("gradians" in e for e in errors))

    def test_empty_schema(self):
        from utils.config_loader import ConfigLoader

        self.assertEqual(ConfigLoader().validate({"a": 1}, {}), (True, []))


class TestSurveyConfig:
    """SurveyConfig 测试"""

    def test_defaults(self):
        from utils.config_loader import SurveyConfig

        survey = SurveyConfig.from_dict({})
        assert survey.camera.vertical_half_angle == 0.523599
        assert survey.camera.horizontal_half_angle == 1.0472
        assert survey.camera.altitude == 30.48
        assert survey.rectangle.left_bottom == GeoPoint(6.54853888889, 46.5196583333)
        assert survey.rectangle.right_top == GeoPoint(6.55609166667, 46.5243833333)
        assert survey.max_waypoints == 1000000
        assert survey.log_level == "WARNING"

    def test_partial_camera_override(self):
        from utils.config_loader import SurveyConfig

        survey = SurveyConfig.from_dict({"camera": {"altitude": 100}})
        assert survey.camera.altitude == 100.0
        assert survey.camera.vertical_half_angle == 0.523599

    def test_degrees(self):
        from utils.config_loader import SurveyConfig

        survey = SurveyConfig.from_dict({"camera": {
            "vertical_half_angle": 30, "horizontal_half_angle": 60,
            "altitude": 30.48, "angle_unit": "degrees",
        }})
        assert survey.camera.vertical_half_angle == pytest.approx(math.pi / 6)
        assert survey.camera.horizontal_half_angle == pytest.approx(math.pi / 3)

    def test_area_replaces_default(self):
        from utils.config_loader import SurveyConfig

        survey = SurveyConfig.from_dict({"area": {
            "left_bottom": {"x": 0, "y": 0}, "right_top": {"x": 80, "y": 50},
        }})
        assert survey.rectangle.right_top == GeoPoint(80.0, 50.0)

    @pytest.mark.parametrize("area", [
        {"LeftBottom": {"X": 0, "Y": 0}},
        {"LeftBottom": {"X": "a", "Y": 0}, "RightTop": {"X": 1, "Y": 1}},
        {"LeftBottom": {"X": 0, "Y": 0}, "RightTop": {"X": "nan", "Y": 1}},
    ])
    def test_invalid_area(self, area):
        from utils.config_loader import SurveyConfig, ConfigValidationError

        with pytest.raises(ConfigValidationError):
            SurveyConfig.from_dict({"area": area})

    def test_non_positive_waypoint_limit(self):
        from utils.config_loader import SurveyConfig, ConfigValidationError

        with pytest.raises(ConfigValidationError):
            SurveyConfig.from_dict({"planner": {"max_waypoints": 0}})

    def test_invalid_type_lists_errors(self):
        from utils.config_loader import SurveyConfig, ConfigValidationError

        with pytest.raises(ConfigValidationError) as exc_info:
            SurveyConfig.from_dict({"camera": {"altitude": "high"}})
        assert len(exc_info.value.errors) == 1

    def test_load_with_file_and_env(self, tmp_path):
        from utils.config_loader import SurveyConfig

        path = tmp_path / "survey.yaml"
        path.write_text("camera:\n  altitude: 50\nplanner:\n  max_waypoints: 10\n")
        env = {"UAVPATH_ALTITUDE": "75", "UAVPATH_LOG_LEVEL": "DEBUG"}

        survey = SurveyConfig.load(str(path), environ=env)
        assert survey.camera.altitude == 75.0
        assert survey.max_waypoints == 10
        assert survey.log_level == "DEBUG"

    def test_load_from_ini(self, tmp_path):
        from utils.config_loader import SurveyConfig

        path = tmp_path / "survey.ini"
        path.write_text(
            "[camera]\naltitude = 50\n\n"
            "[area.left_bottom]\nx = 0\ny = 0\n\n"
            "[area.right_top]\nx = 0.001\ny = 0.002\n"
        )
        survey = SurveyConfig.load(str(path), environ={})
        assert survey.camera.altitude == 50.0
        assert survey.rectangle.right_top == GeoPoint(0.001, 0.002)

    def test_load_without_file(self):
        from utils.config_loader import SurveyConfig

        survey = SurveyConfig.load(environ={})
        assert survey.camera.altitude == 30.48

    def test_invalid_env_value(self):
        from utils.config_loader import SurveyConfig, ConfigValidationError

        with pytest.raises(ConfigValidationError):
            SurveyConfig.load(environ={"UAVPATH_MAX_WAYPOINTS": "many"})

    def test_example_config(self):
        from pathlib import Path
        from utils.config_loader import SurveyConfig

        example = Path(__file__).resolve().parents[3] / "examples" / "survey.yaml"
        survey = SurveyConfig.load(str(example), environ={})
        assert survey.camera.vertical_half_angle == pytest.approx(math.pi / 6)
        assert survey.max_waypoints == 100000
