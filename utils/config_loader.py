"""
航测任务配置加载器

功能：
- 支持加载JSON/YAML/INI配置文件（按扩展名自动识别）
- 支持环境变量覆盖（前缀 UAVPATH_）
- 支持配置验证（简化schema验证）
- 将配置转换为相机参数与覆盖区域（SurveyConfig）
"""

import copy
import json
import math
import os
from configparser import ConfigParser, Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

import yaml

from core.models import CameraGeometry, Rectangle

from .json_utils import load_json


class ConfigLoadError(Exception):
    """配置加载错误"""
    pass


class ConfigValidationError(Exception):
    """配置验证错误"""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("配置验证失败: " + "; ".join(self.errors))


ENV_PREFIX = "UAVPATH_"

# 默认任务：30°/60° 视场半角，100英尺（30.48米）飞行高度
DEFAULT_SURVEY_CONFIG: Dict[str, Any] = {
    "camera": {
        "vertical_half_angle": 0.523599,
        "horizontal_half_angle": 1.0472,
        "altitude": 30.48,
        "angle_unit": "radians",
    },
    "area": {
        "LeftBottom": {"X": 6.54853888889, "Y": 46.5196583333},
        "RightTop": {"X": 6.55609166667, "Y": 46.5243833333},
    },
    "planner": {
        "max_waypoints": 1000000,
    },
    "logging": {
        "level": "WARNING",
        "format": "text",
    },
}

SURVEY_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["camera", "area"],
    "properties": {
        "camera": {
            "type": "object",
            "required": ["vertical_half_angle", "horizontal_half_angle", "altitude"],
            "properties": {
                "vertical_half_angle": {"type": "number"},
                "horizontal_half_angle": {"type": "number"},
                "altitude": {"type": "number"},
                "angle_unit": {"type": "string", "enum": ["radians", "degrees"]},
            },
        },
        "area": {"type": "object"},
        "planner": {
            "type": "object",
            "properties": {
                "max_waypoints": {"type": "integer"},
            },
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string"},
                "format": {"type": "string", "enum": ["text", "json"]},
            },
        },
    },
}

# 环境变量名（去掉前缀后）到配置路径的映射
ENV_OVERRIDES: Dict[str, Tuple[str, str, type]] = {
    "vertical_half_angle": ("camera", "vertical_half_angle", float),
    "horizontal_half_angle": ("camera", "horizontal_half_angle", float),
    "altitude": ("camera", "altitude", float),
    "angle_unit": ("camera", "angle_unit", str),
    "max_waypoints": ("planner", "max_waypoints", int),
    "log_level": ("logging", "level", str),
    "log_format": ("logging", "format", str),
}


class ConfigLoader:
    """
    配置加载器

    支持JSON、YAML与INI配置文件的加载和验证
    """

    FORMAT_MAP = {
        ".json": "json",
        ".yaml": "yaml",
        ".yml": "yaml",
        ".ini": "ini",
        ".conf": "ini",
        ".cfg": "ini",
    }

    def __init__(self):
        self._loaded_config: Optional[Dict[str, Any]] = None
        self._file_path: Optional[str] = None

    def load(self, path: str, format: str = "auto") -> Dict[str, Any]:
        """
        加载配置文件

        Args:
            path: 配置文件路径
            format: 文件格式 ("auto", "json", "yaml", "ini")

        Returns:
            Dict[str, Any]: 配置字典

        Raises:
            ConfigLoadError: 加载失败时抛出
        """
        if not os.path.exists(path):
            raise ConfigLoadError(f"配置文件不存在: {path}")

        if format == "auto":
            format = self._detect_format(path)

        if format == "json":
            config = self._load_json(path)
        elif format == "yaml":
            config = self._load_yaml(path)
        elif format == "ini":
            config = self._load_ini(path)
        else:
            raise ConfigLoadError(f"不支持的配置格式: {format}")

        if config is None:
            config = {}
        if not isinstance(config, dict):
            raise ConfigLoadError(f"配置文件顶层必须是映射: {path}")

        self._loaded_config = config
        self._file_path = path
        return config

    def _detect_format(self, path: str) -> str:
        ext = Path(path).suffix.lower()
        if ext in self.FORMAT_MAP:
            return self.FORMAT_MAP[ext]
        raise ConfigLoadError(f"无法自动检测文件格式: {ext}")

    def _load_json(self, path: str) -> Any:
        try:
            return load_json(path)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(f"JSON解析错误: {e}") from e

    def _load_yaml(self, path: str) -> Any:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"YAML解析错误: {e}") from e

    def _load_ini(self, path: str) -> Dict[str, Any]:
        """
        加载INI文件

        节名中的点号表示嵌套，例如 [area.left_bottom] 对应
        config["area"]["left_bottom"]。数值字符串转换为 int/float。
        """
        parser = ConfigParser()
        try:
            parser.read(path, encoding='utf-8')
        except ConfigParserError as e:
            raise ConfigLoadError(f"INI解析错误: {e}") from e

        result: Dict[str, Any] = {}
        for section in parser.sections():
            node = result
            for part in section.split("."):
                node = node.setdefault(part, {})
            for key, value in parser.items(section):
                node[key] = _coerce_ini_value(value)
        return result

    def load_from_env(
        self,
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """
        从环境变量加载配置

        Args:
            prefix: 环境变量前缀（不区分大小写）
            environ: 环境变量映射，默认 os.environ

        Returns:
            Dict[str, str]: 去掉前缀并转为小写的键到原始字符串值的映射
        """
        environ = os.environ if environ is None else environ
        prefix_lower = prefix.lower()
        result = {}
        for key, value in environ.items():
            key_lower = key.lower()
            if key_lower.startswith(prefix_lower):
                result[key_lower[len(prefix_lower):]] = value
        return result

    def validate(self, config: Any, schema: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        验证配置

        支持的schema关键字：type, required, properties, enum

        Args:
            config: 配置字典
            schema: 验证schema

        Returns:
            Tuple[bool, List[str]]: (是否有效, 错误列表)
        """
        errors: List[str] = []
        if schema:
            self._validate_node(config, schema, "root", errors)
        return len(errors) == 0, errors

    def _validate_node(
        self,
        value: Any,
        schema: Dict[str, Any],
        path: str,
        errors: List[str]
    ) -> None:
        if "type" in schema and not self._check_type(value, schema["type"]):
            errors.append(
                f"字段 '{path}' 类型错误: 期望 {schema['type']}, 实际 {type(value).__name__}"
            )
            return

        if "enum" in schema and value not in schema["enum"]:
            errors.append(f"字段 '{path}' 取值无效: {value!r}, 有效值: {schema['enum']}")

        if isinstance(value, dict):
            for field in schema.get("required", []):
                if field not in value:
                    errors.append(f"缺少必需字段: {path}.{field}")
            for prop, prop_schema in schema.get("properties", {}).items():
                if prop in value:
                    self._validate_node(value[prop], prop_schema, f"{path}.{prop}", errors)

    @staticmethod
    def _check_type(value: Any, expected_type: str) -> bool:
        # bool 是 int 的子类，数值字段需排除
        if expected_type == "number":
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if expected_type == "integer":
            return isinstance(value, int) and not isinstance(value, bool)
        type_map = {
            "string": str,
            "boolean": bool,
            "array": list,
            "object": dict,
        }
        if expected_type not in type_map:
            return True
        return isinstance(value, type_map[expected_type])

    def get_loaded_config(self) -> Optional[Dict[str, Any]]:
        """获取最后加载的配置"""
        return self._loaded_config

    def get_file_path(self) -> Optional[str]:
        """获取最后加载的文件路径"""
        return self._file_path


def _coerce_ini_value(value: str) -> Any:
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            continue
    return value


def _deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def apply_env_overrides(config: Dict[str, Any], env: Mapping[str, str]) -> Dict[str, Any]:
    """
    将环境变量覆盖应用到配置

    Args:
        config: 配置字典
        env: load_from_env 返回的映射

    Returns:
        Dict[str, Any]: 新的配置字典

    Raises:
        ConfigValidationError: 环境变量值无法转换
    """
    result = copy.deepcopy(config)
    errors = []
    for key, raw in env.items():
        if key not in ENV_OVERRIDES:
            continue
        section, field, cast = ENV_OVERRIDES[key]
        try:
            value = cast(raw)
        except ValueError:
            errors.append(f"环境变量 {ENV_PREFIX}{key.upper()} 取值无效: {raw!r}")
            continue
        result.setdefault(section, {})[field] = value
    if errors:
        raise ConfigValidationError(errors)
    return result


@dataclass(frozen=True)
class SurveyConfig:
    """
    航测任务配置

    Attributes:
        camera: 相机几何参数（弧度、米）
        rectangle: 覆盖区域
        max_waypoints: 单次规划最大航点数
        log_level: 日志级别
        log_format: 日志格式
    """
    camera: CameraGeometry
    rectangle: Rectangle
    max_waypoints: int = 1000000
    log_level: str = "WARNING"
    log_format: str = "text"

    @classmethod
    def from_dict(cls, config: Mapping[str, Any]) -> "SurveyConfig":
        """
        从配置字典创建任务配置（缺省字段取 DEFAULT_SURVEY_CONFIG）

        Raises:
            ConfigValidationError: 配置无效
        """
        merged = _deep_merge(DEFAULT_SURVEY_CONFIG, config)
        # 用户给出的区域完整替换默认区域，避免两种键名混合
        if "area" in config:
            merged["area"] = copy.deepcopy(config["area"])

        is_valid, errors = ConfigLoader().validate(merged, SURVEY_SCHEMA)
        if not is_valid:
            raise ConfigValidationError(errors)

        camera_cfg = merged["camera"]
        if camera_cfg.get("angle_unit", "radians") == "degrees":
            camera = CameraGeometry.from_degrees(
                camera_cfg["vertical_half_angle"],
                camera_cfg["horizontal_half_angle"],
                camera_cfg["altitude"],
            )
        else:
            camera = CameraGeometry(
                vertical_half_angle=float(camera_cfg["vertical_half_angle"]),
                horizontal_half_angle=float(camera_cfg["horizontal_half_angle"]),
                altitude=float(camera_cfg["altitude"]),
            )

        try:
            rectangle = Rectangle.from_dict(merged["area"])
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigValidationError([f"区域配置无效: {e!r}"]) from e
        if not rectangle.is_finite() or not all(math.isfinite(v) for v in (
            camera.vertical_half_angle, camera.horizontal_half_angle, camera.altitude,
        )):
            raise ConfigValidationError(["配置包含非有限数值"])
        if merged["planner"]["max_waypoints"] <= 0:
            raise ConfigValidationError(["planner.max_waypoints 必须为正整数"])

        return cls(
            camera=camera,
            rectangle=rectangle,
            max_waypoints=merged["planner"]["max_waypoints"],
            log_level=merged["logging"]["level"],
            log_format=merged["logging"]["format"],
        )

    @classmethod
    def load(
        cls,
        path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None
    ) -> "SurveyConfig":
        """
        加载任务配置：默认值 <- 配置文件 <- 环境变量

        Args:
            path: 配置文件路径（可选）
            environ: 环境变量映射，默认 os.environ

        Returns:
            SurveyConfig: 任务配置
        """
        loader = ConfigLoader()
        config = loader.load(path) if path else {}
        config = apply_env_overrides(config, loader.load_from_env(environ=environ))
        return cls.from_dict(config)
