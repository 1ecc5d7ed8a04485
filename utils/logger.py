"""
日志管理模块

功能：
- 为规划核心（core.* 模块级logger）统一配置输出
- 支持控制台日志（默认输出到stderr，避免污染命令行结果）
- 支持文件日志（可按日期/小时轮转）
- 支持结构化日志（JSON格式）
"""

import json
import logging
import sys
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, TextIO, Union


class LoggerConfigError(Exception):
    """日志配置错误"""
    pass


class JsonFormatter(logging.Formatter):
    """JSON格式日志格式化器"""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage()
        }

        # 结构化日志的附加字段
        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """文本格式日志格式化器"""

    def __init__(self, fmt: Optional[str] = None):
        super().__init__(
            fmt=fmt or "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )


class Logger:
    """
    日志管理器

    包装一个命名logger。由于规划核心使用 logging.getLogger(__name__)，
    以 "core" 为名创建的Logger会同时收集所有 core.* 子模块的日志。
    """

    LEVEL_MAP = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL
    }

    FORMATS = ("text", "json")

    def __init__(self, name: str, level: str = "INFO"):
        """
        初始化日志管理器

        Args:
            name: Logger名称
            level: 日志级别 (DEBUG, INFO, WARNING, ERROR, CRITICAL)，不区分大小写

        Raises:
            LoggerConfigError: 无效的日志级别
        """
        level = self._normalize_level(level)

        self.name = name
        self.level = level
        self._logger = logging.getLogger(name)
        self._logger.setLevel(self.LEVEL_MAP[level])

        # 重新配置时清除旧处理器，避免重复输出
        for handler in list(self._logger.handlers):
            self._logger.removeHandler(handler)
            handler.close()
        self._logger.propagate = False

    def _normalize_level(self, level: str) -> str:
        normalized = str(level).upper()
        if normalized not in self.LEVEL_MAP:
            raise LoggerConfigError(f"无效的日志级别: {level}. 有效值: {list(self.LEVEL_MAP.keys())}")
        return normalized

    def _make_formatter(self, format: str) -> logging.Formatter:
        if format not in self.FORMATS:
            raise LoggerConfigError(f"无效的日志格式: {format}. 有效值: {list(self.FORMATS)}")
        return JsonFormatter() if format == "json" else TextFormatter()

    def add_console_handler(
        self,
        format: str = "text",
        stream: Optional[TextIO] = None
    ) -> "Logger":
        """
        添加控制台处理器

        Args:
            format: 格式类型 ("text", "json")
            stream: 输出流，默认 sys.stderr

        Returns:
            Logger: 自身，支持链式调用
        """
        handler = logging.StreamHandler(stream or sys.stderr)
        handler.setLevel(self.LEVEL_MAP[self.level])
        handler.setFormatter(self._make_formatter(format))
        self._logger.addHandler(handler)
        return self

    def add_file_handler(
        self,
        path: str,
        rotation: str = "none",
        format: str = "text",
        backup_count: int = 7
    ) -> "Logger":
        """
        添加文件处理器

        Args:
            path: 日志文件路径
            rotation: 轮转策略 ("none", "daily", "hourly")
            format: 格式类型 ("text", "json")
            backup_count: 保留的备份文件数量

        Returns:
            Logger: 自身，支持链式调用
        """
        formatter = self._make_formatter(format)
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        if rotation == "daily":
            handler = TimedRotatingFileHandler(
                path, when="midnight", interval=1,
                backupCount=backup_count, encoding="utf-8"
            )
        elif rotation == "hourly":
            handler = TimedRotatingFileHandler(
                path, when="H", interval=1,
                backupCount=backup_count, encoding="utf-8"
            )
        elif rotation == "none":
            handler = logging.FileHandler(path, encoding="utf-8")
        else:
            raise LoggerConfigError(f"无效的轮转策略: {rotation}")

        handler.setLevel(self.LEVEL_MAP[self.level])
        handler.setFormatter(formatter)
        self._logger.addHandler(handler)
        return self

    def _log(self, level: int, message: Union[str, Dict[str, Any]]) -> None:
        if isinstance(message, dict):
            # 结构化日志：其余字段写入JSON输出
            extra = {"extra_data": message}
            self._logger.log(level, message.get("message", ""), extra=extra)
        else:
            self._logger.log(level, message)

    def debug(self, message: Union[str, Dict[str, Any]]) -> None:
        self._log(logging.DEBUG, message)

    def info(self, message: Union[str, Dict[str, Any]]) -> None:
        self._log(logging.INFO, message)

    def warning(self, message: Union[str, Dict[str, Any]]) -> None:
        self._log(logging.WARNING, message)

    def error(self, message: Union[str, Dict[str, Any]]) -> None:
        self._log(logging.ERROR, message)

    def set_level(self, level: str) -> None:
        """
        设置日志级别（同时更新所有处理器）

        Args:
            level: 日志级别
        """
        level = self._normalize_level(level)
        self.level = level
        self._logger.setLevel(self.LEVEL_MAP[level])
        for handler in self._logger.handlers:
            handler.setLevel(self.LEVEL_MAP[level])


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    format: str = "text",
    name: str = "core"
) -> Logger:
    """
    配置规划核心的日志输出

    Args:
        level: 日志级别
        log_file: 日志文件路径（可选）
        format: 格式类型 ("text", "json")
        name: 根logger名称，默认 "core"

    Returns:
        Logger: 配置好的日志管理器
    """
    manager = Logger(name, level=level).add_console_handler(format=format)
    if log_file:
        manager.add_file_handler(log_file, format=format)
    return manager
