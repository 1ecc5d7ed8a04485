"""Shared JSON helpers for configuration files and waypoint output."""
import dataclasses
import json
from pathlib import Path
from typing import Any, Union


def _default(obj: Any) -> Any:
    """Serialize dataclass values (GeoPoint, Rectangle, GridCell ...) as dicts."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def load_json(file_path: Union[str, Path]) -> Any:
    """
    Load JSON from a file.

    Raises:
        FileNotFoundError: If file does not exist
        json.JSONDecodeError: If JSON is malformed or the file is empty
    """
    with open(Path(file_path), "r", encoding="utf-8") as f:
        content = f.read()
    if not content.strip():
        raise json.JSONDecodeError("File is empty", content, 0)
    return json.loads(content)


def dumps(data: Any, indent: Union[int, None] = 2) -> str:
    """Serialize data to a JSON string, expanding dataclass values."""
    return json.dumps(data, indent=indent, ensure_ascii=False, default=_default)


def save_json(data: Any, file_path: Union[str, Path], indent: int = 2) -> None:
    """
    Save data to a JSON file, creating parent directories as needed.

    Raises:
        TypeError: If data cannot be serialized to JSON
    """
    path = Path(file_path)
    content = dumps(data, indent=indent)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
