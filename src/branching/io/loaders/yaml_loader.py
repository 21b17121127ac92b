from __future__ import annotations
from pathlib import Path
from typing import Any, Dict

import yaml

from branching.io.loaders.errors import LoaderError


def read_yaml_file(path: str) -> Dict[str, Any]:
    """Read a YAML mapping; an empty file reads as an empty mapping."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except OSError as exc:
        raise LoaderError(path, "Cannot read file", cause=exc) from exc
    except yaml.YAMLError as exc:
        raise LoaderError(path, "Malformed YAML", cause=exc) from exc
    if not isinstance(data, dict):
        raise LoaderError(path, f"Expected a mapping at top level, got {type(data).__name__}")
    return data


def write_yaml_file(path: str, data: Dict[str, Any]) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, indent=2, sort_keys=False)
