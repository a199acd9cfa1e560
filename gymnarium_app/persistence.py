"""
Load and store environment / agent state.

The file format is chosen from the file suffix; only JSON is supported.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict

from .errors import StateFileError

SUPPORTED_SUFFIXES = (".json",)


def check_suffix(path: str) -> None:
    """Raise StateFileError unless ``path`` names a supported state file format."""
    suffix = os.path.splitext(path)[1].lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise StateFileError(
            f"Unsupported state file format {suffix or '(none)'!r} for {path}; "
            f"supported: {', '.join(SUPPORTED_SUFFIXES)}"
        )


def load_state(path: str) -> Dict[str, Any]:
    check_suffix(path)
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise StateFileError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise StateFileError(f"{path} does not contain a JSON object")
    return data


def store_state(path: str, data: Dict[str, Any]) -> str:
    """Write ``data`` to ``path`` (overwriting it) and return the path."""
    check_suffix(path)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(path, "w") as f:
        json.dump(data, f, indent=2, default=str)
    return path
