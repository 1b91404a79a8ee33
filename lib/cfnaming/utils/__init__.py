"""Utility helpers."""

from __future__ import annotations

from .io import load_yaml_file, save_json
from .naming import (
    normalize_function_name,
    normalize_method_name,
    normalize_name,
    normalize_name_to_alpha_numeric_only,
    normalize_path,
    normalize_path_part,
    require_string,
)
from .time import epoch_millis

__all__ = [
    "epoch_millis",
    "load_yaml_file",
    "save_json",
    "normalize_function_name",
    "normalize_method_name",
    "normalize_name",
    "normalize_name_to_alpha_numeric_only",
    "normalize_path",
    "normalize_path_part",
    "require_string",
]
