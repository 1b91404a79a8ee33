"""Normalization helpers for template-safe identifier fragments."""

from __future__ import annotations

import re
from typing import Any

from cfnaming.errors import InvalidInput

_NON_ALPHANUMERIC = re.compile(r"[^0-9A-Za-z]")
_PATH_VARIABLE = re.compile(r"\{(.*)\}")


def require_string(value: Any, *, argument: str = "name", allow_empty: bool = True) -> str:
    """Return ``value`` unchanged if it is a usable string, otherwise raise InvalidInput."""

    if not isinstance(value, str):
        raise InvalidInput(f"{argument} must be a string, got {type(value).__name__}.")
    if not allow_empty and not value:
        raise InvalidInput(f"{argument} must not be empty.")
    return value


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def normalize_name(name: str) -> str:
    """Uppercase the first character and leave the rest untouched."""

    return _upper_first(require_string(name))


def normalize_name_to_alpha_numeric_only(name: str) -> str:
    """Drop every character outside ``[0-9A-Za-z]`` and normalize the rest."""

    return normalize_name(_NON_ALPHANUMERIC.sub("", require_string(name)))


def normalize_path_part(path: str) -> str:
    """Normalize a single path segment.

    Path variables keep their name with a ``Var`` suffix, so the brace
    substitution has to run before non-alphanumerics are stripped:

    >>> normalize_path_part("{id}")
    'IdVar'
    >>> normalize_path_part("user-profile")
    'UserDashprofile'
    """

    part = require_string(path, argument="path").capitalize()
    part = part.replace("-", "Dash")
    part = _PATH_VARIABLE.sub(r"\1Var", part)
    part = _NON_ALPHANUMERIC.sub("", part)
    return _upper_first(part)


def normalize_path(resource_path: str) -> str:
    """Normalize every ``/`` delimited segment of a path and join them."""

    segments = require_string(resource_path, argument="resource_path").split("/")
    return "".join(normalize_path_part(segment) for segment in segments)


def normalize_function_name(function_name: str) -> str:
    """Spell out ``-`` and ``_`` so names using either separator stay distinct."""

    name = require_string(function_name, argument="function_name")
    return normalize_name(name.replace("-", "Dash").replace("_", "Underscore"))


def normalize_method_name(method_name: str) -> str:
    return normalize_name(require_string(method_name, argument="method_name").lower())


__all__ = [
    "require_string",
    "normalize_name",
    "normalize_name_to_alpha_numeric_only",
    "normalize_path_part",
    "normalize_path",
    "normalize_function_name",
    "normalize_method_name",
]
