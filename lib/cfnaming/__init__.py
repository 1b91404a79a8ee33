"""Logical identifier derivation for event-triggered function services."""

from __future__ import annotations

__version__ = "0.1.0"
