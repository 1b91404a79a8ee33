"""Logical id derivation primitives."""

from __future__ import annotations

from .arn import resolve_intrinsic
from .naming import LogicalNaming
from .plan import LogicalIdPlan, PlannedId, build_plan
from .registry import EVENT_PLANNERS, register_event_planner

__all__ = [
    "EVENT_PLANNERS",
    "LogicalIdPlan",
    "LogicalNaming",
    "PlannedId",
    "build_plan",
    "register_event_planner",
    "resolve_intrinsic",
]
