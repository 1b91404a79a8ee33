"""Lists every logical id a service configuration implies."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional

from cfnaming.config import (
    HttpEventConfig,
    S3EventConfig,
    ScheduleEventConfig,
    ServiceConfig,
    SnsEventConfig,
    StreamEventConfig,
)
from cfnaming.core.naming import LogicalNaming
from cfnaming.core.registry import EVENT_PLANNERS, register_event_planner
from cfnaming.errors import InvalidInput


@dataclass(frozen=True)
class PlannedId:
    """A logical id together with the raw name it was derived from."""

    logical_id: str
    kind: str
    source: str
    function: Optional[str] = None

    def to_state(self) -> Dict[str, Any]:
        return {
            "logical_id": self.logical_id,
            "kind": self.kind,
            "source": self.source,
            "function": self.function,
        }


@dataclass
class LogicalIdPlan:
    """Ordered, collision-checked collection of planned ids."""

    naming: LogicalNaming
    entries: List[PlannedId] = field(default_factory=list)
    _index: Dict[str, PlannedId] = field(default_factory=dict, repr=False)

    def add(self, logical_id: str, kind: str, source: str, function: Optional[str] = None) -> PlannedId:
        """Record an id; re-adding the same resource is a no-op, a different one is an error."""
        existing = self._index.get(logical_id)
        if existing is not None:
            if existing.kind == kind and existing.source == source:
                return existing
            raise InvalidInput(
                f"Logical id '{logical_id}' is derived from both {existing.kind} '{existing.source}' "
                f"and {kind} '{source}'."
            )
        entry = PlannedId(logical_id=logical_id, kind=kind, source=source, function=function)
        self._index[logical_id] = entry
        self.entries.append(entry)
        return entry

    def __contains__(self, logical_id: str) -> bool:
        return logical_id in self._index

    def __iter__(self) -> Iterator[PlannedId]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def logical_ids(self) -> List[str]:
        return [entry.logical_id for entry in self.entries]

    def for_function(self, function: str) -> List[PlannedId]:
        return [entry for entry in self.entries if entry.function == function]

    def to_state(self) -> Dict[str, Any]:
        context = self.naming.context
        return {
            "service": context.service,
            "stage": context.stage,
            "region": context.region,
            "stack_name": self.naming.stack_name(),
            "logical_ids": [entry.to_state() for entry in self.entries],
        }


@dataclass
class FunctionState:
    """Per-function counters shared by the planners of one function."""

    key: str
    schedule_count: int = 0
    has_http: bool = False


@register_event_planner("sns")
def plan_sns(plan: LogicalIdPlan, function: FunctionState, event: SnsEventConfig) -> None:
    naming = plan.naming
    topic_name = event.topic_name
    if not event.is_existing:
        plan.add(naming.topic_logical_id(topic_name), "topic", topic_name)
    else:
        logging.debug("Function %s subscribes to existing topic %s", function.key, topic_name)
    plan.add(
        naming.lambda_sns_permission_logical_id(function.key, topic_name),
        "permission",
        f"{function.key}:{topic_name}",
        function.key,
    )


@register_event_planner("s3")
def plan_s3(plan: LogicalIdPlan, function: FunctionState, event: S3EventConfig) -> None:
    naming = plan.naming
    plan.add(naming.bucket_logical_id(event.bucket), "bucket", event.bucket)
    plan.add(
        naming.lambda_s3_permission_logical_id(function.key, event.bucket),
        "permission",
        f"{function.key}:{event.bucket}",
        function.key,
    )


@register_event_planner("schedule")
def plan_schedule(plan: LogicalIdPlan, function: FunctionState, event: ScheduleEventConfig) -> None:
    naming = plan.naming
    function.schedule_count += 1
    index = function.schedule_count
    source = f"{function.key}:{index}"
    plan.add(naming.schedule_logical_id(function.key, index), "schedule", source, function.key)
    plan.add(
        naming.lambda_schedule_permission_logical_id(function.key, index),
        "permission",
        source,
        function.key,
    )


@register_event_planner("stream")
def plan_stream(plan: LogicalIdPlan, function: FunctionState, event: StreamEventConfig) -> None:
    plan.add(
        plan.naming.stream_logical_id(function.key, event.type, event.stream_name),
        "event-source-mapping",
        f"{function.key}:{event.arn}",
        function.key,
    )


@register_event_planner("http")
def plan_http(plan: LogicalIdPlan, function: FunctionState, event: HttpEventConfig) -> None:
    naming = plan.naming
    plan.add(naming.rest_api_logical_id(), "rest-api", naming.api_gateway_name())

    segments = [segment for segment in event.normalized_path.split("/") if segment]
    path = "/".join(segments)
    resource_id = ""
    # Every prefix of the path is its own resource in the routing tree.
    for depth in range(1, len(segments) + 1):
        prefix = "/".join(segments[:depth])
        logical_id = naming.resource_logical_id(prefix)
        plan.add(logical_id, "resource", prefix)
        resource_id = naming.extract_resource_id(logical_id)

    method = event.method.upper()
    plan.add(
        naming.method_logical_id(resource_id, method),
        "method",
        f"{function.key}: {method} /{path}",
        function.key,
    )
    if not function.has_http:
        function.has_http = True
        plan.add(
            naming.lambda_api_gateway_permission_logical_id(function.key),
            "permission",
            f"{function.key}:apigateway",
            function.key,
        )


def build_plan(
    service: ServiceConfig,
    naming: LogicalNaming,
    *,
    timestamp_ms: Optional[int] = None,
) -> LogicalIdPlan:
    """Derive the logical ids of every resource ``service`` declares.

    ``timestamp_ms`` names the API deployment when the service has http
    events; without it no deployment id is planned.
    """

    plan = LogicalIdPlan(naming=naming)
    plan.add(naming.deployment_bucket_logical_id(), "bucket", "deployment")
    plan.add(naming.deployment_bucket_output_logical_id(), "output", "deployment")

    if service.functions:
        plan.add(naming.role_logical_id(), "role", naming.stack_name())
        plan.add(naming.policy_logical_id(), "policy", naming.stack_name())

    has_http = False
    for key, function in service.functions.items():
        state = FunctionState(key=key)
        log_group = naming.log_group_name(service.function_name(key, naming.stage))
        plan.add(naming.log_group_logical_id(key), "log-group", log_group, key)
        plan.add(naming.lambda_logical_id(key), "function", key, key)
        plan.add(naming.lambda_output_logical_id(key), "output", key, key)

        for event in function.events:
            planner = EVENT_PLANNERS.get(event.kind)
            planner(plan, state, event.settings)
        has_http = has_http or state.has_http
        logging.info("Planned %d logical id(s) for function %s", len(plan.for_function(key)), key)

    if has_http and timestamp_ms is not None:
        plan.add(naming.api_gateway_deployment_logical_id(timestamp_ms), "deployment", naming.api_gateway_name())

    return plan


__all__ = ["FunctionState", "LogicalIdPlan", "PlannedId", "build_plan"]
