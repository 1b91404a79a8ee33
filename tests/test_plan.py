"""Tests for the logical id plan of a service."""

from __future__ import annotations

from pathlib import Path

import pytest

from cfnaming.config import EVENT_MODELS, ServiceConfig, load_service_config
from cfnaming.core import EVENT_PLANNERS, LogicalNaming, build_plan
from cfnaming.errors import InvalidInput

EXAMPLE_CONFIG = Path(__file__).resolve().parents[1] / "examples" / "sns" / "serverless.yml"


def _plan(functions: dict, **kwargs):
    service = ServiceConfig.model_validate({"service": "svc", "functions": functions})
    return build_plan(service, LogicalNaming(service.deployment_context()), **kwargs)


def test_every_event_kind_has_a_planner():
    assert all(kind in EVENT_PLANNERS for kind in EVENT_MODELS)


def test_example_service_plan():
    service = load_service_config(EXAMPLE_CONFIG)
    plan = build_plan(service, LogicalNaming(service.deployment_context()))
    ids = plan.logical_ids()

    assert ids[:4] == [
        "ServerlessDeploymentBucket",
        "ServerlessDeploymentBucketName",
        "IamRoleLambdaExecution",
        "IamPolicyLambdaExecution",
    ]
    assert "SnsMinimalLambdaFunction" in plan
    assert "SnsMinimalLogGroup" in plan
    assert "SnsMinimalLambdaFunctionArn" in plan
    assert "SNSTopicSnsminimaltopic" in plan
    assert "SnsMinimalLambdaPermissionSnsminimaltopicSNS" in plan

    # Both filtered functions share one topic but get their own permission.
    assert ids.count("SNSTopicSnsfilteredtopic") == 1
    assert "SnsMultipleFilteredLeftLambdaPermissionSnsfilteredtopicSNS" in plan
    assert "SnsMultipleFilteredRightLambdaPermissionSnsfilteredtopicSNS" in plan

    # Existing topics are referenced, not created.
    assert "SNSTopicSnsexistingtopic" not in plan
    assert "SnsExistingLambdaPermissionSnsexistingtopicSNS" in plan

    assert not any(logical_id.startswith("ApiGateway") for logical_id in ids)
    assert len(ids) == len(set(ids))


def test_log_group_source_uses_physical_function_name():
    service = load_service_config(EXAMPLE_CONFIG)
    plan = build_plan(service, LogicalNaming(service.deployment_context(stage="prod")))
    [log_group] = [entry for entry in plan.for_function("snsMinimal") if entry.kind == "log-group"]
    assert log_group.source == "/aws/lambda/sns-triggers-prod-snsMinimal"


def test_colliding_function_names_are_rejected():
    with pytest.raises(InvalidInput, match="MyDashfunc"):
        _plan({"my-func": {"handler": "a.b"}, "myDashfunc": {"handler": "a.c"}})


def test_colliding_topic_names_are_rejected():
    with pytest.raises(InvalidInput, match="SNSTopicOrderEvents"):
        _plan(
            {
                "first": {"handler": "a.b", "events": [{"sns": "orderEvents"}]},
                "second": {"handler": "a.c", "events": [{"sns": "order_Events"}]},
            }
        )


def test_http_events_build_the_routing_tree():
    plan = _plan(
        {
            "api": {
                "handler": "api.handle",
                "events": [{"http": "GET users/{id}"}, {"http": {"path": "/users", "method": "post"}}],
            },
            "root": {"handler": "api.root", "events": [{"http": "GET /"}]},
        },
        timestamp_ms=1700000000000,
    )
    ids = plan.logical_ids()

    assert ids.count("ApiGatewayRestApi") == 1
    assert ids.count("ApiGatewayResourceUsers") == 1
    assert "ApiGatewayResourceUsersIdVar" in plan
    assert "ApiGatewayMethodUsersIdVarGet" in plan
    assert "ApiGatewayMethodUsersPost" in plan
    assert "ApiGatewayMethodGet" in plan
    assert ids.count("ApiLambdaPermissionApiGateway") == 1
    assert "RootLambdaPermissionApiGateway" in plan
    assert ids[-1] == "ApiGatewayDeployment1700000000000"


def test_http_plan_without_timestamp_skips_deployment():
    plan = _plan({"api": {"handler": "api.handle", "events": [{"http": "GET users"}]}})
    assert not any(logical_id.startswith("ApiGatewayDeployment") for logical_id in plan.logical_ids())


def test_schedule_s3_and_stream_events():
    plan = _plan(
        {
            "worker": {
                "handler": "jobs.run",
                "events": [
                    {"schedule": "rate(1 hour)"},
                    {"schedule": "cron(0 12 * * ? *)"},
                    {"s3": "upload-bucket"},
                    {"stream": "arn:aws:kinesis:us-east-1:123456789012:stream/click-stream"},
                ],
            }
        }
    )

    assert "WorkerEventsRuleSchedule1" in plan
    assert "WorkerEventsRuleSchedule2" in plan
    assert "WorkerLambdaPermissionEventsRuleSchedule2" in plan
    assert "S3BucketUploadbucket" in plan
    assert "WorkerLambdaPermissionUploadbucketS3" in plan
    assert "WorkerEventSourceMappingKinesisClickstream" in plan


def test_plan_state_is_serialisable():
    plan = _plan({"hello": {"handler": "h.h", "events": [{"sns": "greetings"}]}})
    state = plan.to_state()

    assert state["stack_name"] == "svc-dev"
    assert state["region"] == "us-east-1"
    topic = next(item for item in state["logical_ids"] if item["kind"] == "topic")
    assert topic == {"logical_id": "SNSTopicGreetings", "kind": "topic", "source": "greetings", "function": None}


def test_same_route_in_two_functions_is_rejected():
    with pytest.raises(InvalidInput, match="ApiGatewayMethodUsersGet"):
        _plan(
            {
                "a": {"handler": "api.a", "events": [{"http": "GET users"}]},
                "b": {"handler": "api.b", "events": [{"http": "GET users"}]},
            }
        )


def test_same_route_twice_in_one_function_is_recorded_once():
    plan = _plan({"a": {"handler": "api.a", "events": [{"http": "GET users"}, {"http": "get /users/"}]}})
    assert plan.logical_ids().count("ApiGatewayMethodUsersGet") == 1
