"""Logical ids and physical names for resources of a generated template.

Two concepts live here:

* normalization strips characters a template key cannot hold and fixes
  capitalization (see :mod:`cfnaming.utils.naming`);
* logicalization turns a normalized name into a template key by adding a
  prefix or suffix per resource kind, e.g. ``MyFuncLambdaFunction`` versus
  ``MyFuncLambdaFunctionArn``.

Ids sometimes have to be taken apart again, so the patterns recognising each
kind and the extractors sit next to the builders that produce them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict

from cfnaming.config import DeploymentContext
from cfnaming.errors import InvalidInput, PatternMismatch
from cfnaming.utils.naming import (
    normalize_function_name,
    normalize_method_name,
    normalize_name,
    normalize_name_to_alpha_numeric_only,
    normalize_path,
    require_string,
)

SERVICE_ENDPOINT_REGEX = re.compile(r"^ServiceEndpoint")
LAMBDA_LOGICAL_ID_REGEX = re.compile(r"LambdaFunction$")
LAMBDA_OUTPUT_LOGICAL_ID_REGEX = re.compile(r"LambdaFunctionArn$")
API_KEY_LOGICAL_ID_REGEX = re.compile(r"^ApiGatewayApiKey")

_LAMBDA_LOGICAL_ID = re.compile(r"^(.+)LambdaFunction$")
_TOPIC_LOGICAL_ID = re.compile(r"^SNSTopic([0-9A-Za-z]+)$")
_RESOURCE_LOGICAL_ID = re.compile(r"ApiGatewayResource(.*)")


def _alphanumeric_name(name: str, argument: str) -> str:
    normalized = normalize_name_to_alpha_numeric_only(require_string(name, argument=argument, allow_empty=False))
    if not normalized:
        raise InvalidInput(f"{argument} {name!r} has no alphanumeric characters.")
    return normalized


def _arn_tail(arn: str, expected: str) -> str:
    arn = require_string(arn, argument="arn")
    if ":" not in arn:
        raise PatternMismatch(arn, expected)
    return arn.rsplit(":", 1)[1]


@dataclass(frozen=True)
class LogicalNaming:
    """Builds names for one service deployment described by ``context``."""

    context: DeploymentContext

    @property
    def service(self) -> str:
        return self.context.service

    @property
    def stage(self) -> str:
        return self.context.stage

    @property
    def region(self) -> str:
        return self.context.region

    def service_endpoint_regex(self) -> re.Pattern[str]:
        return SERVICE_ENDPOINT_REGEX

    # Stack
    def stack_name(self) -> str:
        return f"{self.service}-{self.stage}"

    # Role
    def role_path(self) -> str:
        return "/"

    def role_name(self) -> Dict[str, Any]:
        return {"Fn::Join": ["-", [self.service, self.stage, self.region, "lambdaRole"]]}

    def role_logical_id(self) -> str:
        return "IamRoleLambdaExecution"

    # Policy
    def policy_name(self) -> Dict[str, Any]:
        # Stage comes first and region is absent here, unlike role_name.
        return {"Fn::Join": ["-", [self.stage, self.service, "lambda"]]}

    def policy_logical_id(self) -> str:
        return "IamPolicyLambdaExecution"

    # Log group
    def log_group_logical_id(self, function_name: str) -> str:
        return f"{self.normalized_function_name(function_name)}LogGroup"

    def log_group_name(self, function_name: str) -> str:
        return f"/aws/lambda/{require_string(function_name, argument='function_name', allow_empty=False)}"

    # Lambda
    def normalized_function_name(self, function_name: str) -> str:
        require_string(function_name, argument="function_name", allow_empty=False)
        return normalize_function_name(function_name)

    def extract_lambda_name_from_arn(self, function_arn: str) -> str:
        """Return the text after the last ``:`` of a function ARN."""
        return _arn_tail(function_arn, "a function ARN")

    def extract_authorizer_name_from_arn(self, function_arn: str) -> str:
        """Return the last ``-`` separated part of the function name in an ARN.

        This assumes the default ``{service}-{stage}-{function}`` physical name.
        """
        return _arn_tail(function_arn, "an authorizer function ARN").split("-")[-1]

    def lambda_logical_id(self, function_name: str) -> str:
        return f"{self.normalized_function_name(function_name)}LambdaFunction"

    def lambda_logical_id_regex(self) -> re.Pattern[str]:
        return LAMBDA_LOGICAL_ID_REGEX

    def extract_function_name_from_lambda_logical_id(self, logical_id: str) -> str:
        """Recover the normalized function name from :meth:`lambda_logical_id` output."""
        match = _LAMBDA_LOGICAL_ID.match(require_string(logical_id, argument="logical_id"))
        if match is None:
            raise PatternMismatch(logical_id, "a function logical id")
        return match.group(1)

    def lambda_output_logical_id(self, function_name: str) -> str:
        return f"{self.lambda_logical_id(function_name)}Arn"

    def lambda_output_logical_id_regex(self) -> re.Pattern[str]:
        return LAMBDA_OUTPUT_LOGICAL_ID_REGEX

    # API Gateway
    def api_gateway_name(self) -> str:
        return f"{self.stage}-{self.service}"

    def api_gateway_deployment_logical_id(self, timestamp_ms: int) -> str:
        return f"ApiGatewayDeployment{int(timestamp_ms)}"

    def rest_api_logical_id(self) -> str:
        return "ApiGatewayRestApi"

    def normalized_authorizer_name(self, function_name: str) -> str:
        return self.normalized_function_name(function_name)

    def authorizer_logical_id(self, function_name: str) -> str:
        return f"{self.normalized_authorizer_name(function_name)}ApiGatewayAuthorizer"

    def resource_logical_id(self, resource_path: str) -> str:
        return f"ApiGatewayResource{normalize_path(resource_path)}"

    def extract_resource_id(self, resource_logical_id: str) -> str:
        match = _RESOURCE_LOGICAL_ID.search(require_string(resource_logical_id, argument="resource_logical_id"))
        if match is None:
            raise PatternMismatch(resource_logical_id, "an API Gateway resource logical id")
        return match.group(1)

    def method_logical_id(self, resource_id: str, method_name: str) -> str:
        resource_id = require_string(resource_id, argument="resource_id")
        return f"ApiGatewayMethod{resource_id}{normalize_method_name(method_name)}"

    def api_key_logical_id(self, api_key_number: int) -> str:
        return f"ApiGatewayApiKey{api_key_number}"

    def api_key_logical_id_regex(self) -> re.Pattern[str]:
        return API_KEY_LOGICAL_ID_REGEX

    # S3
    def deployment_bucket_logical_id(self) -> str:
        return "ServerlessDeploymentBucket"

    def deployment_bucket_output_logical_id(self) -> str:
        return "ServerlessDeploymentBucketName"

    def normalize_bucket_name(self, bucket_name: str) -> str:
        return _alphanumeric_name(bucket_name, "bucket_name")

    def bucket_logical_id(self, bucket_name: str) -> str:
        return f"S3Bucket{self.normalize_bucket_name(bucket_name)}"

    # SNS
    def normalize_topic_name(self, topic_name: str) -> str:
        return _alphanumeric_name(topic_name, "topic_name")

    def topic_logical_id(self, topic_name: str) -> str:
        return f"SNSTopic{self.normalize_topic_name(topic_name)}"

    def extract_topic_name_from_logical_id(self, logical_id: str) -> str:
        """Recover the normalized topic name from :meth:`topic_logical_id` output."""
        match = _TOPIC_LOGICAL_ID.match(require_string(logical_id, argument="logical_id"))
        if match is None:
            raise PatternMismatch(logical_id, "a topic logical id")
        return match.group(1)

    # Schedule
    def schedule_id(self, function_name: str) -> str:
        return f"{require_string(function_name, argument='function_name', allow_empty=False)}Schedule"

    def schedule_logical_id(self, function_name: str, schedule_index: int) -> str:
        return f"{self.normalized_function_name(function_name)}EventsRuleSchedule{schedule_index}"

    # Stream
    def stream_logical_id(self, function_name: str, stream_type: str, stream_name: str) -> str:
        return (
            f"{self.normalized_function_name(function_name)}"
            f"EventSourceMapping{normalize_name(stream_type)}"
            f"{normalize_name_to_alpha_numeric_only(stream_name)}"
        )

    # Permissions
    def lambda_s3_permission_logical_id(self, function_name: str, bucket_name: str) -> str:
        return (
            f"{self.normalized_function_name(function_name)}"
            f"LambdaPermission{self.normalize_bucket_name(bucket_name)}S3"
        )

    def lambda_sns_permission_logical_id(self, function_name: str, topic_name: str) -> str:
        return (
            f"{self.normalized_function_name(function_name)}"
            f"LambdaPermission{self.normalize_topic_name(topic_name)}SNS"
        )

    def lambda_schedule_permission_logical_id(self, function_name: str, schedule_index: int) -> str:
        return (
            f"{self.normalized_function_name(function_name)}"
            f"LambdaPermissionEventsRuleSchedule{schedule_index}"
        )

    def lambda_api_gateway_permission_logical_id(self, function_name: str) -> str:
        return f"{self.normalized_function_name(function_name)}LambdaPermissionApiGateway"
