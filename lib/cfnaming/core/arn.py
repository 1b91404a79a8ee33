"""Resolution of the intrinsic functions used to reference existing resources."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict

from cfnaming.config import DeploymentContext
from cfnaming.errors import InvalidInput

_PSEUDO_PARAMETERS: Dict[str, Callable[[DeploymentContext], str | None]] = {
    "AWS::Region": lambda context: context.region,
    "AWS::AccountId": lambda context: context.account_id,
    "AWS::Partition": lambda context: "aws",
    "AWS::StackName": lambda context: f"{context.service}-{context.stage}",
}


def _resolve_ref(name: Any, context: DeploymentContext) -> str:
    resolver = _PSEUDO_PARAMETERS.get(name)
    if resolver is None:
        available = ", ".join(sorted(_PSEUDO_PARAMETERS))
        raise InvalidInput(f"Cannot resolve Ref {name!r}. Available: {available}")
    value = resolver(context)
    if value is None:
        raise InvalidInput(f"Ref {name!r} needs a value the deployment context does not provide.")
    return value


def _resolve_join(args: Any, context: DeploymentContext) -> str:
    if not isinstance(args, list) or len(args) != 2 or not isinstance(args[1], list):
        raise InvalidInput(f"Fn::Join expects [delimiter, [values...]], got {args!r}.")
    delimiter, values = args
    if not isinstance(delimiter, str):
        raise InvalidInput(f"Fn::Join delimiter must be a string, got {delimiter!r}.")
    return delimiter.join(resolve_intrinsic(value, context) for value in values)


def resolve_intrinsic(value: Any, context: DeploymentContext) -> str:
    """Reduce a string, ``Ref`` or ``Fn::Join`` expression to a plain string."""

    if isinstance(value, str):
        return value
    if isinstance(value, dict) and len(value) == 1:
        if "Ref" in value:
            return _resolve_ref(value["Ref"], context)
        if "Fn::Join" in value:
            resolved = _resolve_join(value["Fn::Join"], context)
            logging.debug("Resolved Fn::Join to %s", resolved)
            return resolved
    raise InvalidInput(f"Unsupported intrinsic expression: {value!r}")


__all__ = ["resolve_intrinsic"]
