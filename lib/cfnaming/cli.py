"""Command line interface for cfnaming."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Tuple

import click
import yaml
from pydantic import ValidationError

from cfnaming.config import DeploymentContext, ServiceConfig, SnsEventConfig, load_service_config
from cfnaming.core import LogicalNaming, build_plan, resolve_intrinsic
from cfnaming.errors import NamingError
from cfnaming.utils import (
    epoch_millis,
    normalize_function_name,
    normalize_method_name,
    normalize_name,
    normalize_name_to_alpha_numeric_only,
    normalize_path,
    normalize_path_part,
    save_json,
)

NORMALIZERS: Dict[str, Callable[[str], str]] = {
    "name": normalize_name,
    "alphanumeric": normalize_name_to_alpha_numeric_only,
    "path-part": normalize_path_part,
    "path": normalize_path,
    "function": normalize_function_name,
    "method": normalize_method_name,
}

EXTRACTORS: Dict[str, Callable[[LogicalNaming, str], str]] = {
    "lambda-arn": LogicalNaming.extract_lambda_name_from_arn,
    "authorizer-arn": LogicalNaming.extract_authorizer_name_from_arn,
    "lambda-logical-id": LogicalNaming.extract_function_name_from_lambda_logical_id,
    "topic-logical-id": LogicalNaming.extract_topic_name_from_logical_id,
    "resource-logical-id": LogicalNaming.extract_resource_id,
}


def _parse_overrides(values: Tuple[str, ...]) -> Dict[str, object]:
    overrides: Dict[str, object] = {}
    for item in values:
        key, sep, raw = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected KEY=VALUE, got '{item}'.", param_hint="--set")
        overrides[key] = yaml.safe_load(raw) if raw else ""
    return overrides


def _load_service(config_path: Path, overrides: Dict[str, object]) -> ServiceConfig:
    try:
        return load_service_config(config_path, overrides)
    except (ValidationError, yaml.YAMLError, TypeError, ValueError) as exc:
        raise click.ClickException(f"Invalid service configuration {config_path}: {exc}") from exc


def _existing_topics(service: ServiceConfig, context: DeploymentContext) -> Dict[str, str]:
    topics: Dict[str, str] = {}
    for key, function in service.functions.items():
        for event in function.events:
            settings = event.settings
            if isinstance(settings, SnsEventConfig) and settings.is_existing:
                topics[f"{key}:{settings.topic_name}"] = resolve_intrinsic(settings.arn, context)
    return topics


@click.group()
def app() -> None:
    """Logical id derivation for event-triggered function services."""


@app.command()
@click.argument("config", type=click.Path(path_type=Path, exists=True, dir_okay=False))
@click.option("--stage", type=str, default=None, help="Override the provider stage.")
@click.option("--region", type=str, default=None, help="Override the provider region.")
@click.option("--account-id", type=str, default=None, help="Account id used to resolve existing resource ARNs.")
@click.option(
    "--set",
    "overrides",
    multiple=True,
    metavar="KEY=VALUE",
    help="Override a configuration value using a dotted key (repeatable).",
)
@click.option(
    "--output",
    type=click.Path(path_type=Path, dir_okay=False, writable=True),
    default=None,
    help="Write the id plan as JSON to this file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["warning", "info", "debug"], case_sensitive=False),
    default="warning",
    help="Set logging verbosity (warning/info/debug).",
)
def ids(
    config: Path,
    stage: str | None,
    region: str | None,
    account_id: str | None,
    overrides: Tuple[str, ...],
    output: Path | None,
    log_level: str,
) -> None:
    """List the logical ids implied by a service configuration file."""
    logging.basicConfig(level=getattr(logging, log_level.upper(), logging.WARNING))

    service = _load_service(config, _parse_overrides(overrides))
    try:
        context = service.deployment_context(stage=stage, region=region, account_id=account_id)
    except ValidationError as exc:
        raise click.ClickException(f"Invalid deployment context: {exc}") from exc
    naming = LogicalNaming(context)
    logging.info("Deriving ids for stack %s in %s", naming.stack_name(), context.region)

    try:
        plan = build_plan(service, naming, timestamp_ms=epoch_millis())
        existing = _existing_topics(service, context) if account_id else {}
    except NamingError as exc:
        raise click.ClickException(str(exc)) from exc
    if not account_id:
        logging.warning("No --account-id given; existing topic ARNs are left unresolved.")

    state = plan.to_state()
    state["existing_topics"] = existing
    if output is not None:
        save_json(state, output)
        click.echo(f"Wrote {len(plan)} logical id(s) to {output}")
        return

    click.echo(f"Stack: {naming.stack_name()}")
    for entry in plan:
        scope = f" [{entry.function}]" if entry.function else ""
        click.echo(f"{entry.logical_id}\t{entry.kind}\t{entry.source}{scope}")
    for source, arn in existing.items():
        click.echo(f"existing topic {source}: {arn}")


@app.command()
@click.argument("kind", type=click.Choice(sorted(NORMALIZERS)))
@click.argument("name")
def normalize(kind: str, name: str) -> None:
    """Normalize NAME the way ids of the given KIND are normalized."""
    click.echo(NORMALIZERS[kind](name))


@app.command()
@click.argument("kind", type=click.Choice(sorted(EXTRACTORS)))
@click.argument("value")
def extract(kind: str, value: str) -> None:
    """Recover the raw name embedded in a generated id or ARN."""
    # Extraction does not depend on the deployment context.
    naming = LogicalNaming(DeploymentContext(service="cfnaming"))
    try:
        click.echo(EXTRACTORS[kind](naming, value))
    except NamingError as exc:
        raise click.ClickException(str(exc)) from exc


@app.command()
def version() -> None:
    """Print cfnaming version."""
    from cfnaming import __version__

    click.echo(__version__)


if __name__ == "__main__":
    app(prog_name="cfnaming")
