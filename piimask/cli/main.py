#!/usr/bin/env python3
"""piimask CLI - mask single values or JSON field mappings."""

import json
import sys
from typing import IO, Any, Optional

import click

from piimask.core.config import MaskingConfig, load_config
from piimask.core.exceptions import PiiMaskError
from piimask.engine import MaskingEngine
from piimask.observability.logging import configure_logging, get_logger, trace_operation

KINDS = (
    "email",
    "email_display",
    "email_placeholder",
    "name",
    "phone",
    "address",
    "date",
    "zipcode",
    "text",
    "ip",
    "ip_mask",
    "credit_card",
    "bank_account",
    "tax_id",
    "url",
    "user_agent",
)


def _engine(ctx: click.Context) -> MaskingEngine:
    return ctx.obj["engine"]


@click.group()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML configuration file (default: PIIMASK_* environment)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured log level",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], log_level: Optional[str]) -> None:
    """piimask - format-preserving masking of personal data."""
    ctx.ensure_object(dict)

    try:
        config: MaskingConfig = load_config(config_path)
    except PiiMaskError as e:
        raise click.ClickException(e.message) from e

    if log_level:
        config.logging.level = log_level.upper()

    configure_logging(config.logging)
    ctx.obj["engine"] = MaskingEngine(config)


@cli.command()
@click.argument("kind", type=click.Choice(KINDS))
@click.argument("value")
@click.pass_context
def mask(ctx: click.Context, kind: str, value: str) -> None:
    """Mask a single VALUE as KIND and print the result."""
    result = _engine(ctx).mask_value(kind, value)
    # Maskers signal rejected input with None, or "" for a non-empty value.
    if result is None or (value and not result):
        click.echo(f"Error: could not mask value as {kind}", err=True)
        ctx.exit(1)
    click.echo(result)


@cli.command()
@click.argument("category", type=click.Choice(MaskingEngine.CATEGORIES))
@click.argument("input_file", type=click.File("r"), default="-")
@click.option(
    "--type",
    "-t",
    "explicit_types",
    multiple=True,
    metavar="FIELD=KIND",
    help="Force the masking kind of a field (e.g. -t payout=bank_account)",
)
@click.pass_context
def fields(
    ctx: click.Context, category: str, input_file: IO[str], explicit_types: tuple
) -> None:
    """Mask a JSON object of fields read from INPUT_FILE (default: stdin)."""
    overrides = {}
    for item in explicit_types:
        field, sep, kind = item.partition("=")
        if not sep or not field or not kind:
            raise click.BadParameter(f"expected FIELD=KIND, got {item!r}", param_hint="--type")
        overrides[field] = kind

    try:
        data: Any = json.load(input_file)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON input: {e}") from e

    if not isinstance(data, dict):
        raise click.ClickException("JSON input must be an object of field names to values")

    with trace_operation("mask_fields", category=category) as trace:
        masked = _engine(ctx).mask_fields(category, data, explicit_types=overrides or None)
        trace["field_count"] = len(masked)

    click.echo(json.dumps(masked, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("value")
@click.pass_context
def check(ctx: click.Context, value: str) -> None:
    """Report whether VALUE already looks masked (exit code 1 if not)."""
    if _engine(ctx).is_masked(value):
        click.echo("masked")
        return
    click.echo("clear")
    ctx.exit(1)


@cli.command()
def version() -> None:
    """Show piimask version."""
    from piimask import __version__

    click.echo(f"piimask v{__version__}")


def main() -> int:
    """Main entry point."""
    try:
        cli()
        return 0
    except Exception as e:
        get_logger(__name__).error("Unhandled CLI error", error=str(e))
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
