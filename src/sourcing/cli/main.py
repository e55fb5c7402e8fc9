#!/usr/bin/env python3
"""
Main CLI Entry Point for Sourcing Reconciliation

Provides a unified command-line interface for the reconciliation tools.
"""

import click

from ..core.config import get_config


@click.group()
@click.option(
    "--config-env",
    type=click.Choice(["development", "test", "production"]),
    help="Override environment configuration",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_env: str | None, verbose: bool, debug: bool) -> None:
    """
    Sourcing Reconciliation

    Match local order lines against marketplace verification exports and
    attach delivery information.
    """
    ctx.ensure_object(dict)

    if config_env:
        import os

        os.environ["SOURCING_ENV"] = config_env

    if debug:
        import logging
        import os

        os.environ["LOG_LEVEL"] = "DEBUG"
        logging.getLogger().setLevel(logging.DEBUG)
        logging.getLogger("sourcing").setLevel(logging.DEBUG)

    try:
        config_obj = get_config()
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    ctx.obj["verbose"] = verbose
    ctx.obj["debug"] = debug
    ctx.obj["config"] = config_obj

    if verbose:
        click.echo(f"Environment: {config_obj.environment.value}")
        click.echo(f"Data directory: {config_obj.data_dir}")

    if debug:
        click.echo("Debug logging enabled")


@main.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Show version information."""
    from sourcing import __author__, __version__

    click.echo(f"Sourcing Reconciliation v{__version__}")
    click.echo(f"Author: {__author__}")


@main.command()
@click.pass_context
def config(ctx: click.Context) -> None:
    """Show current configuration."""
    config_obj = ctx.obj["config"]

    click.echo("Current Configuration:")
    click.echo(f"  Environment: {config_obj.environment.value}")
    click.echo(f"  Data Directory: {config_obj.data_dir}")
    click.echo(f"  Output Directory: {config_obj.output_dir}")
    click.echo(f"  Unmatched Sample Size: {config_obj.reconciliation.unmatched_sample_size}")
    click.echo(f"  Snapshot Cache TTL: {config_obj.reconciliation.snapshot_cache_ttl}s")
    click.echo(f"  Status Labels File: {config_obj.delivery.status_labels_file or 'built-in'}")
    click.echo(f"  Debug Mode: {config_obj.debug}")
    click.echo(f"  Log Level: {config_obj.log_level}")


from .delivery import delivery  # noqa: E402
from .reconcile import reconcile  # noqa: E402

main.add_command(reconcile)
main.add_command(delivery)


if __name__ == "__main__":
    main()
