#!/usr/bin/env python3
"""
Reconcile CLI - Order Line Classification Commands

Command-line interface for matching order lines against a verification export.
"""

from datetime import datetime
from pathlib import Path

import click

from ..core.cache import SnapshotCache
from ..core.config import get_config
from ..core.json_utils import write_json
from ..matching import (
    apply_verification_details,
    extract_order_number,
    extract_sheet_order_number,
    normalize,
    normalize_for_matching,
    normalize_search_order_number,
    option_group_key,
    reconcile as reconcile_lines,
    split_for_export,
)
from ..orders.loader import load_order_lines, load_verification_lines


@click.group()
def reconcile() -> None:
    """Order line reconciliation commands."""
    pass


@reconcile.command()
@click.option("--orders", "orders_path", required=True, help="Order sheet snapshot (CSV or JSON)")
@click.option("--verification", "verification_path", required=True, help="Verification export (CSV or JSON)")
@click.option("--apply-details", is_flag=True, help="Fill image URLs and unit costs from matched records")
@click.option("--output-dir", help="Override output directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def run(
    ctx: click.Context,
    orders_path: str,
    verification_path: str,
    apply_details: bool,
    output_dir: str | None,
    verbose: bool,
) -> None:
    """
    Classify every order line against a verification export.

    Examples:
      sourcing reconcile run --orders orders.csv --verification verification.csv
      sourcing reconcile run --orders orders.json --verification export.csv --apply-details
    """
    config = get_config()
    verbose = verbose or ctx.obj.get("verbose", False)

    output_path = Path(output_dir) if output_dir else config.output_dir / "reconciliation"
    output_path.mkdir(parents=True, exist_ok=True)

    if verbose:
        click.echo("Order Line Reconciliation")
        click.echo(f"Orders: {orders_path}")
        click.echo(f"Verification: {verification_path}")
        click.echo(f"Output: {output_path}")
        click.echo()

    try:
        cache = SnapshotCache(config.reconciliation.snapshot_cache_ttl)
        order_lines = load_order_lines(orders_path, cache=cache)
        verification_lines = load_verification_lines(verification_path, cache=cache)

        if verbose:
            click.echo(f"Loaded {len(order_lines)} order lines")
            click.echo(f"Loaded {len(verification_lines)} verification lines")

        click.echo("🔍 Reconciling order lines...")

        changes = []
        if apply_details:
            updated = []
            for line in order_lines:
                line, line_changes = apply_verification_details(line, verification_lines)
                updated.append(line)
                changes.extend(line_changes)
            order_lines = updated

        report = reconcile_lines(order_lines, verification_lines)
        success, cancelled = split_for_export(order_lines, report)

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        output_file = output_path / f"{timestamp}_reconciliation_results.json"

        result = {
            "metadata": {
                "orders_file": str(orders_path),
                "verification_file": str(verification_path),
                "apply_details": apply_details,
                "timestamp": timestamp,
            },
            **report.to_dict(),
            "field_changes": [change.to_dict() for change in changes],
            "export": {
                "success": [line.id for line in success],
                "cancelled": [line.id for line in cancelled],
            },
        }
        write_json(output_file, result)

        display = report.display_counts()
        click.echo(f"✅ Reconciled {report.line_count} order lines")
        for status, count in display.items():
            click.echo(f"   {status}: {count}")
        if report.ambiguous_group_count:
            click.echo(f"⚠️  {report.ambiguous_group_count} ambiguous verification group(s)")
        if changes:
            click.echo(f"   Field updates: {len(changes)}")
        click.echo(f"   Results saved to: {output_file}")

    except Exception as e:
        click.echo(f"❌ Error during reconciliation: {e}", err=True)
        raise click.ClickException(str(e)) from e


@reconcile.command("normalize")
@click.argument("option")
def normalize_option(option: str) -> None:
    """
    Show how an option string is normalized.

    Example:
      sourcing reconcile normalize "XL 2XL (粉色)"
    """
    click.echo(f"Normalized: {normalize(option)}")
    click.echo(f"Loose:      {normalize_for_matching(option)}")
    click.echo(f"Group key:  {option_group_key(normalize(option))}")


@reconcile.command("order-number")
@click.argument("value")
def order_number(value: str) -> None:
    """
    Show the order numbers extracted from a composite value.

    Example:
      sourcing reconcile order-number "BZ-250925-0039#1-A"
    """
    click.echo(f"Order number: {extract_order_number(value)}")
    click.echo(f"Sheet:        {extract_sheet_order_number(value)}")
    click.echo(f"Search:       {normalize_search_order_number(value)}")
