#!/usr/bin/env python3
"""
Delivery CLI - Delivery Join and Export Commands

Command-line interface for attaching delivery registry records to order lines.
"""

from datetime import datetime
from pathlib import Path

import click

from ..core.cache import SnapshotCache
from ..core.config import get_config
from ..core.json_utils import write_json
from ..delivery import (
    format_info_column,
    join_deliveries,
    load_delivery_export,
    load_status_labels,
    summarize_delivery_statuses,
)
from ..orders.loader import load_delivery_records, load_order_lines


@click.group()
def delivery() -> None:
    """Delivery registry commands."""
    pass


@delivery.command()
@click.option("--orders", "orders_path", required=True, help="Order sheet snapshot (CSV or JSON)")
@click.option("--deliveries", "deliveries_path", required=True, help="Delivery registry (CSV or JSON)")
@click.option("--sample-size", type=int, help="Unmatched order numbers to report")
@click.option("--output-dir", help="Override output directory")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.pass_context
def join(
    ctx: click.Context,
    orders_path: str,
    deliveries_path: str,
    sample_size: int | None,
    output_dir: str | None,
    verbose: bool,
) -> None:
    """
    Attach delivery information to order lines by order number.

    Example:
      sourcing delivery join --orders orders.csv --deliveries registry.csv
    """
    config = get_config()
    verbose = verbose or ctx.obj.get("verbose", False)
    if sample_size is None:
        sample_size = config.reconciliation.unmatched_sample_size
    if sample_size < 0:
        raise click.BadParameter("must be non-negative", param_hint="--sample-size")

    output_path = Path(output_dir) if output_dir else config.output_dir / "delivery"
    output_path.mkdir(parents=True, exist_ok=True)

    try:
        labels = load_status_labels(config.delivery.status_labels_file)
        cache = SnapshotCache(config.reconciliation.snapshot_cache_ttl)
        order_lines = load_order_lines(orders_path, cache=cache)
        records = load_delivery_records(deliveries_path, cache=cache)

        if verbose:
            click.echo(f"Loaded {len(order_lines)} order lines")
            click.echo(f"Loaded {len(records)} delivery records")

        click.echo("🚚 Joining delivery records...")
        result = join_deliveries(order_lines, records, sample_size=sample_size)

        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        output_file = output_path / f"{timestamp}_delivery_join.json"

        output = result.to_dict()
        output["metadata"] = {
            "orders_file": str(orders_path),
            "deliveries_file": str(deliveries_path),
            "timestamp": timestamp,
        }
        output["status_counts"] = summarize_delivery_statuses(result.lines)
        output["info"] = {line.id: format_info_column(line, labels) for line in result.lines if line.has_delivery}
        write_json(output_file, output)

        click.echo(
            f"✅ Matched {result.matched_count} of {len(result.lines)} lines ({result.match_rate*100:.1f}%)"
        )
        if result.unmatched_sample:
            click.echo(f"   Unmatched sample: {', '.join(result.unmatched_sample)}")
        click.echo(f"   Results saved to: {output_file}")

    except Exception as e:
        click.echo(f"❌ Error during delivery join: {e}", err=True)
        raise click.ClickException(str(e)) from e


@delivery.command("parse-export")
@click.option("--input", "input_path", required=True, help="Order-check export (CSV with header row)")
@click.option("--output", "output_file", help="Output JSON file")
def parse_export(input_path: str, output_file: str | None) -> None:
    """
    Convert an order-check export into delivery registry records.

    Example:
      sourcing delivery parse-export --input order_check.csv --output registry.json
    """
    config = get_config()

    try:
        records = load_delivery_export(input_path)

        if output_file:
            output_path = Path(output_file)
        else:
            timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
            output_path = config.output_dir / "delivery" / f"{timestamp}_delivery_records.json"

        write_json(output_path, [record.to_dict() for record in records])

        click.echo(f"✅ Parsed {len(records)} delivery records")
        click.echo(f"   Saved to: {output_path}")

    except Exception as e:
        click.echo(f"❌ Error parsing export: {e}", err=True)
        raise click.ClickException(str(e)) from e
