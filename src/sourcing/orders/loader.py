#!/usr/bin/env python3
"""
Snapshot Loaders

Load order sheets, verification exports, and delivery registries from CSV or
JSON files into domain models. Every cell is read as text and handed to the
models' permissive `from_dict` constructors.

Functions:
- read_table: Read a CSV/JSON file into a DataFrame of strings
- load_order_lines / load_verification_lines / load_delivery_records
"""

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import pandas as pd

from ..core.cache import SnapshotCache
from .models import DeliveryRecord, OrderLine, VerificationLine

logger = logging.getLogger(__name__)

T = TypeVar("T")

SUPPORTED_SUFFIXES = (".csv", ".json")


class LoaderError(ValueError):
    """Raised when a snapshot file cannot be turned into records."""


def read_table(path: str | Path, header: bool = True) -> pd.DataFrame:
    """
    Read a CSV or JSON file with every cell as a string.

    Args:
        path: File to read
        header: Whether the first CSV row holds column names

    Raises:
        FileNotFoundError: If the file does not exist
        LoaderError: If the file type is not supported
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            return pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                header=0 if header else None,
                encoding="utf-8-sig",
            )
        if suffix == ".json":
            return pd.read_json(
                path, dtype=False, convert_dates=False, orient="records", encoding="utf-8"
            )
    except pd.errors.EmptyDataError:
        logger.warning("Snapshot file is empty: %s", path)
        return pd.DataFrame()

    raise LoaderError(f"Unsupported snapshot file type {suffix!r} (expected one of {SUPPORTED_SUFFIXES})")


def _require_columns(frame: pd.DataFrame, path: Path, *alternatives: tuple[str, ...]) -> None:
    columns = set(frame.columns)
    for options in alternatives:
        if not columns.intersection(options):
            raise LoaderError(f"{path}: missing required column (one of {', '.join(options)})")


def _records(frame: pd.DataFrame) -> list[dict[str, Any]]:
    return frame.to_dict(orient="records")


def _load(
    path: str | Path,
    kind: str,
    build: Callable[[dict[str, Any]], T],
    required: tuple[tuple[str, ...], ...],
    cache: SnapshotCache | None,
) -> list[T]:
    path = Path(path)
    cache_key = None
    rows = None
    if cache is not None and path.exists():
        # Keyed on mtime so an edited file is never served stale
        cache_key = (kind, str(path.resolve()), path.stat().st_mtime_ns)
        rows = cache.get(cache_key)
        if rows is not None:
            logger.debug("Using cached %s snapshot for %s", kind, path)

    if rows is None:
        frame = read_table(path)
        if frame.empty:
            logger.warning("%s snapshot %s has no rows", kind, path)
            rows = ()
        else:
            _require_columns(frame, path, *required)
            rows = tuple(_records(frame))
        if cache_key is not None:
            cache.put(cache_key, rows)

    # Models are rebuilt on every call; callers may edit order lines in place
    items = [build(row) for row in rows]
    logger.info("Loaded %d %s record(s) from %s", len(items), kind, path)
    return items


def load_order_lines(path: str | Path, cache: SnapshotCache | None = None) -> list[OrderLine]:
    """
    Load local order lines.

    Rows without an id are numbered by position ("row-1", "row-2", ...).
    """
    lines = _load(
        path,
        "order",
        OrderLine.from_dict,
        (
            ("external_key", "externalKey", "offer_id", "offerId"),
            ("quantity", "order_qty", "qty"),
        ),
        cache,
    )
    for position, line in enumerate(lines, start=1):
        if not line.id:
            line.id = f"row-{position}"
    return lines


def load_verification_lines(path: str | Path, cache: SnapshotCache | None = None) -> list[VerificationLine]:
    """Load a marketplace verification export."""
    return _load(
        path,
        "verification",
        VerificationLine.from_dict,
        (
            ("external_key", "externalKey", "offer_id", "offerId"),
            ("option_raw", "optionRaw", "option", "product_size"),
            ("quantity", "qty"),
        ),
        cache,
    )


def load_delivery_records(path: str | Path, cache: SnapshotCache | None = None) -> list[DeliveryRecord]:
    """Load a delivery registry that is already one record per row."""
    return _load(
        path,
        "delivery",
        DeliveryRecord.from_dict,
        (("canonical_order_number", "canonicalOrderNumber", "sheet_order_number", "order_info"),),
        cache,
    )
