"""
Pytest Configuration and Shared Fixtures

Provides common test fixtures and configuration for the entire test suite.
"""

from pathlib import Path
from typing import Any

import pytest

from sourcing.core.money import Money
from sourcing.orders.models import DeliveryRecord, OrderLine, VerificationLine


@pytest.fixture
def temp_dir(tmp_path) -> Path:
    """Create a temporary directory for test files."""
    return tmp_path


@pytest.fixture
def sample_order_row() -> dict[str, Any]:
    """Sample order sheet row as read from a snapshot."""
    return {
        "id": "row-1",
        "offer_id": "716234098123",
        "china_option1": "粉色",
        "china_option2": "130cm",
        "order_qty": "2",
        "cost": "¥45.99",
        "note": "",
        "cancel_qty": "",
        "img_url": "",
        "product_name": "儿童卫衣",
        "order_number": "BZ-250925-0039#1",
    }


@pytest.fixture
def make_order_line():
    """Factory for OrderLine objects with sensible defaults."""

    def _make(
        id: str = "row-1",
        external_key: str = "716234098123",
        option_raw: str = "粉色; 130cm",
        quantity: int = 1,
        **kwargs: Any,
    ) -> OrderLine:
        return OrderLine(id=id, external_key=external_key, option_raw=option_raw, quantity=quantity, **kwargs)

    return _make


@pytest.fixture
def make_verification_line():
    """Factory for VerificationLine objects with sensible defaults."""

    def _make(
        external_key: str = "716234098123",
        option_raw: str = "粉色; 130cm",
        quantity: int = 1,
        unit_price: Money | None = None,
        image_url: str = "",
    ) -> VerificationLine:
        return VerificationLine(
            external_key=external_key,
            option_raw=option_raw,
            quantity=quantity,
            unit_price=unit_price,
            image_url=image_url,
        )

    return _make


@pytest.fixture
def sample_delivery_record() -> DeliveryRecord:
    """Sample delivery registry record."""
    return DeliveryRecord(
        canonical_order_number="BZ-250925-0039",
        status_code="等待卖家发货",
        id="4012345678901-1",
        order_id="4012345678901",
        shop="义乌童装店",
        offer_id="716234098123",
        order_info="BZ-250925-0039 // 深灰色 | FREE // S0033426163033 // 1ea",
        delivery_code="YT7512345678",
        order_payment_time="2025-09-25T14:30:00",
    )


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path_factory):
    """Set up test environment variables."""
    # Ensure tests don't use real data
    monkeypatch.setenv("SOURCING_ENV", "test")
    monkeypatch.setenv("SOURCING_DATA_DIR", str(tmp_path_factory.getbasetemp() / "sourcing_data"))
    monkeypatch.setenv("LOG_LEVEL", "INFO")
    monkeypatch.delenv("DELIVERY_STATUS_LABELS_FILE", raising=False)
    monkeypatch.delenv("RECON_UNMATCHED_SAMPLE_SIZE", raising=False)
    monkeypatch.delenv("SNAPSHOT_CACHE_TTL", raising=False)

    # Every test starts from a fresh configuration
    monkeypatch.setattr("sourcing.core.config._config", None)


# Test markers for categorizing tests
def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "integration: Integration tests for complete workflows")
    config.addinivalue_line("markers", "currency: Tests for currency handling and precision")
    config.addinivalue_line("markers", "matching: Tests for option normalization and matching")
    config.addinivalue_line("markers", "delivery: Tests for delivery joining and export parsing")
    config.addinivalue_line("markers", "slow: Tests that take significant time to run")
