"""
Sourcing Reconciliation - Order Line Matching for Cross-Border Sourcing

Reconciles a locally maintained order sheet against marketplace verification
exports and attaches delivery-registry information to each order line.

Key Features:
- Option normalization tolerant of qualifiers, size aliases, and field order
- Four-tier option match cascade per offer id
- Quantity and identity status classification with display precedence
- Delivery join by extracted order number
- Order-check export parsing with merged-cell grouping

Domain Packages:
- core: Currency handling, configuration, JSON reports, snapshot cache
- orders: Domain models and snapshot loaders
- matching: Normalization, cascade, aggregation, classification
- delivery: Delivery join, export parsing, status labels
- cli: Command-line interface

Example Usage:
    from sourcing.matching import normalize, reconcile
    from sourcing.delivery import join_deliveries
    from sourcing.orders import load_order_lines

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Sourcing Operations"

# Export core utilities for easy access
from .core.config import Environment, get_config
from .core.money import Money

# Export key domain functionality
from .delivery.joiner import DeliveryJoinResult, join_deliveries
from .matching.classifier import DisplayStatus, IdentityStatus, QuantityStatus, ReconciliationReport, reconcile
from .matching.normalizer import normalize
from .matching.order_numbers import extract_order_number
from .orders.models import DeliveryRecord, OrderLine, VerificationLine

__all__ = [
    # Core
    "Money",
    "get_config",
    "Environment",
    # Models
    "OrderLine",
    "VerificationLine",
    "DeliveryRecord",
    # Matching
    "normalize",
    "extract_order_number",
    "reconcile",
    "ReconciliationReport",
    "QuantityStatus",
    "IdentityStatus",
    "DisplayStatus",
    # Delivery
    "join_deliveries",
    "DeliveryJoinResult",
]
