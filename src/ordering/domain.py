"""Ordering bounded context: orders and the checkout flow.

Turns a client-held cart into a paid order and tracks the order's
fulfilment status afterwards.
"""

from protean.domain import Domain

from shared.logging import configure_logging, get_logger

configure_logging(log_file_prefix="storefront")

ordering = Domain(name="ordering")

logger = get_logger(__name__)
