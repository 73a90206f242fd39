"""Storefront bounded context: catalogue, users, the stock ledger and the order lifecycle.

A single domain: the order lifecycle reads products and users synchronously
and mutates stock in the same transaction boundary, so the collaborators live
alongside it rather than behind cross-domain events.
"""

import structlog
from protean.domain import Domain

storefront = Domain(name="storefront")

logger = structlog.get_logger(__name__)
