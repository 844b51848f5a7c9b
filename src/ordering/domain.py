"""Ordering bounded context — the order ledger.

Orders snapshot what the customer bought at checkout and move forward
through fulfilment. They never read the catalogue back.
"""

import structlog
from protean.domain import Domain

ordering = Domain(name="ordering")

logger = structlog.get_logger(__name__)
