"""Human-readable identifiers: slugs, SKUs and order numbers.

Existence checks passed into these helpers are advisory. The store's unique
constraints are the source of truth, so writes that assign identifiers are
wrapped in :func:`retry_on_collision`, which re-runs the whole unit of work
when a concurrent writer wins the race.
"""

import random
import re
from collections.abc import Callable
from datetime import date
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError
from sqlalchemy.exc import IntegrityError

from shared.exceptions import DuplicateIdentifierError, GenerationExhaustedError

logger = structlog.get_logger(__name__)

CATEGORY_SLUG_MAX_LENGTH = 50
PRODUCT_SLUG_MAX_LENGTH = 100
ORDER_NUMBER_ATTEMPTS = 10
COLLISION_RETRY_ATTEMPTS = 5

# ASCII word characters, hyphen, and the Arabic/Persian script blocks.
_DISALLOWED_SLUG_CHARS = re.compile(
    "[^a-z0-9_\\-\u0600-\u06ff\u0750-\u077f\u08a0-\u08ff\ufb50-\ufdff\ufe70-\ufeff]"
)
_WHITESPACE = re.compile(r"\s+")
_HYPHEN_RUNS = re.compile(r"-{2,}")

_SKU_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
ORDER_NUMBER_PATTERN = re.compile(r"^ORD-\d{6}-\d{4}$")


def slugify(name: str, max_length: int = CATEGORY_SLUG_MAX_LENGTH) -> str:
    """Derive a URL slug from a display name.

    >>> slugify("  Night Cream  SPF 30 ")
    'night-cream-spf-30'
    """
    text = _WHITESPACE.sub("-", (name or "").strip().lower())
    text = _DISALLOWED_SLUG_CHARS.sub("", text)
    text = _HYPHEN_RUNS.sub("-", text).strip("-")
    text = text[:max_length].rstrip("-")
    if not text:
        # Names made only of punctuation or unsupported scripts
        return uuid4().hex[:8]
    return text


def unique_slug(candidate: str, exists: Callable[[str], bool]) -> str:
    """Return ``candidate`` or the first free ``candidate-N`` (N = 1, 2, ...)."""
    slug = candidate
    counter = 1
    while exists(slug):
        slug = f"{candidate}-{counter}"
        counter += 1
    return slug


def validate_sku(code: str | None) -> str:
    """Normalize and validate a variant SKU, returning the trimmed code."""
    code = (code or "").strip()

    if not code:
        raise ValidationError({"sku": ["SKU is required"]})
    if len(code) < 3 or len(code) > 50:
        raise ValidationError({"sku": ["SKU must be between 3 and 50 characters"]})
    if not _SKU_PATTERN.match(code):
        raise ValidationError({"sku": ["SKU must contain only alphanumeric characters, hyphens and underscores"]})
    if code.startswith("-") or code.endswith("-"):
        raise ValidationError({"sku": ["SKU must not start or end with a hyphen"]})
    if "--" in code:
        raise ValidationError({"sku": ["SKU must not contain consecutive hyphens"]})

    return code


def generate_order_number(today: date | None = None, rng: random.Random | None = None) -> str:
    """Build an ``ORD-YYMMDD-RRRR`` order number."""
    today = today or date.today()
    rng = rng or random
    return f"ORD-{today:%y%m%d}-{rng.randrange(10000):04d}"


def next_order_number(
    exists: Callable[[str], bool],
    attempts: int = ORDER_NUMBER_ATTEMPTS,
    generator: Callable[[], str] = generate_order_number,
) -> str:
    """Generate an order number that ``exists`` reports as free."""
    for attempt in range(1, attempts + 1):
        candidate = generator()
        if not exists(candidate):
            return candidate
        logger.warning("order_number_collision", order_number=candidate, attempt=attempt)

    raise GenerationExhaustedError(
        {"order_number": [f"Could not generate a unique order number after {attempts} attempts"]}
    )


def is_unique_violation(exc: Exception, field: str) -> bool:
    """True if ``exc`` is the store rejecting a duplicate value for ``field``."""
    if isinstance(exc, DuplicateIdentifierError):
        return False
    if isinstance(exc, ValidationError):
        messages = exc.messages if isinstance(exc.messages, dict) else {}
        return field in messages and any("already" in str(m) for m in messages[field])

    # SQLAlchemy-backed providers surface constraint failures as IntegrityError
    return isinstance(exc, IntegrityError) and field in str(exc.orig)


def retry_on_collision(operation, field: str, attempts: int = COLLISION_RETRY_ATTEMPTS):
    """Run ``operation`` and re-run it when the store rejects a duplicate ``field``.

    ``operation`` must be a complete unit of work (typically processing a
    command), so every retry recomputes the identifier against the state
    committed by whichever writer won the previous race.
    """
    for attempt in range(1, attempts + 1):
        try:
            return operation()
        except Exception as exc:
            if not is_unique_violation(exc, field):
                raise
            logger.warning("identifier_collision_retry", field=field, attempt=attempt)

    raise DuplicateIdentifierError({field: [f"Could not assign a unique {field} after {attempts} attempts"]})
