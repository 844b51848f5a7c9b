"""Domain error kinds shared by the catalogue and ordering contexts.

NotFound and plain validation failures use Protean's own
``ObjectNotFoundError`` and ``ValidationError``. The kinds below refine
``ValidationError`` so API handlers and callers can tell them apart while
still treating them as client errors.
"""

from protean.exceptions import ProteanExceptionWithMessage, ValidationError


class InvalidRelationError(ValidationError):
    """A cross-entity reference violates the catalogue hierarchy.

    E.g. a subcategory that does not belong to the stated category, or a
    brand/category id that does not exist.
    """


class DuplicateIdentifierError(ValidationError):
    """A slug, SKU, brand name or order number is already taken."""


class GenerationExhaustedError(ProteanExceptionWithMessage):
    """An identifier could not be generated within the retry budget."""
