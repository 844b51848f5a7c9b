"""Input normalization shared by catalogue command handlers."""

from protean.exceptions import ValidationError


def clean_name(value, field="name", message="Name is required"):
    """Trim a display name and reject blank values."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError({field: [message]})
    return cleaned


def clean_optional(value):
    """Trim an optional text value, mapping blanks to None."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None
