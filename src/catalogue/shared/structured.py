"""Typed product fields (images, tags, specifications).

Commands carry these collections as JSON text. Values are parsed and
type-checked here, at the command boundary, so a malformed payload is
rejected before anything is written. Products store the parsed lists and
maps as native collection fields.
"""

import json

from protean.exceptions import ValidationError


def _decode(raw, field):
    if raw is None:
        return None
    if not isinstance(raw, str):
        return raw
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({field: [f"{field.capitalize()} must be valid JSON"]}) from None


def parse_images(raw) -> list[str]:
    """Return the ordered list of image URLs encoded in ``raw``."""
    value = _decode(raw, "images")
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError({"images": ["Images must be a JSON array of URLs"]})

    images = []
    for url in value:
        if not isinstance(url, str) or not url.strip():
            raise ValidationError({"images": ["Each image must be a non-empty URL string"]})
        images.append(url.strip())
    return images


def parse_tags(raw) -> list[str]:
    """Return the tag set encoded in ``raw``, sorted and de-duplicated."""
    value = _decode(raw, "tags")
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError({"tags": ["Tags must be a JSON array of strings"]})

    tags = set()
    for tag in value:
        if not isinstance(tag, str):
            raise ValidationError({"tags": ["Each tag must be a string"]})
        if tag.strip():
            tags.add(tag.strip())
    return sorted(tags)


def parse_specifications(raw) -> dict:
    """Return the specification map encoded in ``raw``.

    Keys are attribute names; values are free-form JSON (strings, numbers,
    lists or nested objects) and are passed through untouched.
    """
    value = _decode(raw, "specifications")
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValidationError({"specifications": ["Specifications must be a JSON object"]})
    return dict(value)
