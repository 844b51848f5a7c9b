"""Read-side helpers over Protean DAO querysets."""

BATCH_SIZE = 100


def fetch_all(queryset, batch_size: int = BATCH_SIZE) -> list:
    """Materialize every record matched by ``queryset``.

    Protean querysets apply a default page size, so listings that filter or
    count in Python walk the result set batch by batch.
    """
    records = []
    offset = 0
    while True:
        batch = queryset.offset(offset).limit(batch_size).all().items
        records.extend(batch)
        if len(batch) < batch_size:
            return records
        offset += batch_size


def index_by_id(queryset, identifiers) -> dict:
    """Fetch the records whose id is in ``identifiers`` with one query, keyed by id."""
    wanted = sorted({str(identifier) for identifier in identifiers if identifier})
    if not wanted:
        return {}
    return {str(record.id): record for record in fetch_all(queryset.filter(id__in=wanted))}


def _describe_page(page: int, limit: int, total: int) -> dict:
    return {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": (total + limit - 1) // limit,
    }


def paginate(records: list, page: int, limit: int) -> dict:
    """Slice ``records`` into one page and describe the page."""
    page = max(page, 1)
    start = (page - 1) * limit
    return {
        "items": records[start : start + limit],
        "pagination": _describe_page(page, limit, len(records)),
    }


def paginate_query(queryset, page: int, limit: int) -> dict:
    """Fetch one page of ``queryset`` from the store and describe the page.

    The store applies the offset and limit and reports the total number of
    matches, so only the requested page is loaded.
    """
    page = max(page, 1)
    result = queryset.offset((page - 1) * limit).limit(limit).all()
    return {
        "items": result.items,
        "pagination": _describe_page(page, limit, result.total),
    }
