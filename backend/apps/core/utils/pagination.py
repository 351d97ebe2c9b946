"""
Page/limit pagination shared by list endpoints.
"""

import math

from django.conf import settings


def _positive_int(value, default: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_pagination(query_params, default_limit: int = None, max_limit: int = None) -> tuple[int, int]:
    """
    Read ?page= and ?limit= from the query string

    Invalid values fall back to the defaults; limit is capped at max_limit.
    """
    default_limit = default_limit or settings.DEFAULT_PAGE_SIZE
    max_limit = max_limit or settings.MAX_PAGE_SIZE

    page = _positive_int(query_params.get('page'), 1)
    limit = min(_positive_int(query_params.get('limit'), default_limit), max_limit)
    return page, limit


def paginate(queryset, page: int, limit: int) -> tuple[list, dict]:
    """
    Slice a queryset and build the meta block

    Returns:
        Tuple of (items, {page, limit, total, totalPages})
    """
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    return items, {
        'page': page,
        'limit': limit,
        'total': total,
        'totalPages': math.ceil(total / limit) if limit else 0,
    }
