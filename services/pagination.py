import math
from typing import List, Tuple

from sqlalchemy.orm import Query


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show `total` rows, `limit` at a time."""
    if limit < 1:
        raise ValueError("limit must be at least 1")
    return math.ceil(total / limit)


def paginate(query: Query, page: int, limit: int) -> Tuple[List, int]:
    """
    Apply offset/limit to an already-ordered query.
    Returns (rows, total). A page past the end yields no rows.
    """
    total = query.order_by(None).count()
    rows = query.offset((page - 1) * limit).limit(limit).all()
    return rows, total
