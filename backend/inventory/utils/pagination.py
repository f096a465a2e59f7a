import math
from typing import Any, List, Tuple

from sqlalchemy.orm import Query

from inventory.config import settings
from inventory.errors import ValidationError


def check_page(page: int, page_size: int) -> None:
    if page < 1:
        raise ValidationError("page must be 1 or greater")
    if page_size < 1 or page_size > settings.MAX_PAGE_SIZE:
        raise ValidationError(
            f"pageSize must be between 1 and {settings.MAX_PAGE_SIZE}"
        )


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size) if page_size else 0


def paginate(query: Query, page: int, page_size: int, *order_by: Any) -> Tuple[List, int]:
    """
    Count the filtered query, then fetch one ordered page of it.
    Ordering is applied after counting; count() wraps the query so its FROM is kept.
    """
    check_page(page, page_size)
    total = query.order_by(None).count()
    items = (
        query.order_by(*order_by)
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return items, total


def page_envelope(items: List, page: int, page_size: int, total: int) -> dict:
    return {
        "data": items,
        "page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": total_pages(total, page_size),
    }
