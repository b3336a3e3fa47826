"""Pagination helper for SQLAlchemy queries."""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

from sqlalchemy.orm import Query


def paginate(query: Query, page: int = 1, per_page: int = 20, max_per_page: Optional[int] = None) -> Dict[str, Any]:
    page = max(page, 1)
    per_page = max(per_page, 1)
    if max_per_page:
        per_page = min(per_page, max_per_page)
    total = query.order_by(None).count()
    items = query.limit(per_page).offset((page - 1) * per_page).all()
    return {
        "items": items,
        "page": page,
        "per_page": per_page,
        "total": total,
        "pages": math.ceil(total / per_page),
    }
