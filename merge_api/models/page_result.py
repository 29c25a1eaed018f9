"""
Page of merged records returned by the history listing.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class PageResult:
    """
    One page of the merged record history.

    Attributes:
        items: Merged records on this page (already rendered as dicts)
        page: 1-based page number requested
        total: Number of merged records at computation time
        total_pages: ceil(total / limit)
    """

    page: int
    total: int
    total_pages: int
    items: List[Dict[str, Any]] = field(default_factory=list)

    @classmethod
    def build(cls, items: List[Dict[str, Any]], page: int, limit: int, total: int) -> 'PageResult':
        """Build a page computing total_pages from the page size."""
        return cls(
            items=items,
            page=page,
            total=total,
            total_pages=math.ceil(total / limit),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the page as the API/cache payload."""
        return {
            'items': self.items,
            'page': self.page,
            'total': self.total,
            'totalPages': self.total_pages,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PageResult':
        """
        Inverse of to_dict.

        Raises:
            ValueError: If data is not a page payload
        """
        if not isinstance(data, dict):
            raise ValueError(f"Page payload must be an object, got {type(data).__name__}")

        missing = [key for key in ('items', 'page', 'total', 'totalPages') if key not in data]
        if missing:
            raise ValueError(f"Page payload missing fields: {', '.join(missing)}")

        items = data['items']
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise ValueError("Page payload items must be a list of objects")

        try:
            return cls(
                items=list(items),
                page=int(data['page']),
                total=int(data['total']),
                total_pages=int(data['totalPages']),
            )
        except (TypeError, ValueError) as e:
            raise ValueError(f"Page payload has non-integer counters: {e}") from e
