import math
from dataclasses import dataclass, field
from typing import Any, List

from django.conf import settings
from django.core.paginator import Paginator


@dataclass
class PageResult:
    items: List[Any] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total: int = 0

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    def meta(self):
        return {
            'page': self.page,
            'limit': self.limit,
            'total': self.total,
            'pages': self.pages,
        }


class CustomPaginator:
    """
    Page/limit pagination over an ordered queryset.

    The count and the slice both run in the database. Asking for a page past the
    end returns no items but still reports the real totals.
    """
    page_size = getattr(settings, 'TASK_PAGE_SIZE', 10)
    max_page_size = getattr(settings, 'TASK_MAX_PAGE_SIZE', 100)

    def __init__(self, page=1, limit=None):
        self.page = page
        self.limit = min(limit or self.page_size, self.max_page_size)

    def paginate(self, queryset) -> PageResult:
        paginator = Paginator(queryset, self.limit)
        total = paginator.count

        items = []
        if total and self.page <= paginator.num_pages:
            items = list(paginator.page(self.page).object_list)

        return PageResult(items=items, page=self.page, limit=self.limit, total=total)
