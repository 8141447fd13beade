from typing import Optional

from catalog_core.models import FilterPredicate, PageState, QueryVariables, SortOrder


def name_pattern(search: str) -> str:
    # used with _ilike, so the match is case-insensitive; "" gives "%%" which matches every name
    return f"%{search}%"


def build(search: str, category: str, predicate: FilterPredicate,
          sort: Optional[SortOrder], page: PageState) -> QueryVariables:
    """Variables for the catalog listing and count queries."""
    sort = sort or SortOrder()
    return QueryVariables(
        name_like=name_pattern(search),
        category=category,
        predicate={key: {op: list(values) for op, values in cond.items()}
                   for key, cond in predicate.items()},
        sort_key=sort.key,
        sort_direction=sort.direction,
        limit=page.page_size,
        offset=page.offset,
    )
