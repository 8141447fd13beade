from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Tuple

from catalog_core import filters
from catalog_core.models import (
    FilterPredicate,
    FilterSelection,
    PageState,
    QueryVariables,
    Scalar,
    SortDirection,
    SortOrder,
)
from catalog_core.query_vars import build

DEFAULT_PAGE_SIZE = 48
PAGE_SIZE_OPTIONS = (10, 20, 50)
SORT_KEYS = ("set", "rarity")


class CatalogState(BaseModel):
    """Everything the catalog page needs to rebuild its queries.

    Immutable: every transition returns a new state, and the query
    variables are derived from it on each render.
    """
    model_config = ConfigDict(frozen=True)

    game: str
    search: str = ""
    selected: Tuple[FilterSelection, ...] = ()
    sort_key: Optional[str] = None
    sort_direction: Optional[SortDirection] = None
    page: int = Field(1, ge=1)
    page_size: int = Field(DEFAULT_PAGE_SIZE, ge=1)
    filters_open: bool = True

    # --- derived values ---------------------------------------------------

    @property
    def predicate(self) -> FilterPredicate:
        return filters.aggregate(self.selected)

    @property
    def sort(self) -> SortOrder:
        return SortOrder(key=self.sort_key, direction=self.sort_direction)

    def page_state(self, total_count: int = 0) -> PageState:
        return PageState(current_page=self.page, page_size=self.page_size, total_count=total_count)

    def variables(self) -> QueryVariables:
        return build(self.search, self.game, self.predicate, self.sort, self.page_state())

    # --- transitions ------------------------------------------------------

    def with_game(self, game: str) -> "CatalogState":
        # selections belong to the previous game's facets
        return self.model_copy(update={"game": game, "selected": ()})

    def with_search(self, search: str) -> "CatalogState":
        return self.model_copy(update={"search": search})

    def toggle_filter(self, option: FilterSelection) -> "CatalogState":
        return self.model_copy(update={"selected": tuple(filters.toggle_selection(self.selected, option))})

    def remove_filter(self, value: Scalar) -> "CatalogState":
        return self.model_copy(update={"selected": tuple(filters.remove_selection(self.selected, value))})

    def clear_filters(self) -> "CatalogState":
        return self.model_copy(update={"selected": ()})

    def with_sort_key(self, key: Optional[str]) -> "CatalogState":
        if key is not None and key not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {key}")
        return self.model_copy(update={"sort_key": key})

    def with_sort_direction(self, direction: Optional[str]) -> "CatalogState":
        if direction not in (None, "asc", "desc"):
            raise ValueError(f"Unknown sort direction: {direction}")
        return self.model_copy(update={"sort_direction": direction})

    def with_page_size(self, page_size: int) -> "CatalogState":
        if page_size < 1:
            raise ValueError("Page size must be positive")
        return self.model_copy(update={"page_size": page_size})

    def with_page(self, page: int) -> "CatalogState":
        if page < 1:
            raise ValueError("Page numbers start at 1")
        return self.model_copy(update={"page": page})

    def toggle_filter_panel(self) -> "CatalogState":
        return self.model_copy(update={"filters_open": not self.filters_open})
