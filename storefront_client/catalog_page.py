"""Catalog listing page: search, filter panel, sort, page size and pagination."""
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError

from catalog_core import pagination
from catalog_core.filters import build_filter_types, find_option, is_selected, match_options
from catalog_core.models import CardSummary, FilterType
from catalog_core.queries import CARD_LISTING_SUBSCRIPTION, FILTER_TYPES_QUERY, PAGINATION_COUNT_QUERY
from catalog_core.state import CatalogState, PAGE_SIZE_OPTIONS, SORT_KEYS
from client_logs.loggers import catalog_logger
from storefront_client.errors import GraphQLError
from storefront_client.sources import FetchResult
from storefront_client.utils.animations import skeleton_rows, spin_until
from storefront_client.utils.pretty_display import format_price, print_border, print_info

HELP_LINES = [
    "search <text>        - Search by name (empty to clear)",
    "filters              - Show/hide the filter panel",
    "options <n> [text]   - List the values of filter n, optionally matching text",
    "pick <n> <value>     - Tick/untick a value of filter n",
    "rm <value>           - Remove a selected filter",
    "clear                - Remove all selected filters",
    "sort <set|rarity|none>",
    "dir <asc|desc|none>",
    "show <10|20|50>      - Items per page",
    "page <n>, n, p       - Go to page n, next page, previous page",
    "game <name>          - Switch game (clears filters)",
    "open <n>             - Open card n of this page",
    "help, back",
]


@dataclass
class CatalogView:
    """Everything one render of the catalog shows."""
    state: CatalogState
    filter_types: List[FilterType] = field(default_factory=list)
    total_count: Optional[int] = None
    items: List[CardSummary] = field(default_factory=list)
    loading: bool = False
    error: Optional[GraphQLError] = None

    @property
    def page_count(self) -> Optional[int]:
        if self.total_count is None:
            return None
        return pagination.page_count(self.total_count, self.state.page_size)


def _positive_int(text: str, what: str) -> int:
    value = int(text)
    if value < 1:
        raise ValueError(f"{what} must be 1 or more")
    return value


def parse_catalog_command(command: str):
    """Parse a catalog command line. Returns (command, args)."""
    text = command.strip()
    parts = text.split()
    if not parts:
        return None, None

    cmd = parts[0].lower()
    rest = text[len(parts[0]):].strip()

    try:
        if cmd in ('search', 's'):
            return 'search', rest
        if cmd == 'filters':
            return 'filters', None
        if cmd == 'options':
            if not rest:
                return 'invalid', "Usage: options <n> [text]"
            number, _, keyword = rest.partition(' ')
            return 'options', (_positive_int(number, "Filter number"), keyword.strip())
        if cmd == 'pick':
            number, _, value = rest.partition(' ')
            if not number or not value.strip():
                return 'invalid', "Usage: pick <n> <value>"
            return 'pick', (_positive_int(number, "Filter number"), value.strip())
        if cmd == 'rm':
            if not rest:
                return 'invalid', "Usage: rm <value>"
            return 'remove', rest
        if cmd == 'clear':
            return 'clear', None
        if cmd == 'sort':
            key = rest.lower()
            if key == 'none':
                return 'sort', None
            if key in SORT_KEYS:
                return 'sort', key
            return 'invalid', f"Sort by one of: {', '.join(SORT_KEYS)}, none"
        if cmd == 'dir':
            direction = rest.lower()
            if direction == 'none':
                return 'dir', None
            if direction in ('asc', 'desc'):
                return 'dir', direction
            return 'invalid', "Direction must be asc, desc or none"
        if cmd == 'show':
            size = int(rest)
            if size not in PAGE_SIZE_OPTIONS:
                return 'invalid', f"Show one of: {', '.join(str(s) for s in PAGE_SIZE_OPTIONS)}"
            return 'show', size
        if cmd == 'page':
            return 'page', _positive_int(rest, "Page")
        if cmd in ('n', 'next'):
            return 'next', None
        if cmd in ('p', 'prev'):
            return 'prev', None
        if cmd == 'game':
            if not rest:
                return 'invalid', "Usage: game <name>"
            return 'game', rest.upper()
        if cmd == 'open':
            return 'open', _positive_int(rest, "Card number")
        if cmd == 'help':
            return 'help', None
        if cmd in ('back', 'exit'):
            return 'back', None
    except ValueError as e:
        return 'invalid', str(e) if "must" in str(e) else f"Expected a number for '{cmd}'"

    return 'invalid', f"Unknown command: {cmd}"


def _facet(filter_types: List[FilterType], number: int) -> FilterType:
    if number > len(filter_types):
        raise ValueError(f"There is no filter {number}")
    return filter_types[number - 1]


def apply_command(state: CatalogState, command: str, args, filter_types: List[FilterType] = (),
                  page_count: Optional[int] = None) -> CatalogState:
    """Return the state after a state-changing command.

    Raises ValueError when the command refers to something that does not
    exist (an unknown filter value, a missing filter number).
    """
    if command == 'search':
        return state.with_search(args)
    if command == 'filters':
        return state.toggle_filter_panel()
    if command == 'pick':
        number, value = args
        facet = _facet(filter_types, number)
        option = find_option(facet.values, value)
        if option is None:
            raise ValueError(f"{facet.label} has no value '{value}'")
        return state.toggle_filter(option)
    if command == 'remove':
        selection = find_option(state.selected, args)
        if selection is None:
            raise ValueError(f"'{args}' is not selected")
        return state.remove_filter(selection.value)
    if command == 'clear':
        return state.clear_filters()
    if command == 'sort':
        return state.with_sort_key(args)
    if command == 'dir':
        return state.with_sort_direction(args)
    if command == 'show':
        return state.with_page_size(args)
    if command == 'page':
        return state.with_page(args)
    if command == 'next':
        if page_count is not None and state.page >= page_count:
            return state
        return state.with_page(state.page + 1)
    if command == 'prev':
        if state.page <= 1:
            return state
        return state.with_page(state.page - 1)
    if command == 'game':
        return state.with_game(args)
    return state


class CatalogPage:
    """Wires the catalog state to its three data sources."""

    def __init__(self, filter_source, count_source, listing_source, labels: dict,
                 listing_document: str = CARD_LISTING_SUBSCRIPTION, logger=catalog_logger):
        self.filter_source = filter_source
        self.count_source = count_source
        self.listing_source = listing_source
        self.labels = labels
        self.listing_document = listing_document
        self.logger = logger

    def load_filter_types(self, game: str):
        """Filter categories for `game`. Returns (filter_types, fetch_result)."""
        result = self.filter_source.execute(FILTER_TYPES_QUERY, {"tcg": {"_eq": game}})
        if result.error:
            return [], result
        filter_types = build_filter_types(result.data, game, self.labels)
        self.logger.info("filter_types_loaded", game=game, facets=[f.key for f in filter_types])
        return filter_types, result

    def listing(self, state: CatalogState) -> FetchResult:
        return self.listing_source.execute(self.listing_document, state.variables().to_graphql())

    def total_count(self, state: CatalogState) -> FetchResult:
        return self.count_source.execute(PAGINATION_COUNT_QUERY, state.variables().count_variables())

    def load(self, state: CatalogState, filter_types: Optional[List[FilterType]] = None) -> CatalogView:
        count = self.total_count(state)
        listing = self.listing(state)

        total = None
        if count.data:
            total = count.data.get("aggregate", {}).get("count")

        error = listing.error or count.error
        try:
            items = [CardSummary.model_validate(row) for row in (listing.data or [])]
        except ValidationError as e:
            self.logger.error("listing_failed", game=state.game, page=state.page, error=str(e))
            items = []
            error = error or GraphQLError(f"Unexpected card listing from the server: {e.error_count()} bad field(s)")

        view = CatalogView(
            state=state,
            filter_types=list(filter_types or []),
            total_count=total,
            items=items,
            loading=listing.loading,
            error=error,
        )
        self.logger.info(
            "catalog_loaded",
            game=state.game,
            search=state.search,
            filters=len(state.selected),
            page=state.page,
            total=total,
            items=len(items),
            loading=view.loading,
            error=view.error.message if view.error else None,
        )
        return view


def render_catalog(view: CatalogView):
    state = view.state
    print_border()
    print(f"CATALOG - {state.game}")
    print_border()

    if view.error:
        print(view.error.message)
        return

    sort = "-"
    if state.sort_direction:
        sort = f"{state.sort_key or 'set'} {state.sort_direction}"
    print(f"Search: \"{state.search}\"   Order by: {sort}   Show: {state.page_size}")

    if state.filters_open and view.filter_types:
        print("Filters:")
        for i, facet in enumerate(view.filter_types, start=1):
            print(f"  {i}. {facet.label} ({len(facet.values)})")

    if view.total_count is not None:
        print(f"{view.total_count} items")

    if state.selected:
        print("Selected: " + "  ".join(f"[{s.chip}]" for s in state.selected) + "   (clear all: 'clear')")

    print()
    if view.loading:
        for row in skeleton_rows(state.page_size):
            print(f"  {row}")
    elif not view.items:
        print("  No cards on this page.")
    else:
        for i, item in enumerate(view.items, start=1):
            print(f"  {i}. {item.name or 'Unnamed card'}  [{item.set_name or '-'}]  {format_price(item.price)}")

    if view.page_count is not None:
        print()
        print(f"Page {state.page}/{view.page_count}")
    print_border()


def render_options(facet: FilterType, keyword: str, state: CatalogState):
    """Values of one filter category, with a tick for the selected ones."""
    options = match_options(facet.values, keyword)
    print_border()
    print(f"{facet.label} ({len(facet.values)})" + (f" matching \"{keyword}\"" if keyword else ""))
    print_border()
    for option in options:
        tick = "x" if is_selected(state.selected, option.value) else " "
        print(f"  [{tick}] {option.value}")
    if not options:
        print("  No values match.")
    print_border()


def catalog_menu(catalog: CatalogPage, state: CatalogState, open_card=None, wait: float = 3.0):
    """Interactive catalog loop. `open_card(card_id)` is called for 'open <n>'."""
    filter_types, filter_result = catalog.load_filter_types(state.game)
    if filter_result.error:
        print_info(f"Filters unavailable: {filter_result.error.message}")

    while True:
        # live listings push their first frame shortly after subscribing
        spin_until(lambda: not catalog.listing(state).loading, timeout=wait)
        view = catalog.load(state, filter_types)
        render_catalog(view)

        user_input = input("Catalog> ")
        command, args = parse_catalog_command(user_input)

        if command is None:
            continue
        if command == 'back':
            break
        if command == 'help':
            for line in HELP_LINES:
                print(f"  {line}")
            continue
        if command == 'invalid':
            print(f"Error: {args}")
            continue
        if command == 'options':
            number, keyword = args
            try:
                render_options(_facet(filter_types, number), keyword, state)
            except ValueError as e:
                print(f"Error: {e}")
            continue
        if command == 'open':
            if args > len(view.items):
                print(f"Error: there is no card {args} on this page")
                continue
            if open_card:
                open_card(view.items[args - 1].id)
            continue

        try:
            new_state = apply_command(state, command, args, filter_types, view.page_count)
        except ValueError as e:
            print(f"Error: {e}")
            continue

        if new_state.game != state.game:
            filter_types, filter_result = catalog.load_filter_types(new_state.game)
            if filter_result.error:
                print_info(f"Filters unavailable: {filter_result.error.message}")
        state = new_state

    return state
