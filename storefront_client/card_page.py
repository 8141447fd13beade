"""Card detail page: prices, text, collapsible attribute sections and similar cards."""
from dataclasses import dataclass, field, replace
from typing import List, Optional

from pydantic import ValidationError

from catalog_core.models import CardDetail, SimilarCard
from catalog_core.queries import CARD_BY_ID_QUERY
from client_logs.loggers import card_logger
from storefront_client.errors import GraphQLError
from storefront_client.utils.animations import color_rarity
from storefront_client.utils.pretty_display import format_price, print_border, print_stat_row

# (title, CardDetail attribute); a stat is listed only when its value is set
PROPERTY_FIELDS = (
    ("Type", "card_type"),
    ("Subtype", "subtype"),
    ("Kind", "kind"),
    ("Signet", "signet"),
    ("Home Site", "home"),
)
STAT_FIELDS = (
    ("Value", "cost"),
    ("Cost", "cost_text"),
    ("Attack", "attack"),
    ("Health", "defence"),
    ("Resistance", "resistance"),
    ("Site", "site"),
)
# always listed, even when empty
DETAIL_FIELDS = (
    ("Set", "set_code"),
    ("Card ID", "card_id"),
    ("Rarity", "rarity"),
)

SIMILAR_TITLE = "More cards like this one"


@dataclass(frozen=True)
class Section:
    title: str
    stats: tuple = ()
    open: bool = False


def _present_stats(detail: CardDetail, fields) -> tuple:
    stats = []
    for title, attr in fields:
        value = getattr(detail, attr)
        if value:
            stats.append((title, value))
    return tuple(stats)


def build_sections(detail: CardDetail, similar: List[SimilarCard]) -> List[Section]:
    """Collapsible sections in display order, with their initial open state."""
    return [
        Section("Properties", _present_stats(detail, PROPERTY_FIELDS), open=True),
        Section("Stats", _present_stats(detail, STAT_FIELDS)),
        Section("Details", tuple((title, getattr(detail, attr)) for title, attr in DETAIL_FIELDS)),
        Section(SIMILAR_TITLE, tuple((card.card_name or "Unnamed card", format_price(card.card_price)) for card in similar)),
    ]


def price_lines(detail: CardDetail) -> list:
    return [
        ("Current price", format_price(detail.price)),
        ("Foil price", format_price(detail.price_foil)),
        ("Other price", format_price(detail.price_other)),
    ]


@dataclass
class CardView:
    card_id: str
    detail: Optional[CardDetail] = None
    similar: List[SimilarCard] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)
    error: Optional[GraphQLError] = None

    def toggle(self, number: int) -> "CardView":
        """Open or collapse section `number` (1-based)."""
        if number < 1 or number > len(self.sections):
            raise ValueError(f"There is no section {number}")
        sections = list(self.sections)
        section = sections[number - 1]
        sections[number - 1] = replace(section, open=not section.open)
        return replace(self, sections=sections)


class CardPage:
    def __init__(self, source, logger=card_logger):
        self.source = source
        self.logger = logger

    def load(self, card_id: str) -> CardView:
        result = self.source.execute(CARD_BY_ID_QUERY, {"id": card_id})
        if result.error:
            return CardView(card_id=card_id, error=result.error)

        data = result.data or {}
        raw = data.get("card_generic_by_pk")
        try:
            similar = [SimilarCard.model_validate(row) for row in data.get("similar_cards") or []]
            detail = CardDetail.model_validate(raw) if raw else None
        except ValidationError as e:
            self.logger.error("card_failed", card_id=card_id, error=str(e))
            return CardView(
                card_id=card_id,
                error=GraphQLError(f"Unexpected card data from the server: {e.error_count()} bad field(s)"),
            )

        if detail is None:
            self.logger.warning("card_not_found", card_id=card_id)
            return CardView(card_id=card_id, similar=similar)

        self.logger.info("card_loaded", card_id=card_id, name=detail.name, similar=len(similar))
        return CardView(
            card_id=card_id,
            detail=detail,
            similar=similar,
            sections=build_sections(detail, similar),
        )


def render_card(view: CardView):
    print_border()
    if view.error:
        print(view.error.message)
        return
    if view.detail is None:
        print(f"Card {view.card_id} not found.")
        print_border()
        return

    detail = view.detail
    print(color_rarity(detail.title, detail.rarity))
    print_border()
    print_stat_row(price_lines(detail))
    print()

    if detail.text:
        print(detail.text)
    if detail.flavor_text:
        print(f"\"{detail.flavor_text}\"")
    print()

    for i, section in enumerate(view.sections, start=1):
        marker = "-" if section.open else "+"
        print(f"[{marker}] {i}. {section.title}")
        if not section.open:
            continue
        if section.title == SIMILAR_TITLE:
            for n, (name, price) in enumerate(section.stats, start=1):
                print(f"    {n}. {name}  {price}")
        else:
            print_stat_row(list(section.stats))
    print_border()


def parse_card_command(command: str):
    """Parse card page commands. Returns (command, args)."""
    command = command.strip().split()
    if not command:
        return None, None

    cmd = command[0].lower()

    if cmd in ('toggle', 'open'):
        if len(command) >= 2:
            try:
                return cmd, int(command[1])
            except ValueError:
                return 'invalid', f"{cmd} needs a number"
        return 'invalid', f"Usage: {cmd} <n>"

    elif cmd == 'help':
        return 'help', None

    elif cmd in ('back', 'exit'):
        return 'back', None

    return 'invalid', f"Unknown command: {cmd}"


def card_detail_menu(card_page: CardPage, card_id: str):
    """Interactive card page. 'open <n>' navigates to a similar card."""
    view = card_page.load(card_id)
    while True:
        render_card(view)
        if view.error or view.detail is None:
            return view

        user_input = input("Card> ")
        command, args = parse_card_command(user_input)

        if command == 'toggle':
            try:
                view = view.toggle(args)
            except ValueError as e:
                print(f"Error: {e}")
        elif command == 'open':
            if args < 1 or args > len(view.similar):
                print(f"Error: there is no similar card {args}")
                continue
            view = card_page.load(view.similar[args - 1].id)
        elif command == 'help':
            print("Commands: toggle <section>, open <similar card>, help, back")
        elif command == 'back':
            return view
        elif command == 'invalid':
            print(f"Error: {args}")
