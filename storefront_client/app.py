from catalog_core.labels import known_games, load_labels
from catalog_core.state import CatalogState
from client_logs.loggers import catalog_logger
from storefront_client.card_page import CardPage, card_detail_menu
from storefront_client.catalog_page import CatalogPage, catalog_menu
from storefront_client.client import GraphQLClient, SubscriptionClient
from storefront_client.config import ClientConfig
from storefront_client.sources import LiveSource, StaticSource
from storefront_client.utils.pretty_display import print_border, print_info, print_startup_message


def build_pages(config: ClientConfig, labels: dict):
    """Create the catalog and card pages on top of one HTTP client and one socket."""
    client = GraphQLClient(config.graphql_url, timeout=config.request_timeout)
    subscriptions = SubscriptionClient(config.ws_url)
    catalog = CatalogPage(
        filter_source=StaticSource(client),
        count_source=StaticSource(client, root_field="card_details_aggregate"),
        listing_source=LiveSource(subscriptions, root_field="card_details",
                                  connect_timeout=config.connect_timeout),
        labels=labels,
    )
    card_page = CardPage(StaticSource(client))
    return catalog, card_page


def choose_game(games: list, current: str) -> str:
    print_border()
    print("Games:")
    for i, game in enumerate(games, start=1):
        marker = "*" if game == current else " "
        print(f" {marker}{i}. {game}")
    print_border()
    choice = input(f"Enter 1-{len(games)} (or 0 to keep {current}): ")
    try:
        idx = int(choice)
    except ValueError:
        print("Invalid input.")
        return current
    if 1 <= idx <= len(games):
        return games[idx - 1]
    return current


def main():
    config = ClientConfig.from_env()
    labels = load_labels()
    games = known_games(labels)
    game = config.game
    catalog, card_page = build_pages(config, labels)

    catalog_logger.info("client_started", graphql_url=config.graphql_url, game=game)
    print_border()
    print("Storefront v 1.0.0")
    print_startup_message(game)

    while True:
        switch_case = {
            '1': 'Browse Catalog',
            '2': 'Choose Game',
            '3': 'Open Card by ID',
            '4': 'Exit'
        }
        print("\nOptions:")
        for key, value in switch_case.items():
            print(f"{key}. {value}")
        choice = input(f"Enter choice (1-{len(switch_case)}): ")

        match choice:
            case '1':
                # catalog state lives for one visit of the page
                state = CatalogState(game=game, page_size=config.page_size)
                final = catalog_menu(
                    catalog, state,
                    open_card=lambda card_id: card_detail_menu(card_page, card_id),
                    wait=config.connect_timeout,
                )
                game = final.game
                catalog.listing_source.close()
            case '2':
                game = choose_game(games, game)
                print_info(f"Browsing {game}")
            case '3':
                card_id = input("Card ID: ").strip()
                if card_id:
                    card_detail_menu(card_page, card_id)
            case '4':
                print("Goodbye!")
                break
            case _:
                print("Invalid choice.")


if __name__ == "__main__":
    main()
