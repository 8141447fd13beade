"""GraphQL documents sent by the storefront pages."""

# facet keys, in the order the filter panel lists them
FACET_KEYS = ("type", "subtype", "kind", "cost", "attack", "defence", "set", "rarity")

CARD_LISTING_FIELDS = ("id", "name", "price", "set", "image")

SIMILAR_CARDS_LIMIT = 6


def _facet_selection(key: str) -> str:
    return (
        f"  {key}: card_details(\n"
        f"    distinct_on: {key}\n"
        f"    where: {{ tcg: $tcg, {key}: {{ _is_null: false }} }}\n"
        f"  ) {{\n"
        f"    {key}\n"
        f"  }}\n"
    )


def filter_types_query(keys=FACET_KEYS) -> str:
    """One distinct-values selection per facet, aliased by the facet key."""
    body = "".join(_facet_selection(key) for key in keys)
    return "query FilterTypes($tcg: String_comparison_exp!) {\n" + body + "}\n"


FILTER_TYPES_QUERY = filter_types_query()

PAGINATION_COUNT_QUERY = """
query PaginationCount($where: card_details_bool_exp = {}) {
  card_details_aggregate(where: $where) {
    aggregate {
      count
    }
  }
}
"""

_CARD_LISTING_BODY = """(
  $where: card_details_bool_exp
  $order_by: [card_details_order_by!]
  $limit: Int
  $offset: Int
) {
  card_details(
    where: $where
    order_by: $order_by
    limit: $limit
    offset: $offset
  ) {
    %s
  }
}
""" % "\n    ".join(CARD_LISTING_FIELDS)

CARD_LISTING_SUBSCRIPTION = "subscription CardListing" + _CARD_LISTING_BODY

# same selection as a one-shot query, for sources that cannot hold a websocket
CARD_LISTING_QUERY = "query CardListing" + _CARD_LISTING_BODY

CARD_BY_ID_QUERY = """
query CardById($id: uuid!) {
  card_generic_by_pk(id: $id) {
    id
    name
    price
    price_foil
    price_other
    card_img: image
    type
    subtype
    set
    rarity
    card_id
    set_code
    cost
    cost_text
    attack
    defence
    flavor_text
    kind
    text: game_text
  }
  similar_cards: lotr_all_cards_pricing(limit: %d) {
    id
    card_name
    card_price
    price_foil
    price_tng
    card_img
  }
}
""" % SIMILAR_CARDS_LIMIT
