"""Tests for the card detail page."""
from unittest.mock import MagicMock

import pytest

from catalog_core.models import CardDetail
from catalog_core.queries import CARD_BY_ID_QUERY
from storefront_client.card_page import (
    CardPage,
    SIMILAR_TITLE,
    build_sections,
    card_detail_menu,
    parse_card_command,
    price_lines,
    render_card,
)
from storefront_client.errors import GraphQLError
from storefront_client.sources import FetchResult

CARD = {
    "id": "11111111-1111-1111-1111-111111111111",
    "name": "Aragorn, Ranger of the North",
    "price": 4.25,
    "price_foil": 1234.5,
    "price_other": None,
    "card_img": "https://img.test/aragorn.png",
    "type": "Companion",
    "subtype": None,
    "set": "The Fellowship of the Ring",
    "rarity": "R",
    "card_id": 89,
    "set_code": "1",
    "cost": 4,
    "cost_text": None,
    "attack": 8,
    "defence": 4,
    "flavor_text": "Strider, they call him.",
    "kind": "Gondor",
    "text": "Ranger. Aragorn is strength +1 for each site you control.",
}

SIMILAR = [
    {"id": "s1", "card_name": "Arwen", "card_price": 2.0, "price_foil": None, "price_tng": None, "card_img": None},
    {"id": "s2", "card_name": "Boromir", "card_price": None, "price_foil": None, "price_tng": None, "card_img": None},
]


class FakeSource:
    def __init__(self, results):
        self.results = results
        self.calls = []

    def execute(self, document, variables):
        self.calls.append((document, variables))
        return self.results[variables["id"]]


def _page(results=None):
    results = results or {CARD["id"]: FetchResult(data={"card_generic_by_pk": CARD, "similar_cards": SIMILAR})}
    return CardPage(FakeSource(results), logger=MagicMock())


def test_card_title():
    detail = CardDetail.model_validate(CARD)
    assert detail.title == "Aragorn, Ranger of the North (#189) The Fellowship of the Ring"


def test_price_lines_format_usd():
    detail = CardDetail.model_validate(CARD)
    assert price_lines(detail) == [
        ("Current price", "$4.25"),
        ("Foil price", "$1,234.50"),
        ("Other price", "$0.00"),
    ]


def test_sections_only_list_present_stats():
    detail = CardDetail.model_validate(CARD)
    properties, stats, details, similar = build_sections(detail, [])
    assert properties.open is True
    assert properties.stats == (("Type", "Companion"), ("Kind", "Gondor"))
    assert stats.open is False
    assert stats.stats == (("Value", 4), ("Attack", 8), ("Health", 4))
    assert details.stats == (("Set", "1"), ("Card ID", 89), ("Rarity", "R"))
    assert similar.title == SIMILAR_TITLE
    assert similar.stats == ()


def test_load_card():
    page = _page()
    view = page.load(CARD["id"])
    assert view.error is None
    assert view.detail.name == "Aragorn, Ranger of the North"
    assert [s.card_name for s in view.similar] == ["Arwen", "Boromir"]
    assert view.sections[3].stats == (("Arwen", "$2.00"), ("Boromir", "$0.00"))
    assert page.source.calls == [(CARD_BY_ID_QUERY, {"id": CARD["id"]})]


def test_load_missing_card():
    view = _page({"nope": FetchResult(data={"card_generic_by_pk": None, "similar_cards": []})}).load("nope")
    assert view.detail is None
    assert view.error is None


def test_load_error():
    view = _page({"x": FetchResult(error=GraphQLError("invalid input syntax for type uuid"))}).load("x")
    assert view.error.message == "invalid input syntax for type uuid"


def test_load_accepts_integer_similar_ids():
    similar = [{"id": 17, "card_name": None, "card_price": 3.0}]
    view = _page({CARD["id"]: FetchResult(data={"card_generic_by_pk": CARD, "similar_cards": similar})}).load(CARD["id"])
    assert view.error is None
    assert view.similar[0].id == "17"
    assert view.sections[3].stats == (("Unnamed card", "$3.00"),)


def test_load_turns_unexpected_card_into_an_error():
    bad = dict(CARD, price="call for price")
    page = _page({"x": FetchResult(data={"card_generic_by_pk": bad, "similar_cards": []})})
    view = page.load("x")

    assert view.detail is None
    assert view.error.message.startswith("Unexpected card data")
    assert page.logger.error.call_args[0][0] == "card_failed"


def test_card_detail_menu_shows_unexpected_data_and_returns(monkeypatch, capsys):
    page = _page({"x": FetchResult(data={"card_generic_by_pk": {"name": "No id"}, "similar_cards": []})})
    monkeypatch.setattr("builtins.input", lambda prompt="": "back")
    view = card_detail_menu(page, "x")
    assert "Unexpected card data" in capsys.readouterr().out
    assert view.error is not None


def test_toggle_sections():
    view = _page().load(CARD["id"])
    toggled = view.toggle(2)
    assert toggled.sections[1].open is True
    assert view.sections[1].open is False
    assert toggled.toggle(1).sections[0].open is False
    with pytest.raises(ValueError):
        view.toggle(9)


def test_render_card(capsys):
    render_card(_page().load(CARD["id"]))
    out = capsys.readouterr().out
    assert "Aragorn, Ranger of the North (#189)" in out
    assert "Foil price: $1,234.50" in out
    assert "\"Strider, they call him.\"" in out
    assert "[-] 1. Properties" in out
    assert "Type: Companion" in out
    assert "[+] 2. Stats" in out
    assert "Attack: 8" not in out


def test_render_card_error_verbatim(capsys):
    render_card(_page({"x": FetchResult(error=GraphQLError("network down"))}).load("x"))
    assert "network down" in capsys.readouterr().out


@pytest.mark.parametrize("line, expected", [
    ("", (None, None)),
    ("toggle 2", ("toggle", 2)),
    ("open 1", ("open", 1)),
    ("help", ("help", None)),
    ("exit", ("back", None)),
])
def test_parse_card_command(line, expected):
    assert parse_card_command(line) == expected


@pytest.mark.parametrize("line", ["toggle", "open x", "buy"])
def test_parse_card_command_invalid(line):
    assert parse_card_command(line)[0] == "invalid"


def test_card_detail_menu_navigates_to_similar_card(monkeypatch, capsys):
    arwen = dict(CARD, id="s1", name="Arwen, Elven Princess")
    page = _page({
        CARD["id"]: FetchResult(data={"card_generic_by_pk": CARD, "similar_cards": SIMILAR}),
        "s1": FetchResult(data={"card_generic_by_pk": arwen, "similar_cards": []}),
    })
    inputs = iter(["toggle 2", "open 5", "open 1", "back"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(inputs))

    view = card_detail_menu(page, CARD["id"])

    assert view.detail.name == "Arwen, Elven Princess"
    out = capsys.readouterr().out
    assert "Attack: 8" in out
    assert "there is no similar card 5" in out


def test_card_detail_menu_returns_on_error(monkeypatch):
    page = _page({"x": FetchResult(error=GraphQLError("boom"))})
    monkeypatch.setattr("builtins.input", lambda prompt="": pytest.fail("should not prompt"))
    assert card_detail_menu(page, "x").error.message == "boom"
