"""Tests for CatalogState transitions."""
import pytest

from catalog_core.models import FilterSelection
from catalog_core.state import CatalogState

RARE = FilterSelection(key="rarity", value="Rare", label="Rarity")
SPELL = FilterSelection(key="type", value="Spell", label="Type")


def test_defaults():
    state = CatalogState(game="LOTR")
    assert state.page == 1
    assert state.page_size == 48
    assert state.selected == ()
    assert state.filters_open is True


def test_transitions_return_new_states():
    state = CatalogState(game="LOTR")
    searched = state.with_search("ring")
    assert state.search == ""
    assert searched.search == "ring"


def test_toggle_and_remove_filters():
    state = CatalogState(game="LOTR").toggle_filter(RARE).toggle_filter(SPELL)
    assert state.predicate == {"rarity": {"_in": ["Rare"]}, "type": {"_in": ["Spell"]}}
    assert state.toggle_filter(RARE).selected == (SPELL,)
    assert state.remove_filter("Spell").selected == (RARE,)
    assert state.clear_filters().selected == ()


def test_changing_game_clears_filters():
    state = CatalogState(game="LOTR", search="orc").toggle_filter(RARE)
    switched = state.with_game("MTG")
    assert switched.game == "MTG"
    assert switched.selected == ()
    assert switched.search == "orc"


def test_sort_validation():
    state = CatalogState(game="LOTR")
    assert state.with_sort_key("rarity").sort_key == "rarity"
    assert state.with_sort_key("rarity").with_sort_key(None).sort_key is None
    with pytest.raises(ValueError):
        state.with_sort_key("price")
    with pytest.raises(ValueError):
        state.with_sort_direction("up")


def test_page_validation():
    state = CatalogState(game="LOTR")
    with pytest.raises(ValueError):
        state.with_page(0)
    with pytest.raises(ValueError):
        state.with_page_size(0)


def test_variables_follow_state():
    state = (CatalogState(game="LOTR")
             .with_search("sam")
             .toggle_filter(RARE)
             .with_sort_key("set")
             .with_sort_direction("desc")
             .with_page_size(20)
             .with_page(3))
    variables = state.variables().to_graphql()
    assert variables["where"]["name"] == {"_ilike": "%sam%"}
    assert variables["where"]["_or"] == {"rarity": {"_in": ["Rare"]}}
    assert variables["order_by"] == {"set": "desc"}
    assert variables["limit"] == 20
    assert variables["offset"] == 40
