"""Filter-panel logic: facet discovery, option search, selection toggling
and the reduction of selections into a query predicate."""
from typing import Dict, Iterable, List, Optional, Sequence

from catalog_core.labels import facet_label
from catalog_core.models import FilterPredicate, FilterSelection, FilterType, Scalar

IN_OPERATOR = "_in"


def aggregate(selections: Iterable[FilterSelection]) -> FilterPredicate:
    """Group selections by key into ``{key: {"_in": [values...]}}``.

    Keys and values keep first-inserted order. Values are not deduplicated;
    the toggle logic keeps duplicates out of the selection list.
    """
    predicate: FilterPredicate = {}
    for selection in selections:
        predicate.setdefault(selection.key, {IN_OPERATOR: []})[IN_OPERATOR].append(selection.value)
    return predicate


def is_selected(selected: Sequence[FilterSelection], value: Scalar) -> bool:
    # uniqueness is tracked by value alone, across all keys
    return value in [s.value for s in selected]


def toggle_selection(selected: Sequence[FilterSelection], option: FilterSelection) -> List[FilterSelection]:
    """Checkbox behaviour: untick when the value is already selected, tick otherwise."""
    if is_selected(selected, option.value):
        return remove_selection(selected, option.value)
    return [*selected, option]


def remove_selection(selected: Sequence[FilterSelection], value: Scalar) -> List[FilterSelection]:
    return [s for s in selected if s.value != value]


def match_options(options: Sequence[FilterSelection], keyword: str) -> List[FilterSelection]:
    """Options whose value contains `keyword`, case-insensitively. Empty keyword keeps all."""
    needle = keyword.lower()
    return [o for o in options if needle in str(o.value).lower()]


def find_option(options: Sequence[FilterSelection], text: str) -> Optional[FilterSelection]:
    """Option whose value reads as `text` (case-insensitive), used by typed commands."""
    wanted = text.strip().lower()
    for option in options:
        if str(option.value).lower() == wanted:
            return option
    return None


def build_filter_types(data: Optional[Dict[str, list]], game: str, labels: dict) -> List[FilterType]:
    """Turn a FilterTypes response into the ordered list of filter categories.

    `data` maps each facet key to rows like ``[{"rarity": "Rare"}, ...]``.
    Facets without any value are left out of the panel.
    """
    filter_types = []
    for key, rows in (data or {}).items():
        if not rows:
            continue
        label = facet_label(labels, game, key)
        filter_types.append(FilterType(
            key=key,
            label=label,
            values=[FilterSelection(key=key, value=row[key], label=label) for row in rows],
        ))
    return filter_types
