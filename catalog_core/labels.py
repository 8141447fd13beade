import json
from pathlib import Path
from typing import Optional

def load_labels(path: Optional[str] = None) -> dict:
    """
    Load facet display labels, keyed by game then facet key.

    :param path: Optional path to a labels JSON file. Defaults to the
        ``labels.json`` shipped next to this module.
    """
    if path is None:
        full_path = Path(__file__).parent.resolve() / "labels.json"
    else:
        full_path = Path(path)

    with open(full_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def facet_label(labels: dict, game: str, key: str) -> str:
    """Label for a facet of a game; unknown games or keys get the title-cased key."""
    return labels.get(game, {}).get(key) or key.replace("_", " ").title()


def known_games(labels: dict) -> list:
    return sorted(labels)
