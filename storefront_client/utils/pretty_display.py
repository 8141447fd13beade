# pretty print display stuff
from typing import Optional

def print_info(message: str):
    print(f"[INFO]: {message}")

def print_border(width: int = 40):
    print("=" * width)
    print()

def print_startup_message(game: str):
    print_border()
    print("Welcome to the Card Storefront!")
    print(f"Browsing: {game}")
    print("Please select an option to continue:")
    print_border()

def format_price(amount: Optional[float]) -> str:
    """US dollar formatting, missing prices read as $0.00."""
    return f"${amount or 0:,.2f}"

def format_stat(title: str, text) -> str:
    return f"{title}: {text}"

def print_stat_row(stats: list, per_row: int = 3, width: int = 24):
    """Print (title, text) pairs in rows of `per_row` columns."""
    for i in range(0, len(stats), per_row):
        row = stats[i:i + per_row]
        print("  " + "".join(format_stat(title, text).ljust(width) for title, text in row).rstrip())
