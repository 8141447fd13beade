import sys
import time

RED = '\033[31m'
GREEN = '\033[32m'
CYAN = '\033[36m'
MAGENTA = '\033[35m'
YELLOW = '\033[33m'
WHITE = '\033[37m'
GREY = '\033[90m'
BOLD = '\033[1m'
RESET = '\033[0m'
CLEAR_LINE = '\033[2K'
HIDE_CURSOR = '\033[?25l'
SHOW_CURSOR = '\033[?25h'

RARITY_COLORS = {
    'common': WHITE,
    'uncommon': GREEN,
    'rare': CYAN,
    'epic': MAGENTA,
    'legendary': YELLOW,
}

SPINNER_FRAMES = "|/-\\"

def color_rarity(text: str, rarity: str = None) -> str:
    """Wrap `text` in the color of `rarity` (case-insensitive); unknown rarities stay white."""
    color = RARITY_COLORS.get((rarity or 'common').lower(), WHITE)
    return f"{color}{text}{RESET}"

def skeleton_rows(count: int, width: int = 30) -> list[str]:
    """Placeholder rows shown while a listing is loading, one per expected card."""
    block = "░" * width
    return [f"{GREY}{block}{RESET}" for _ in range(count)]

def spin_until(is_done, timeout: float = 3.0, label: str = "Loading", delay: float = 0.1) -> bool:
    """Show a spinner until `is_done()` returns True or `timeout` seconds pass.

    Returns the last value of `is_done()`.
    """
    start = time.time()
    frame = 0
    print(HIDE_CURSOR, end='')
    try:
        while not is_done():
            if time.time() - start >= timeout:
                break
            sys.stdout.write(f"\r{CLEAR_LINE}{label} {SPINNER_FRAMES[frame % len(SPINNER_FRAMES)]}")
            sys.stdout.flush()
            frame += 1
            time.sleep(delay)
        if frame:
            sys.stdout.write(f"\r{CLEAR_LINE}")
            sys.stdout.flush()
    finally:
        print(SHOW_CURSOR, end='')
    return is_done()
