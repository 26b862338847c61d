"""Board palette."""

from typing import Optional


class BoardColors:
    BACKGROUND = "#f3f6f8"
    TEXT_PRIMARY = "#1a3a3a"
    TEXT_MUTED = "#78909c"

    SLOT_EMPTY = "#ffffff"
    SLOT_FILLED = "#e0f2f1"
    PAIR_CORRECT = "#69f0ae"
    PAIR_WRONG = "#ff8a65"

    WORD_CARD = "#4fb3bf"


def slot_color(filled: bool, result: Optional[bool]) -> str:
    """Fill colour for a slot given whether it holds a word and its pair's feedback."""
    if result is True:
        return BoardColors.PAIR_CORRECT
    if result is False:
        return BoardColors.PAIR_WRONG
    return BoardColors.SLOT_FILLED if filled else BoardColors.SLOT_EMPTY
