from __future__ import annotations

from datetime import date

from mashup.core.models import MAX_TRIES, PAIR_COUNT

WIN_EMOJI = "\U0001F389"
LOSS_EMOJI = "\U0001F614"


def format_share_text(day: date, correct_count: int, tries_remaining: int) -> str:
    """Spoiler-free summary of a finished game for pasting into chats."""
    emoji = WIN_EMOJI if tries_remaining > 0 else LOSS_EMOJI
    attempts_used = MAX_TRIES - tries_remaining
    return (
        f"MashUp {day.isoformat()} {emoji}\n"
        f"Score: {correct_count}/{PAIR_COUNT}\n"
        f"Attempts: {attempts_used}/{MAX_TRIES}"
    )
