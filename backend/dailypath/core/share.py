"""Share Text — pure formatting of a finished day for sharing.

Invariants:
    - One square per slot: correct → 🟩, anything else (wrong, skipped, empty) → 🟥
    - Score rating emoji chosen by 100-point band; 1400+ is the top band
"""

from collections.abc import Sequence

from dailypath.core.game_calendar import format_short
from dailypath.core.session_state import Guess

CORRECT_SQUARE = "🟩"
WRONG_SQUARE = "🟥"

# (exclusive upper bound, emoji), ascending
_SCORE_BANDS: tuple[tuple[int, str], ...] = (
    (100, "🫵🤣🫵"),
    (200, "💩"),
    (300, "🤡"),
    (400, "😐"),
    (500, "🤢"),
    (600, "😌"),
    (700, "👊"),
    (800, "👀"),
    (900, "👏"),
    (1000, "📈"),
    (1100, "🔥"),
    (1200, "🎯"),
    (1300, "🥇"),
    (1400, "🚀"),
)
_TOP_BAND = "🏆"


def score_emoji(total: int) -> str:
    for bound, emoji in _SCORE_BANDS:
        if total < bound:
            return emoji
    return _TOP_BAND


def emoji_summary(guesses: Sequence[Guess | None]) -> str:
    return "".join(
        CORRECT_SQUARE if g is not None and g.correct else WRONG_SQUARE
        for g in guesses
    )


def build_share_text(
    title: str,
    date_iso: str,
    guesses: Sequence[Guess | None],
    score: int,
    game_number: int | None = None,
    site_url: str | None = None,
) -> str:
    heading = f"{title} #{game_number}" if game_number else title
    correct = sum(1 for g in guesses if g is not None and g.correct)
    lines = [
        f"{heading} – {format_short(date_iso)}",
        "",
        emoji_summary(guesses),
        f"Score: {score} {score_emoji(score)}",
        f"{correct}/{len(guesses)}",
    ]
    if site_url:
        lines += ["", site_url]
    return "\n".join(lines)
