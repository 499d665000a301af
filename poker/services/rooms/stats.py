import math
from typing import Iterable, NamedTuple, Optional, Union

from poker.models import Player

Number = Union[int, float]


class VoteStats(NamedTuple):
    min_choice: Optional[Number] = None
    max_choice: Optional[Number] = None
    average_choice: Optional[int] = None


def _as_number(value) -> Optional[float]:
    if isinstance(value, bool) or not value:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _tidy(number: float) -> Number:
    if number.is_integer():
        return int(number)
    return number


def compute_stats(players: Iterable[Player]) -> VoteStats:
    """Min, max and rounded-up average over the numeric votes.

    Votes that do not parse as finite numbers ("?", "coffee") are skipped. With no
    numeric vote at all every field is None.
    """
    lowest = highest = None
    total = 0.0
    count = 0
    for player in players:
        number = _as_number(player.choice)
        if number is None:
            continue
        lowest = number if lowest is None else min(lowest, number)
        highest = number if highest is None else max(highest, number)
        total += number
        count += 1
    if count == 0:
        return VoteStats()
    return VoteStats(_tidy(lowest), _tidy(highest), math.ceil(total / count))
