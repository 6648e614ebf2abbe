"""Scoring for the play (pegging)."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from .cards import Card, count_total

MAX_COUNT = 31
FIFTEEN = 15
MAX_RUN = 7


def running_count(played: Iterable[Card]) -> int:
    return count_total(played)


def is_legal_play(card: Card, count: int) -> bool:
    return card.count_value + count <= MAX_COUNT


def playable_cards(hand: Iterable[Card], count: int) -> List[Card]:
    """Return the cards that can be laid without pushing the count past 31."""
    return [card for card in hand if is_legal_play(card, count)]


def can_play(hand: Iterable[Card], count: int) -> bool:
    return any(is_legal_play(card, count) for card in hand)


def score_the_play(played: Sequence[Card]) -> int:
    """Return the points earned by the last card of the played sequence."""
    if not played:
        return 0
    return _score_count(played) + _score_matching(played) + _score_run(played)


def _score_count(played: Sequence[Card]) -> int:
    if running_count(played) in (FIFTEEN, MAX_COUNT):
        return 2
    return 0


def _score_matching(played: Sequence[Card]) -> int:
    # Longest group first so four of a kind is not also scored as a pair.
    for n in (4, 3, 2):
        if len(played) < n:
            continue
        if len({card.rank for card in played[-n:]}) == 1:
            return n * (n - 1)
    return 0


def _score_run(played: Sequence[Card]) -> int:
    for n in range(min(MAX_RUN, len(played)), 2, -1):
        orders = sorted(card.run_order for card in played[-n:])
        if orders == list(range(orders[0], orders[0] + n)):
            return n
    return 0
