"""Scoring for the show: a hand (or the crib) counted with the starter."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Sequence

from .cards import Card, Rank, count_total
from .pegging import FIFTEEN

HAND_SIZE = 4
MIN_RUN = 3


class ShowError(ValueError):
    """Raised when a show is requested for a malformed hand."""


@dataclass(frozen=True)
class ShowBreakdown:
    fifteens: int
    pairs: int
    runs: int
    flush: int
    nobs: int

    @property
    def total(self) -> int:
        return self.fifteens + self.pairs + self.runs + self.flush + self.nobs


def count_fifteens(cards: Sequence[Card]) -> int:
    """Two points for every combination of two or more cards totalling 15."""
    score = 0
    for size in range(2, len(cards) + 1):
        for combo in combinations(cards, size):
            if count_total(combo) == FIFTEEN:
                score += 2
    return score


def count_pairs(cards: Sequence[Card]) -> int:
    return sum(2 for a, b in combinations(cards, 2) if a.rank is b.rank)


def _is_run(cards: Sequence[Card]) -> bool:
    orders = sorted(card.run_order for card in cards)
    return orders == list(range(orders[0], orders[0] + len(orders)))


def count_runs(cards: Sequence[Card]) -> int:
    """Score every distinct combination forming the longest run.

    Shorter runs inside a longer one are not counted, while paired ranks
    inside the longest run multiply it (double and triple runs).
    """
    for size in range(len(cards), MIN_RUN - 1, -1):
        runs = sum(1 for combo in combinations(cards, size) if _is_run(combo))
        if runs:
            return runs * size
    return 0


def score_flush(hand: Sequence[Card], starter: Card, *, crib: bool = False) -> int:
    if len(hand) < HAND_SIZE:
        return 0
    suit = hand[0].suit
    if any(card.suit is not suit for card in hand[1:]):
        return 0
    if starter.suit is suit:
        return len(hand) + 1
    # A crib only counts a flush when the starter matches as well.
    return 0 if crib else len(hand)


def score_nobs(hand: Sequence[Card], starter: Card) -> int:
    for card in hand:
        if card.rank is Rank.JACK and card.suit is starter.suit:
            return 1
    return 0


def show_breakdown(hand: Sequence[Card], starter: Card, *, crib: bool = False) -> ShowBreakdown:
    if len(hand) != HAND_SIZE:
        raise ShowError(f"A show needs exactly {HAND_SIZE} cards, got {len(hand)}.")
    if starter in hand or len(set(hand)) != len(hand):
        raise ShowError("Show cards must be distinct.")
    cards = [*hand, starter]
    return ShowBreakdown(
        fifteens=count_fifteens(cards),
        pairs=count_pairs(cards),
        runs=count_runs(cards),
        flush=score_flush(hand, starter, crib=crib),
        nobs=score_nobs(hand, starter),
    )


def score_the_show(hand: Sequence[Card], starter: Card, *, crib: bool = False) -> int:
    """Return the total points for a 4-card hand or crib with the starter."""
    return show_breakdown(hand, starter, crib=crib).total
