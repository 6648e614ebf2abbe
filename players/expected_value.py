"""Expected-value evaluation behind the AI player.

Everything here is a pure function of the cards involved, so discard and
play choices can be tested without threads or channels.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations
from typing import Iterable, List, Optional, Sequence, Tuple

from cribbage.cards import Card, count_total
from cribbage.deck import build_deck
from cribbage.pegging import playable_cards, score_the_play
from cribbage.show import HAND_SIZE, count_fifteens, count_pairs, count_runs, score_nobs, score_the_show

WeightedStarter = Tuple[Card, float]

RUN_GAP_LIMIT = 2
AVOID_COUNT = 10
LOW_COUNT = 5
HIGH_COUNT = 21

# Odds that both cards the opponent throws match a suited pair of discards.
CRIB_FLUSH_CHANCE = 11 / 52 * 10 / 52
CRIB_FLUSH_POINTS = 5

# Values are compared after rounding so float noise cannot split real ties.
_PRECISION = 9


@dataclass(frozen=True)
class DiscardOption:
    keep: Tuple[Card, ...]
    discard: Tuple[Card, ...]
    value: float
    count_total: int


def possible_starters(known: Iterable[Card]) -> List[WeightedStarter]:
    """Every card not in ``known`` paired with its chance of being cut."""
    seen = set(known)
    undrawn = [card for card in build_deck() if card not in seen]
    if not undrawn:
        return []
    weight = 1.0 / len(undrawn)
    return [(card, weight) for card in undrawn]


def combination_value(cards: Sequence[Card], starter: Card, *, crib: bool = False) -> float:
    """Points ``cards`` make with ``starter``.

    A full hand is scored by the show rules. Fewer cards (a pair of
    discards) are scored on fifteens, pairs, runs and nobs, which is what
    they can contribute to a crib once the starter is known. Suited
    discards headed for the crib also carry the small chance of a crib flush.
    """
    if len(cards) == HAND_SIZE:
        return score_the_show(cards, starter, crib=crib)
    pool = [*cards, starter]
    value = count_fifteens(pool) + count_pairs(pool) + count_runs(pool) + score_nobs(cards, starter)
    if crib and all(card.suit is starter.suit for card in cards):
        value += CRIB_FLUSH_POINTS * CRIB_FLUSH_CHANCE
    return value


def expected_value(cards: Sequence[Card], starters: Sequence[WeightedStarter], *, crib: bool = False) -> float:
    return sum(weight * combination_value(cards, starter, crib=crib) for starter, weight in starters)


def discard_options(cards: Sequence[Card]) -> List[Tuple[Tuple[Card, ...], Tuple[Card, ...]]]:
    """All ways to keep four of the dealt cards, in a stable order."""
    options = []
    for keep in combinations(cards, HAND_SIZE):
        discard = tuple(card for card in cards if card not in keep)
        options.append((keep, discard))
    return options


def evaluate_discards(cards: Sequence[Card], dealer: bool) -> List[DiscardOption]:
    starters = possible_starters(cards)
    results = []
    for keep, discard in discard_options(cards):
        value = expected_value(keep, starters)
        crib_value = expected_value(discard, starters, crib=True)
        value = value + crib_value if dealer else value - crib_value
        results.append(DiscardOption(keep=keep, discard=discard, value=value, count_total=count_total(keep)))
    return results


def choose_discard(cards: Sequence[Card], dealer: bool) -> DiscardOption:
    """Best split by expected value; ties prefer the lower kept count total."""
    if len(set(cards)) != len(cards) or len(cards) <= HAND_SIZE:
        raise ValueError("Discarding needs more than four distinct cards.")
    options = evaluate_discards(cards, dealer)
    ranked = sorted(
        enumerate(options),
        key=lambda item: (-round(item[1].value, _PRECISION), item[1].count_total, item[0]),
    )
    return ranked[0][1]


def play_heuristic(card: Card, played: Sequence[Card], count: int) -> int:
    """Score a card that earns nothing by how little it gives away."""
    if played:
        gap = abs(played[-1].run_order - card.run_order)
        if gap <= RUN_GAP_LIMIT:
            return -1
    new_count = count + card.count_value
    if new_count == AVOID_COUNT:
        return -1
    if new_count < LOW_COUNT or new_count >= HIGH_COUNT:
        return 1
    return 0


def rank_plays(hand: Sequence[Card], played: Sequence[Card], count: int) -> List[Tuple[Card, int]]:
    """Legal cards with their play score, best first."""
    candidates = playable_cards(hand, count)
    scored = [(card, score_the_play([*played, card])) for card in candidates]
    if not any(points for _, points in scored):
        scored = [(card, play_heuristic(card, played, count)) for card, _ in scored]
    # sorted() is stable, so equal cards keep their hand order.
    return sorted(scored, key=lambda item: (-item[1], -item[0].count_value))


def choose_play(hand: Sequence[Card], played: Sequence[Card], count: int) -> Optional[Card]:
    ranked = rank_plays(hand, played, count)
    if not ranked:
        return None
    return ranked[0][0]
