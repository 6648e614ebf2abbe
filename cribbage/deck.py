"""Deck creation and drawing for cribbage."""

from __future__ import annotations

from random import Random
from typing import List, Optional

from .cards import Card, RANK_ORDER, SUIT_ORDER

DECK_SIZE = 52


class InsufficientCards(RuntimeError):
    """Raised when a draw asks for more cards than the deck holds."""


def build_deck() -> List[Card]:
    """Return the ordered 52-card deck."""
    return [Card(rank, suit) for suit in SUIT_ORDER for rank in RANK_ORDER]


class Deck:
    """Shuffled draw-without-replacement deck. Cards are drawn from the end."""

    def __init__(self, *, rng: Optional[Random] = None) -> None:
        self._cards = build_deck()
        self._rng = rng if rng is not None else Random()

    def __len__(self) -> int:
        return len(self._cards)

    def remaining(self) -> int:
        return len(self._cards)

    def cards(self) -> List[Card]:
        return list(self._cards)

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        if not self._cards:
            raise InsufficientCards("Cannot draw from an empty deck.")
        return self._cards.pop()

    def draw_n(self, n: int) -> List[Card]:
        if n < 0:
            raise ValueError("Cannot draw a negative number of cards.")
        if n > len(self._cards):
            raise InsufficientCards(f"Cannot draw {n} cards; only {len(self._cards)} remain.")
        if n == 0:
            return []
        drawn = self._cards[-n:]
        del self._cards[-n:]
        drawn.reverse()
        return drawn


def shuffled_deck(rng: Optional[Random] = None) -> Deck:
    deck = Deck(rng=rng)
    deck.shuffle()
    return deck
