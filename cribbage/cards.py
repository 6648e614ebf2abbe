"""Card-related data structures and helpers for cribbage."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List


class Suit(Enum):
    CLUBS = auto()
    DIAMONDS = auto()
    HEARTS = auto()
    SPADES = auto()

    def __str__(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(Enum):
    ACE = auto()
    TWO = auto()
    THREE = auto()
    FOUR = auto()
    FIVE = auto()
    SIX = auto()
    SEVEN = auto()
    EIGHT = auto()
    NINE = auto()
    TEN = auto()
    JACK = auto()
    QUEEN = auto()
    KING = auto()

    def __str__(self) -> str:
        return RANK_SYMBOLS[self]


SUIT_ORDER: list[Suit] = [Suit.CLUBS, Suit.DIAMONDS, Suit.HEARTS, Suit.SPADES]

# Rank order from Ace (low) to King; doubles as the run order.
RANK_ORDER: list[Rank] = list(Rank)

RUN_ORDER: dict[Rank, int] = {rank: index for index, rank in enumerate(RANK_ORDER)}

# Counting values used for fifteens and the running count.
COUNT_VALUES: dict[Rank, int] = {rank: min(index + 1, 10) for index, rank in enumerate(RANK_ORDER)}

SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
    Suit.HEARTS: "♥",
    Suit.SPADES: "♠",
}

RANK_SYMBOLS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

_SUIT_LETTERS: dict[str, Suit] = {"C": Suit.CLUBS, "D": Suit.DIAMONDS, "H": Suit.HEARTS, "S": Suit.SPADES}
_SUIT_LETTERS.update({symbol: suit for suit, symbol in SUIT_SYMBOLS.items()})
_RANK_LETTERS: dict[str, Rank] = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}
_RANK_LETTERS["T"] = Rank.TEN
_RANK_LETTERS["1"] = Rank.ACE


@dataclass(frozen=True)
class Card:
    """Immutable representation of a playing card."""

    rank: Rank
    suit: Suit

    @property
    def count_value(self) -> int:
        return COUNT_VALUES[self.rank]

    @property
    def run_order(self) -> int:
        return RUN_ORDER[self.rank]

    def sort_key(self) -> tuple[int, int]:
        """Canonical deck order: by suit, then Ace..King."""
        return SUIT_ORDER.index(self.suit), RUN_ORDER[self.rank]

    def __lt__(self, other: "Card") -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"


def count_total(cards: Iterable[Card]) -> int:
    return sum(card.count_value for card in cards)


def parse_card(text: str) -> Card:
    """Parse short notation such as ``"5H"``, ``"10♠"`` or ``"qd"``."""
    token = text.strip().upper()
    if len(token) < 2:
        raise ValueError(f"Cannot parse card {text!r}.")
    rank_part, suit_part = token[:-1], token[-1]
    try:
        return Card(_RANK_LETTERS[rank_part], _SUIT_LETTERS[suit_part])
    except KeyError as exc:
        raise ValueError(f"Cannot parse card {text!r}.") from exc


def parse_cards(text: str) -> List[Card]:
    return [parse_card(token) for token in text.replace(",", " ").split()]

