"""Messages exchanged between the game engine and player workers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple, Union

from .cards import Card


@dataclass(frozen=True)
class Deal:
    """Engine to player: the six dealt cards and whether the player deals."""

    cards: Tuple[Card, ...]
    dealer: bool


@dataclass(frozen=True)
class PlayRequest:
    """Engine to player: pick a card to lay down."""

    hand: Tuple[Card, ...]
    played: Tuple[Card, ...]
    count: int


@dataclass(frozen=True)
class Discard:
    """Player to engine: the two cards sent to the crib."""

    discarded: Tuple[Card, ...]


@dataclass(frozen=True)
class Play:
    """Player to engine: the card laid down."""

    card: Card


GameEvent = Union[Deal, PlayRequest]
GameAction = Union[Discard, Play]
