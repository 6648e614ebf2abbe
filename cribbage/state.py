"""Round state owned by the game engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from random import Random
from typing import List, Optional, Sequence

from .cards import Card
from .channel import Channel
from .deck import Deck, shuffled_deck
from .pegging import can_play, playable_cards, running_count
from .protocol import GameAction, GameEvent

PLAYERS_SIZE = 2
DEAL_SIZE = 6
DISCARD_SIZE = 2


class InvalidAction(ValueError):
    """Raised when a player response does not fit the current legal state."""


@dataclass
class Seat:
    """One player's view from the engine: channels, score and cards."""

    name: str
    events: Channel[GameEvent]
    actions: Channel[GameAction]
    score: int = 0
    hand: List[Card] = field(default_factory=list)
    played: List[Card] = field(default_factory=list)
    go: bool = False

    def set_hand(self, cards: Sequence[Card]) -> None:
        self.hand = list(cards)
        self.played = []

    def unplayed_cards(self) -> List[Card]:
        return [card for card in self.hand if card not in self.played]

    def playable_cards(self, count: int) -> List[Card]:
        return playable_cards(self.unplayed_cards(), count)

    def can_play(self, count: int) -> bool:
        return can_play(self.unplayed_cards(), count)

    def played_out(self) -> bool:
        return len(self.played) == len(self.hand)

    def discard(self, cards: Sequence[Card]) -> List[Card]:
        """Remove two held cards from the hand and return them."""
        try:
            discarded = list(cards)
        except TypeError as exc:
            raise InvalidAction("Discard must list the cards sent to the crib.") from exc
        if not all(isinstance(card, Card) for card in discarded):
            raise InvalidAction("Discard must list the cards sent to the crib.")
        if len(discarded) != DISCARD_SIZE:
            raise InvalidAction(f"Exactly {DISCARD_SIZE} cards must be discarded.")
        if len(set(discarded)) != DISCARD_SIZE:
            raise InvalidAction("Discarded cards must be distinct.")
        if any(card not in self.hand for card in discarded):
            raise InvalidAction("Discarded cards must come from the current hand.")
        if len(self.hand) != DEAL_SIZE:
            raise InvalidAction("Cards can only be discarded from a freshly dealt hand.")
        self.set_hand([card for card in self.hand if card not in discarded])
        return discarded

    def play(self, card: Card, count: int) -> None:
        if card not in self.hand:
            raise InvalidAction(f"{card} is not held.")
        if card in self.played:
            raise InvalidAction(f"{card} has already been played.")
        if card not in self.playable_cards(count):
            raise InvalidAction(f"{card} would push the count past 31.")
        self.played.append(card)


@dataclass
class RoundState:
    """Everything that changes within a round, held only by the engine loop."""

    seats: List[Seat]
    dealer_index: int
    rng: Optional[Random] = None
    player_index: int = field(init=False)
    deck: Deck = field(init=False)
    crib: List[Card] = field(default_factory=list)
    starter: Optional[Card] = None
    played: List[Card] = field(default_factory=list)
    last_player: Optional[int] = None

    def __post_init__(self) -> None:
        if len(self.seats) != PLAYERS_SIZE:
            raise ValueError("RoundState supports exactly two players.")
        self.player_index = self.opponent(self.dealer_index)
        self.deck = shuffled_deck(self.rng)

    def opponent(self, index: int) -> int:
        return (index + 1) % PLAYERS_SIZE

    @property
    def dealer(self) -> Seat:
        return self.seats[self.dealer_index]

    @property
    def pone_index(self) -> int:
        return self.opponent(self.dealer_index)

    @property
    def player(self) -> Seat:
        return self.seats[self.player_index]

    @property
    def next_player(self) -> Seat:
        return self.seats[self.opponent(self.player_index)]

    def count(self) -> int:
        return running_count(self.played)

    def switch_player(self) -> None:
        self.player_index = self.opponent(self.player_index)

    def all_played_out(self) -> bool:
        return all(seat.played_out() for seat in self.seats)

    def reset_pegging(self) -> None:
        self.played = []
        self.last_player = None
        for seat in self.seats:
            seat.go = False

    def clear_round(self) -> None:
        """Rotate the deal and start the next round from a fresh deck."""
        self.dealer_index = self.opponent(self.dealer_index)
        self.player_index = self.opponent(self.dealer_index)
        self.deck = shuffled_deck(self.rng)
        self.crib = []
        self.starter = None
        self.reset_pegging()
        for seat in self.seats:
            seat.set_hand([])

    def cards_in_play(self) -> List[Card]:
        """All cards outside the deck: hands, crib and starter."""
        cards: List[Card] = []
        for seat in self.seats:
            cards.extend(seat.hand)
        cards.extend(self.crib)
        if self.starter is not None:
            cards.append(self.starter)
        return cards
