"""Text-prompt player for interactive games."""

from __future__ import annotations

from typing import Callable, List, Sequence

from cribbage.cards import Card
from cribbage.pegging import is_legal_play
from cribbage.protocol import Deal, Discard, GameAction, GameEvent, Play, PlayRequest
from cribbage.state import DISCARD_SIZE

from .base import PlayerQuit


def _numbered(cards: Sequence[Card]) -> str:
    return "  ".join(f"[{index}] {card}" for index, card in enumerate(cards))


class PromptPlayer:
    name = "You"

    def __init__(
        self,
        name: str = "You",
        *,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        self.name = name
        self._input = input_fn
        self._output = output_fn

    def respond(self, event: GameEvent) -> GameAction:
        if isinstance(event, Deal):
            return Discard(discarded=tuple(self._select_discard(event)))
        if isinstance(event, PlayRequest):
            return Play(card=self._select_play(event))
        raise TypeError(f"Unexpected event {event!r}")

    def _ask(self, prompt: str) -> str:
        try:
            answer = self._input(prompt).strip()
        except EOFError as exc:
            raise PlayerQuit(self.name) from exc
        if answer.lower() == "q":
            raise PlayerQuit(self.name)
        return answer

    def _select_discard(self, event: Deal) -> List[Card]:
        whose_crib = "your crib" if event.dealer else "their crib"
        cards = list(event.cards)
        self._output(_numbered(cards))
        while True:
            answer = self._ask(f"Select {DISCARD_SIZE} cards to discard to {whose_crib} (q to quit): ")
            choices = answer.replace(",", " ").split()
            if len(choices) != DISCARD_SIZE or not all(choice.isdigit() for choice in choices):
                self._output(f"Select {DISCARD_SIZE} cards by number.")
                continue
            indices = {int(choice) for choice in choices}
            if len(indices) != DISCARD_SIZE or any(index >= len(cards) for index in indices):
                self._output("Invalid choice. Try again.")
                continue
            return [cards[index] for index in sorted(indices)]

    def _select_play(self, event: PlayRequest) -> Card:
        if event.played:
            self._output(f"Played: {' '.join(str(card) for card in event.played)} (count {event.count})")
        cards = list(event.hand)
        self._output(_numbered(cards))
        while True:
            answer = self._ask("Select a card to play (q to quit): ")
            if not answer.isdigit() or int(answer) >= len(cards):
                self._output("Please enter the number of a card in your hand.")
                continue
            card = cards[int(answer)]
            if not is_legal_play(card, event.count):
                self._output("That card can't be played.")
                continue
            return card
