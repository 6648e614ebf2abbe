"""Expected-value AI player."""

from __future__ import annotations

import time

from cribbage.protocol import Deal, Discard, GameAction, GameEvent, Play, PlayRequest

from .expected_value import choose_discard, choose_play


class AIPlayer:
    name = "AI"

    def __init__(self, name: str = "AI", *, delay: float = 0.0) -> None:
        self.name = name
        self.delay = delay

    def respond(self, event: GameEvent) -> GameAction:
        if self.delay:
            time.sleep(self.delay)
        if isinstance(event, Deal):
            option = choose_discard(event.cards, event.dealer)
            return Discard(discarded=option.discard)
        if isinstance(event, PlayRequest):
            card = choose_play(event.hand, event.played, event.count)
            if card is None:
                raise RuntimeError("No legal plays available for the AI.")
            return Play(card=card)
        raise TypeError(f"Unexpected event {event!r}")
