"""Random baseline player."""

from __future__ import annotations

import random
from typing import Optional

from cribbage.pegging import playable_cards
from cribbage.protocol import Deal, Discard, GameAction, GameEvent, Play, PlayRequest
from cribbage.state import DISCARD_SIZE


class RandomPlayer:
    name = "Random"

    def __init__(self, name: str = "Random", seed: Optional[int] = None) -> None:
        self.name = name
        self._rng = random.Random(seed)

    def respond(self, event: GameEvent) -> GameAction:
        if isinstance(event, Deal):
            return Discard(discarded=tuple(self._rng.sample(list(event.cards), DISCARD_SIZE)))
        if isinstance(event, PlayRequest):
            legal = playable_cards(event.hand, event.count)
            if not legal:
                raise RuntimeError("No legal plays available for the random player.")
            return Play(card=self._rng.choice(legal))
        raise TypeError(f"Unexpected event {event!r}")
