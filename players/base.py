"""Player driver contract and the worker loop that serves it."""

from __future__ import annotations

import logging
from typing import Protocol

from cribbage.channel import Channel, ChannelClosed
from cribbage.protocol import GameAction, GameEvent

logger = logging.getLogger(__name__)


class PlayerQuit(RuntimeError):
    """Raised by a driver whose player leaves the game."""


class PlayerDriver(Protocol):
    """Anything that can answer a game event with an action."""

    name: str

    def respond(self, event: GameEvent) -> GameAction:
        ...


def run_player(driver: PlayerDriver, events: Channel[GameEvent], actions: Channel[GameAction]) -> None:
    """Answer events until either channel disconnects.

    The worker closes both channels on the way out, so a driver that fails
    shows up to the engine as a disconnection rather than a stalled game.
    """
    try:
        while True:
            try:
                event = events.recv()
            except ChannelClosed:
                break
            try:
                action = driver.respond(event)
            except PlayerQuit:
                logger.info("%s leaves the game", driver.name)
                break
            try:
                actions.send(action)
            except ChannelClosed:
                break
    finally:
        events.close()
        actions.close()
        logger.debug("%s worker stopped", driver.name)
