"""Core engine package for cribbage."""

__all__ = [
    "cards",
    "deck",
    "pegging",
    "show",
    "protocol",
    "channel",
    "state",
    "game",
    "config",
]
