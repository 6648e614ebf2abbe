"""Player drivers for cribbage."""

from .ai_player import AIPlayer
from .prompt_player import PromptPlayer
from .random_player import RandomPlayer

__all__ = ["AIPlayer", "PromptPlayer", "RandomPlayer"]
