#!/usr/bin/env python3
"""Interactive CLI to play a game of cribbage against the AI."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from cribbage.config import GameConfig, configure_logging, get_settings
from players.ai_player import AIPlayer
from players.match import play_game
from players.prompt_player import PromptPlayer


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play cribbage against the AI.")
    parser.add_argument("--name", default="You", help="Your name at the table.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--show-delay", type=float, default=2.0, help="Seconds between show announcements.")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    settings = get_settings()
    configure_logging()
    human = PromptPlayer(name=args.name)
    ai = AIPlayer(name="CPU", delay=settings.think_delay(1.0))
    config = GameConfig(seed=args.seed, show_delay=args.show_delay)

    result = play_game([human, ai], config)
    print(f"\nFinal scores -> {result.names[0]}: {result.scores[0]}, {result.names[1]}: {result.scores[1]}")
    if result.aborted:
        print("Game abandoned.")
    elif result.winner == 0:
        print("Congratulations, you won!")
    else:
        print("The AI wins this game.")


if __name__ == "__main__":
    main()
