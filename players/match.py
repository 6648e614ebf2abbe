"""Wire player drivers to a game and run matches between them."""

from __future__ import annotations

import argparse
import logging
import threading
from typing import Dict, Iterable, List, Optional, Sequence

from cribbage.channel import Channel
from cribbage.config import GameConfig, configure_logging, get_settings
from cribbage.game import Game, GameResult

from .ai_player import AIPlayer
from .base import PlayerDriver, run_player
from .random_player import RandomPlayer

logger = logging.getLogger(__name__)

PLAYER_REGISTRY: Dict[str, type] = {
    "ai": AIPlayer,
    "random": RandomPlayer,
}


def play_game(drivers: Sequence[PlayerDriver], config: Optional[GameConfig] = None) -> GameResult:
    """Run one game with each driver on its own worker thread."""
    game = Game(config)
    workers: List[threading.Thread] = []
    for driver in drivers:
        events: Channel = Channel(1, name=f"{driver.name}-events")
        actions = game.register_player(driver.name, events)
        workers.append(
            threading.Thread(
                target=run_player,
                args=(driver, events, actions),
                daemon=True,
                name=f"player-{driver.name}",
            )
        )
    for worker in workers:
        worker.start()
    result = game.start()
    for worker in workers:
        worker.join()
    return result


def run_match(
    player_a: PlayerDriver,
    player_b: PlayerDriver,
    *,
    n_games: int = 1,
    seed: Optional[int] = None,
    target_score: Optional[int] = None,
) -> dict:
    wins = [0, 0]
    history = []
    for idx in range(n_games):
        config = GameConfig(
            seed=None if seed is None else seed + idx,
            first_dealer=idx % 2,
            **({"target_score": target_score} if target_score is not None else {}),
        )
        result = play_game([player_a, player_b], config)
        logger.info("Game %d finished after %d rounds: %s", idx + 1, result.rounds, result.scores)
        if result.winner is not None:
            wins[result.winner] += 1
        history.append(
            {
                "scores": result.scores,
                "winner": result.winner,
                "rounds": result.rounds,
                "aborted": result.aborted,
            }
        )
    return {"wins": wins, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a cribbage match between two computer players.")
    parser.add_argument("--player-a", default="ai", choices=PLAYER_REGISTRY.keys())
    parser.add_argument("--player-b", default="ai", choices=PLAYER_REGISTRY.keys())
    parser.add_argument("--n", type=int, default=1, help="Number of games to play.")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default=None, help="Overrides CRIBBAGE_LOG_LEVEL.")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    player_a = PLAYER_REGISTRY[args.player_a](name="CPU")
    player_b = PLAYER_REGISTRY[args.player_b](name="T-800")
    settings = get_settings()
    for player in (player_a, player_b):
        if isinstance(player, AIPlayer):
            player.delay = settings.think_delay()

    results = run_match(player_a, player_b, n_games=args.n, seed=args.seed)
    print(f"Wins after {args.n} games: {player_a.name} {results['wins'][0]} - {player_b.name} {results['wins'][1]}")


if __name__ == "__main__":
    main()
