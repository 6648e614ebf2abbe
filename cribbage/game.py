"""Turn-driven cribbage game orchestration."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum, auto
from random import Random
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .cards import Card, Rank
from .channel import Channel, ChannelClosed
from .config import GameConfig
from .pegging import MAX_COUNT, score_the_play
from .protocol import Deal, Discard, GameAction, GameEvent, Play, PlayRequest
from .show import show_breakdown
from .state import (
    DEAL_SIZE,
    PLAYERS_SIZE,
    InvalidAction,
    RoundState,
    Seat,
)

logger = logging.getLogger(__name__)

HEELS_POINTS = 2


class GamePhase(Enum):
    AWAITING_PLAYERS = auto()
    DEAL = auto()
    DISCARD = auto()
    CUT = auto()
    PLAY = auto()
    SHOW = auto()
    CLEANUP = auto()
    OVER = auto()


class GameFull(RuntimeError):
    """Raised when a third player tries to join."""


class NotEnoughPlayers(RuntimeError):
    """Raised when the game is started before two players joined."""


@dataclass(frozen=True)
class ScoreEvent:
    player: int
    points: int
    reason: str
    total: int


@dataclass(frozen=True)
class GameResult:
    names: Tuple[str, ...]
    scores: Tuple[int, ...]
    winner: Optional[int]
    aborted: bool
    rounds: int


def _cards(cards: Sequence[Card]) -> str:
    return " ".join(str(card) for card in cards)


class Game:
    """Drive a two-player game over blocking player channels.

    The engine thread owns all round state. Players only ever see copies of
    cards inside protocol messages, and every action they send is validated
    against the current state before it is applied.
    """

    def __init__(self, config: Optional[GameConfig] = None) -> None:
        self.config = config or GameConfig()
        self.rng = Random(self.config.seed)
        self.seats: List[Seat] = []
        self.state: Optional[RoundState] = None
        self.phase = GamePhase.AWAITING_PLAYERS
        self.phase_history: List[GamePhase] = [self.phase]
        self.score_log: List[ScoreEvent] = []
        self.winner: Optional[int] = None
        self.aborted = False
        self.rounds = 0
        self._handlers: Dict[GamePhase, Callable[[], GamePhase]] = {
            GamePhase.DEAL: self._deal,
            GamePhase.DISCARD: self._discard,
            GamePhase.CUT: self._cut,
            GamePhase.PLAY: self._play,
            GamePhase.SHOW: self._show,
            GamePhase.CLEANUP: self._cleanup,
        }

    # Setup -------------------------------------------------------------

    def register_player(self, name: str, events: Channel[GameEvent]) -> Channel[GameAction]:
        """Seat a player and return the channel the engine reads its actions from."""
        if len(self.seats) == PLAYERS_SIZE:
            raise GameFull("Can't register more than two players.")
        if self.phase is not GamePhase.AWAITING_PLAYERS:
            raise RuntimeError("Players can only join before the game starts.")
        actions: Channel[GameAction] = Channel(1, name=f"{name}-actions")
        self.seats.append(Seat(name=name, events=events, actions=actions))
        logger.info("%s joins", name)
        return actions

    def start(self) -> GameResult:
        if len(self.seats) < PLAYERS_SIZE:
            raise NotEnoughPlayers("Two players are needed to start.")
        if self.phase is not GamePhase.AWAITING_PLAYERS:
            raise RuntimeError("Game already started.")

        dealer = self.config.first_dealer
        if dealer is None:
            dealer = self.rng.randrange(PLAYERS_SIZE)
        self.state = RoundState(seats=self.seats, dealer_index=dealer, rng=self.rng)
        logger.info("%s gets the first deal", self.state.dealer.name)

        try:
            self._run()
        except ChannelClosed as exc:
            logger.warning("Player disconnected, ending the game: %s", exc)
            self.aborted = True
            self.winner = None
            self._enter(GamePhase.OVER)
        finally:
            self._close_channels()
        return self.result()

    def result(self) -> GameResult:
        return GameResult(
            names=tuple(seat.name for seat in self.seats),
            scores=tuple(self.scores),
            winner=self.winner,
            aborted=self.aborted,
            rounds=self.rounds,
        )

    @property
    def scores(self) -> List[int]:
        return [seat.score for seat in self.seats]

    # Phase loop --------------------------------------------------------

    def _run(self) -> None:
        phase = GamePhase.DEAL
        while phase is not GamePhase.OVER:
            self._enter(phase)
            phase = self._handlers[phase]()
        self._enter(GamePhase.OVER)

    def _enter(self, phase: GamePhase) -> None:
        self.phase = phase
        self.phase_history.append(phase)

    def _require_state(self) -> RoundState:
        if self.state is None:
            raise RuntimeError("Game has not started.")
        return self.state

    def _deal(self) -> GamePhase:
        state = self._require_state()
        self.rounds += 1
        for index in (state.pone_index, state.dealer_index):
            state.seats[index].set_hand(state.deck.draw_n(DEAL_SIZE))
        logger.info("%s deals", state.dealer.name)
        for index in (state.pone_index, state.dealer_index):
            state.seats[index].events.send(self._deal_event(index))
        return GamePhase.DISCARD

    def _discard(self) -> GamePhase:
        state = self._require_state()
        for index in (state.pone_index, state.dealer_index):
            discarded = self._await_discard(index)
            state.crib.extend(discarded)
        return GamePhase.CUT

    def _cut(self) -> GamePhase:
        state = self._require_state()
        starter = state.deck.draw()
        state.starter = starter
        logger.info("%s cuts %s", state.seats[state.pone_index].name, starter)
        if starter.rank is Rank.JACK:
            logger.info("%s: 2 for his heels", state.dealer.name)
            if self._award(state.dealer_index, HEELS_POINTS, "his heels"):
                return GamePhase.OVER
        return GamePhase.PLAY

    def _play(self) -> GamePhase:
        state = self._require_state()
        state.player_index = state.pone_index
        state.reset_pegging()

        while not state.all_played_out():
            seat = state.player
            count = state.count()
            if seat.can_play(count):
                card = self._await_play(seat, count)
                state.played.append(card)
                state.last_player = state.player_index
                points = score_the_play(state.played)
                count = state.count()
                if points:
                    logger.info("%s: %s %d for %d", seat.name, card, count, points)
                else:
                    logger.info("%s: %s %d", seat.name, card, count)
                if self._award(state.player_index, points, "the play"):
                    return GamePhase.OVER

                if count == MAX_COUNT:
                    # The scorer already paid 2 for reaching 31.
                    state.reset_pegging()
                elif state.all_played_out():
                    logger.info("%s: 1 for last card", seat.name)
                    if self._award(state.player_index, 1, "last card"):
                        return GamePhase.OVER
                    state.reset_pegging()
            elif state.next_player.go:
                last = state.last_player
                if last is not None:
                    logger.info("%s: 1 for the go", state.seats[last].name)
                    if self._award(last, 1, "the go"):
                        return GamePhase.OVER
                state.reset_pegging()
            elif not seat.go:
                seat.go = True
                logger.info("%s: go", seat.name)

            state.switch_player()

        return GamePhase.SHOW

    def _show(self) -> GamePhase:
        state = self._require_state()
        assert state.starter is not None
        pone = state.pone_index
        shows = [
            (pone, state.seats[pone].hand, False, "hand"),
            (state.dealer_index, state.dealer.hand, False, "hand"),
            (state.dealer_index, state.crib, True, "crib"),
        ]
        for position, (index, cards, crib, label) in enumerate(shows):
            if position and self.config.show_delay:
                time.sleep(self.config.show_delay)
            breakdown = show_breakdown(cards, state.starter, crib=crib)
            logger.info(
                "%s %s: %s - %s for %d",
                state.seats[index].name,
                label,
                state.starter,
                _cards(cards),
                breakdown.total,
            )
            if self._award(index, breakdown.total, label):
                return GamePhase.OVER
        return GamePhase.CLEANUP

    def _cleanup(self) -> GamePhase:
        state = self._require_state()
        state.clear_round()
        return GamePhase.DEAL

    # Scoring -----------------------------------------------------------

    def _award(self, index: int, points: int, reason: str) -> bool:
        """Add points to a player; return True once the game is won."""
        if points <= 0:
            return False
        seat = self.seats[index]
        seat.score = min(seat.score + points, self.config.target_score)
        self.score_log.append(ScoreEvent(player=index, points=points, reason=reason, total=seat.score))
        logger.info(
            "SCORE %s",
            " ".join(f"{other.name}: {other.score}" for other in self.seats),
        )
        if seat.score >= self.config.target_score:
            self.winner = index
            logger.info("%s wins", seat.name)
            return True
        return False

    # Player exchange ---------------------------------------------------

    def _deal_event(self, index: int) -> Deal:
        state = self._require_state()
        return Deal(cards=tuple(state.seats[index].hand), dealer=index == state.dealer_index)

    def _await_discard(self, index: int) -> List[Card]:
        """Wait for a legal discard, re-issuing the deal after each bad answer."""
        seat = self.seats[index]
        while True:
            action = seat.actions.recv()
            if not isinstance(action, Discard):
                logger.debug("%s answered a deal with %r; asking again", seat.name, action)
            else:
                try:
                    return seat.discard(action.discarded)
                except InvalidAction as exc:
                    logger.debug("Rejected discard from %s: %s", seat.name, exc)
            seat.events.send(self._deal_event(index))

    def _await_play(self, seat: Seat, count: int) -> Card:
        state = self._require_state()
        request = PlayRequest(
            hand=tuple(seat.unplayed_cards()),
            played=tuple(state.played),
            count=count,
        )
        while True:
            seat.events.send(request)
            action = seat.actions.recv()
            if not isinstance(action, Play):
                logger.debug("%s answered a play request with %r; asking again", seat.name, action)
                continue
            try:
                seat.play(action.card, count)
            except InvalidAction as exc:
                logger.debug("Rejected play from %s: %s", seat.name, exc)
                continue
            return action.card

    def _close_channels(self) -> None:
        for seat in self.seats:
            seat.events.close()
            seat.actions.close()
