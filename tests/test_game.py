import threading
from random import Random

import pytest

from cribbage.cards import Card, Rank, Suit, parse_cards
from cribbage.channel import Channel
from cribbage.config import GameConfig
from cribbage.game import Game, GameFull, GamePhase, NotEnoughPlayers
from cribbage.pegging import playable_cards
from cribbage.protocol import Deal, Discard, Play, PlayRequest
from cribbage.state import RoundState
from players.ai_player import AIPlayer
from players.base import PlayerQuit, run_player
from players.match import play_game
from players.random_player import RandomPlayer

ROUND = [
    GamePhase.DEAL,
    GamePhase.DISCARD,
    GamePhase.CUT,
    GamePhase.PLAY,
    GamePhase.SHOW,
    GamePhase.CLEANUP,
]


class FirstLegalPlayer:
    """Discards the first two cards and plays the first legal card."""

    def __init__(self, name):
        self.name = name

    def respond(self, event):
        if isinstance(event, Deal):
            return Discard(discarded=event.cards[:2])
        return Play(card=playable_cards(event.hand, event.count)[0])


class ConfusedPlayer(FirstLegalPlayer):
    """Answers every request with a few bad actions before a good one."""

    def __init__(self, name):
        super().__init__(name)
        self.requests = []
        self._attempts = 0

    def respond(self, event):
        self.requests.append(event)
        self._attempts += 1
        if isinstance(event, Deal):
            bad = [
                Play(card=event.cards[0]),
                Discard(discarded=event.cards[:1]),
                Discard(discarded=(event.cards[0], event.cards[0])),
                Discard(discarded=(event.cards[0], _unheld(event.cards))),
            ]
        else:
            bad = [
                Discard(discarded=event.hand[:2]),
                Play(card=_unheld(event.hand + event.played)),
            ]
        if self._attempts <= len(bad):
            return bad[self._attempts - 1]
        self._attempts = 0
        return super().respond(event)


class QuittingPlayer:
    name = "Quitter"

    def respond(self, event):
        raise PlayerQuit(self.name)


def _unheld(cards):
    for suit in Suit:
        for rank in Rank:
            card = Card(rank, suit)
            if card not in cards:
                return card
    raise AssertionError("no free card")


def _assert_round_structure(history):
    assert history[0] is GamePhase.AWAITING_PLAYERS
    assert history[-1] is GamePhase.OVER
    assert history.count(GamePhase.OVER) == 1
    body = history[1:-1]
    assert body
    for index, phase in enumerate(body):
        assert phase is ROUND[index % len(ROUND)]


def start_workers(game, drivers):
    workers = []
    for driver in drivers:
        events = Channel(1, name=f"{driver.name}-events")
        actions = game.register_player(driver.name, events)
        worker = threading.Thread(target=run_player, args=(driver, events, actions), daemon=True)
        worker.start()
        workers.append(worker)
    return workers


def stop_workers(game, workers):
    game._close_channels()
    for worker in workers:
        worker.join(timeout=5)


def test_ai_game_runs_to_121():
    result = play_game([AIPlayer("CPU"), AIPlayer("T-800")], GameConfig(seed=4, first_dealer=0))
    assert not result.aborted
    assert result.winner in (0, 1)
    assert result.scores[result.winner] == 121
    assert result.scores[1 - result.winner] < 121
    assert result.rounds >= 1


def test_round_transitions_and_no_scoring_after_the_win():
    game = Game(GameConfig(seed=9, target_score=61, first_dealer=1))
    workers = start_workers(game, [RandomPlayer("a", seed=1), RandomPlayer("b", seed=2)])
    result = game.start()
    for worker in workers:
        worker.join(timeout=5)

    _assert_round_structure(game.phase_history)
    assert result.scores[result.winner] == 61
    last = game.score_log[-1]
    assert last.player == result.winner
    assert last.total == 61
    assert all(event.total < 61 for event in game.score_log[:-1])


def test_invalid_actions_are_re_requested():
    confused = ConfusedPlayer("confused")
    game = Game(GameConfig(seed=3, target_score=31, first_dealer=0))
    workers = start_workers(game, [confused, FirstLegalPlayer("steady")])
    result = game.start()
    for worker in workers:
        worker.join(timeout=5)

    assert not result.aborted
    assert result.winner is not None
    deals = [event for event in confused.requests if isinstance(event, Deal)]
    assert len(deals) % 5 == 0
    assert all(deal == deals[0] for deal in deals[:5])
    plays = [event for event in confused.requests if isinstance(event, PlayRequest)]
    assert plays and len(plays) % 3 == 0


class UnhashableDiscardPlayer(FirstLegalPlayer):
    """First answers each deal with lists instead of cards."""

    def __init__(self, name):
        super().__init__(name)
        self.deals = 0

    def respond(self, event):
        if isinstance(event, Deal):
            self.deals += 1
            if self.deals % 2:
                return Discard(discarded=([event.cards[0]], [event.cards[1]]))
        return super().respond(event)


def test_discard_of_non_cards_is_re_requested():
    players = [UnhashableDiscardPlayer("a"), UnhashableDiscardPlayer("b")]
    game = Game(GameConfig(seed=5, target_score=31, first_dealer=1))
    workers = start_workers(game, players)
    result = game.start()
    for worker in workers:
        worker.join(timeout=5)

    assert not result.aborted
    assert result.winner in (0, 1)
    assert all(player.deals >= 2 and player.deals % 2 == 0 for player in players)


class WaitsForDealerPlayer(FirstLegalPlayer):
    """Holds its discard until the dealer has seen its own cards."""

    def __init__(self, name, dealer_dealt):
        super().__init__(name)
        self.dealer_dealt = dealer_dealt
        self.saw_dealer_deal = []

    def respond(self, event):
        if isinstance(event, Deal):
            self.saw_dealer_deal.append(self.dealer_dealt.wait(timeout=5))
        return super().respond(event)


class SignalsDealPlayer(FirstLegalPlayer):
    def __init__(self, name, dealer_dealt):
        super().__init__(name)
        self.dealer_dealt = dealer_dealt

    def respond(self, event):
        if isinstance(event, Deal):
            self.dealer_dealt.set()
        return super().respond(event)


def test_both_players_are_dealt_before_any_discard():
    dealer_dealt = threading.Event()
    pone = WaitsForDealerPlayer("pone", dealer_dealt)
    game = Game(GameConfig(seed=2, target_score=5, first_dealer=0))
    workers = start_workers(game, [SignalsDealPlayer("dealer", dealer_dealt), pone])
    result = game.start()
    for worker in workers:
        worker.join(timeout=5)

    assert not result.aborted
    assert pone.saw_dealer_deal
    assert pone.saw_dealer_deal[0] is True


def test_disconnect_aborts_without_a_winner():
    game = Game(GameConfig(seed=1, first_dealer=0))
    workers = start_workers(game, [QuittingPlayer(), FirstLegalPlayer("steady")])
    result = game.start()
    for worker in workers:
        worker.join(timeout=5)

    assert result.aborted
    assert result.winner is None
    assert result.scores == (0, 0)
    assert game.phase is GamePhase.OVER
    assert game.phase_history[-2:] == [GamePhase.DISCARD, GamePhase.OVER]


def test_registration_limits():
    game = Game()
    game.register_player("a", Channel(1))
    with pytest.raises(NotEnoughPlayers):
        game.start()
    game.register_player("b", Channel(1))
    with pytest.raises(GameFull):
        game.register_player("c", Channel(1))


def _setup_round(game, dealer_hand, pone_hand):
    game.state = RoundState(seats=game.seats, dealer_index=0, rng=Random(0))
    game.seats[0].set_hand(parse_cards(dealer_hand))
    game.seats[1].set_hand(parse_cards(pone_hand))


def test_pegging_thirty_one_and_last_card():
    game = Game()
    workers = start_workers(game, [FirstLegalPlayer("dealer"), FirstLegalPlayer("pone")])
    _setup_round(game, "KH QH 2H 3H", "KS QS 9S AS")
    try:
        assert game._play() is GamePhase.SHOW
    finally:
        stop_workers(game, workers)

    assert game.scores == [3, 2]
    assert [(event.player, event.points, event.reason) for event in game.score_log] == [
        (0, 2, "the play"),
        (1, 2, "the play"),
        (0, 1, "last card"),
    ]


def test_pegging_go_goes_to_the_last_player():
    game = Game()
    workers = start_workers(game, [FirstLegalPlayer("dealer"), FirstLegalPlayer("pone")])
    _setup_round(game, "10D KD 9H 8H", "10S 10H 5C 6C")
    try:
        assert game._play() is GamePhase.SHOW
    finally:
        stop_workers(game, workers)

    assert game.scores == [3, 10]
    reasons = [(event.player, event.reason) for event in game.score_log]
    assert reasons.count((1, "the go")) == 2
    assert reasons[-1] == (0, "last card")


def test_his_heels_pays_the_dealer():
    game = Game(GameConfig(target_score=2))
    workers = start_workers(game, [FirstLegalPlayer("dealer"), FirstLegalPlayer("pone")])
    game.state = RoundState(seats=game.seats, dealer_index=0, rng=Random(0))
    jack = Card(Rank.JACK, Suit.HEARTS)
    game.state.deck._cards.remove(jack)
    game.state.deck._cards.append(jack)

    assert game._cut() is GamePhase.OVER
    assert game.state.starter == jack
    assert game.scores == [2, 0]
    assert game.winner == 0
    stop_workers(game, workers)
