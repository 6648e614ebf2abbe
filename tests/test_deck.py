from random import Random

import pytest

from cribbage.cards import Card, Rank, Suit
from cribbage.deck import DECK_SIZE, Deck, InsufficientCards, build_deck


def test_build_deck_has_52_unique_cards_in_canonical_order():
    cards = build_deck()
    assert len(cards) == DECK_SIZE
    assert len(set(cards)) == DECK_SIZE
    assert cards[0] == Card(Rank.ACE, Suit.CLUBS)
    assert cards[12] == Card(Rank.KING, Suit.CLUBS)
    assert cards[-1] == Card(Rank.KING, Suit.SPADES)
    assert cards == sorted(cards)


def test_draw_n_removes_exactly_k_distinct_cards():
    deck = Deck(rng=Random(3))
    deck.shuffle()
    hand = deck.draw_n(6)
    assert len(hand) == 6
    assert len(set(hand)) == 6
    assert deck.remaining() == DECK_SIZE - 6
    assert not set(hand) & set(deck.cards())


def test_draw_n_too_many_leaves_deck_untouched():
    deck = Deck()
    deck.draw_n(50)
    before = deck.cards()
    with pytest.raises(InsufficientCards):
        deck.draw_n(3)
    assert deck.cards() == before
    assert len(deck) == 2


def test_draw_from_empty_deck_fails():
    deck = Deck()
    deck.draw_n(DECK_SIZE)
    with pytest.raises(InsufficientCards):
        deck.draw()


def test_draw_takes_from_the_end():
    deck = Deck()
    assert deck.draw() == Card(Rank.KING, Suit.SPADES)
    assert deck.draw_n(2) == [Card(Rank.QUEEN, Suit.SPADES), Card(Rank.JACK, Suit.SPADES)]


def test_seeded_shuffle_is_a_permutation_and_reproducible():
    first = Deck(rng=Random(11))
    second = Deck(rng=Random(11))
    first.shuffle()
    second.shuffle()
    assert first.cards() == second.cards()
    assert sorted(first.cards()) == build_deck()
