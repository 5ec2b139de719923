from __future__ import annotations

import random
from collections import Counter

import pytest

from vocabduel.engine.deck import build_deck, build_decks
from vocabduel.engine.match import MatchEngine
from vocabduel.engine.types import InsufficientVocabularyError, VocabularyPair

from conftest import make_vocab


@pytest.mark.parametrize("n", [1, 2, 4, 9])
def test_deck_has_two_cards_per_pair(n: int) -> None:
    deck1, deck2 = build_decks(random.Random(n), make_vocab(n))
    for player, deck in ((1, deck1), (2, deck2)):
        assert len(deck) == 2 * n
        counts = Counter(c.pair_id for c in deck)
        assert set(counts.values()) == {2}
        assert all(c.id.startswith(f"{player}-") for c in deck)
        assert all(not c.matched and not c.selected and c.transient_flag == "none" for c in deck)


def test_each_pair_has_word_and_meaning_face() -> None:
    deck = build_deck(random.Random(0), 1, make_vocab(3))
    by_id = {c.id: c for c in deck}
    assert by_id["1-p2-word"].text == "word2"
    assert by_id["1-p2-meaning"].text == "meaning2"
    assert by_id["1-p2-meaning"].face == "meaning"


def test_card_ids_do_not_collide_across_players() -> None:
    deck1, deck2 = build_decks(random.Random(7), make_vocab(5))
    assert not ({c.id for c in deck1} & {c.id for c in deck2})


def test_players_get_different_orders() -> None:
    deck1, deck2 = build_decks(random.Random(11), make_vocab(8))
    order1 = [(c.pair_id, c.face) for c in deck1]
    order2 = [(c.pair_id, c.face) for c in deck2]
    assert order1 != order2


def test_same_seed_same_decks() -> None:
    a1, a2 = build_decks(random.Random(5), make_vocab(6))
    b1, b2 = build_decks(random.Random(5), make_vocab(6))
    assert [c.id for c in a1] == [c.id for c in b1]
    assert [c.id for c in a2] == [c.id for c in b2]


def test_empty_vocabulary_rejected() -> None:
    with pytest.raises(InsufficientVocabularyError):
        build_deck(random.Random(0), 1, [])
    with pytest.raises(InsufficientVocabularyError):
        MatchEngine(rng=random.Random(0)).start_match([], 60)


def test_duplicate_pair_ids_rejected() -> None:
    vocab = [VocabularyPair("x", "a", "b"), VocabularyPair("x", "c", "d")]
    with pytest.raises(ValueError):
        build_deck(random.Random(0), 1, vocab)


def test_non_positive_duration_rejected() -> None:
    with pytest.raises(ValueError):
        MatchEngine(rng=random.Random(0)).start_match(make_vocab(2), 0)
