from __future__ import annotations

import random
from collections.abc import Sequence

from .types import Card, InsufficientVocabularyError, VocabularyPair


def card_id(player: int, pair_id: str, face: str) -> str:
    return f"{player}-{pair_id}-{face}"


def build_deck(rng: random.Random, player: int, vocabulary: Sequence[VocabularyPair]) -> list[Card]:
    """Two cards per pair, shuffled with `rng`. Ids are namespaced by player."""
    if not vocabulary:
        raise InsufficientVocabularyError("Cannot build a deck from an empty vocabulary.")
    seen: set[str] = set()
    cards: list[Card] = []
    for pair in vocabulary:
        if pair.id in seen:
            raise ValueError(f"Duplicate vocabulary pair id: {pair.id}")
        seen.add(pair.id)
        cards.append(Card(id=card_id(player, pair.id, "word"), pair_id=pair.id, face="word", text=pair.word))
        cards.append(
            Card(id=card_id(player, pair.id, "meaning"), pair_id=pair.id, face="meaning", text=pair.meaning)
        )
    rng.shuffle(cards)
    return cards


def build_decks(
    rng: random.Random, vocabulary: Sequence[VocabularyPair]
) -> tuple[list[Card], list[Card]]:
    # Both decks draw from the same stream one after the other, so they differ.
    return build_deck(rng, 1, vocabulary), build_deck(rng, 2, vocabulary)
