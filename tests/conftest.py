from __future__ import annotations

import random

import pytest

from vocabduel.engine.match import MatchConfig, MatchEngine
from vocabduel.engine.types import VocabularyPair


def make_vocab(n: int = 4) -> list[VocabularyPair]:
    return [VocabularyPair(id=f"p{i}", word=f"word{i}", meaning=f"meaning{i}") for i in range(n)]


def make_engine(
    n: int = 4, duration: int = 60, seed: int = 1, config: MatchConfig | None = None
) -> MatchEngine:
    engine = MatchEngine(config=config, rng=random.Random(seed))
    engine.start_match(make_vocab(n), duration, now=0.0)
    return engine


@pytest.fixture
def engine() -> MatchEngine:
    return make_engine()
