from __future__ import annotations

import random

from vocabduel.cli import simulate
from vocabduel.engine.ai import AISpec
from vocabduel.engine.match import MatchEngine, replay
from vocabduel.engine.serialize import snapshot
from vocabduel.paths import get_paths
from vocabduel.services.content import ContentService


def _load_list(list_id: str):
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    return content.load_builtin_lists()[list_id]


def test_engine_determinism_replay() -> None:
    vocab = _load_list("animals")
    seed = 424242

    engine = MatchEngine(rng=random.Random(seed))
    state1 = simulate(engine, vocab, 60, random.Random(7), AISpec(difficulty=1))
    assert state1.status == "finished"
    snap1 = snapshot(state1)

    actions = [entry.action for entry in state1.action_log]
    replayed = replay(vocab.words, 60, seed=seed, actions=actions)
    assert replayed.state is not None
    snap2 = snapshot(replayed.state)

    assert snap1 == snap2


def test_same_seed_same_match() -> None:
    vocab = _load_list("fruits")
    results = []
    for _ in range(2):
        engine = MatchEngine(rng=random.Random(3))
        st = simulate(engine, vocab, 120, random.Random(4), AISpec(difficulty=2))
        results.append(snapshot(st))
    assert results[0] == results[1]
