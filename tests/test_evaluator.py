from __future__ import annotations

from vocabduel.engine.evaluator import evaluate
from vocabduel.engine.match import MatchEngine

from conftest import make_engine


def _state(engine: MatchEngine):
    assert engine.state is not None
    return engine.state


def test_no_result_mid_match(engine: MatchEngine) -> None:
    assert evaluate(_state(engine)) is None


def test_depleted_hp_beats_cleared_board(engine: MatchEngine) -> None:
    st = _state(engine)
    p1 = st.player(1)
    for c in p1.deck:
        c.matched = True
    p1.hp = 0
    result = evaluate(st)
    assert result is not None
    assert (result.winner, result.reason) == (2, "hpDepleted")


def test_cleared_board_wins(engine: MatchEngine) -> None:
    st = _state(engine)
    for c in st.player(2).deck:
        c.matched = True
    result = evaluate(st)
    assert result is not None
    assert (result.winner, result.reason) == (2, "boardCleared")


def test_timeout_compares_scores(engine: MatchEngine) -> None:
    st = _state(engine)
    result = evaluate(st, timed_out=True)
    assert result is not None
    assert (result.winner, result.reason) == ("draw", "timeExpired")

    st.player(1).score = 300
    st.player(2).score = 200
    result = evaluate(st, timed_out=True)
    assert result is not None
    assert result.winner == 1

    st.player(2).hp = 0
    result = evaluate(st, timed_out=True)
    assert result is not None
    assert (result.winner, result.reason) == (1, "hpDepleted")


def test_player_one_clears_board_first() -> None:
    engine = make_engine(n=4, duration=60)
    st = _state(engine)
    now = 0.0
    for i in range(4):
        engine.select_card(1, f"1-p{i}-word")
        engine.select_card(1, f"1-p{i}-meaning")
        now += 0.25
        engine.tick(now)
    assert st.status == "finished"
    assert st.result is not None
    assert (st.result.winner, st.result.reason) == (1, "boardCleared")
    assert st.player(1).score == 400
    assert st.player(2).score == 0


def test_hp_runs_out_after_ten_mismatches() -> None:
    engine = make_engine(n=4, duration=60)
    st = _state(engine)
    now = 0.0
    for _ in range(10):
        engine.select_card(2, "2-p0-word")
        engine.select_card(2, "2-p1-word")
        now += 1.0
        engine.tick(now)
    assert st.player(2).hp == 0
    assert st.status == "finished"
    assert st.result is not None
    assert (st.result.winner, st.result.reason) == (1, "hpDepleted")
    # The fatal penalty lands on the 10s boundary, before the clock ticks.
    assert st.remaining_seconds == 51
