from __future__ import annotations

from .state import MatchState
from .types import MatchResult, Winner


def evaluate(state: MatchState, *, timed_out: bool = False) -> MatchResult | None:
    """Decide whether the match is over.

    Depleted HP beats a cleared board; scores only matter once the clock runs out.
    HP changes resolve one player at a time, so at most one player can be at zero.
    """
    for ps in state.players:
        if ps.hp <= 0:
            return MatchResult(winner=state.opponent(ps.player_index), reason="hpDepleted")  # type: ignore[arg-type]

    for ps in state.players:
        if ps.unmatched_count() == 0:
            return MatchResult(winner=ps.player_index, reason="boardCleared")  # type: ignore[arg-type]

    if not timed_out:
        return None

    p1, p2 = state.players
    winner: Winner = "draw"
    if p1.score > p2.score:
        winner = 1
    elif p2.score > p1.score:
        winner = 2
    return MatchResult(winner=winner, reason="timeExpired")
