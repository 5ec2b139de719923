from __future__ import annotations


from .actions import Action, CastSkillAction, LoggedAction, SelectCardAction, TickAction
from .state import MatchState, PlayerState
from .types import Card


def action_to_dict(a: Action) -> dict[str, object]:
    if isinstance(a, SelectCardAction):
        return {"type": "select", "player": a.player, "card_id": a.card_id}
    if isinstance(a, CastSkillAction):
        return {"type": "cast", "player": a.player, "skill": a.skill}
    if isinstance(a, TickAction):
        return {"type": "tick", "now": a.now}
    # should be unreachable
    return {"type": "unknown"}


def _logged_to_dict(entry: LoggedAction) -> dict[str, object]:
    return {"at": entry.at, **action_to_dict(entry.action)}


def _card_to_dict(c: Card, fogged: bool) -> dict[str, object]:
    return {
        "id": c.id,
        "pair_id": c.pair_id,
        "face": c.face,
        "text": c.text,
        "matched": c.matched,
        "selected": c.selected,
        "transient_flag": c.transient_flag,
        "fogged": fogged,
    }


def _player_to_dict(p: PlayerState) -> dict[str, object]:
    return {
        "player": p.player_index,
        "hp": p.hp,
        "score": p.score,
        "streak": p.streak,
        "skill_charges": p.skill_charges,
        "freeze_cooldown": p.freeze_cooldown,
        "fog_cooldown": p.fog_cooldown,
        "frozen_by_mismatch": p.frozen_by_mismatch,
        "frozen_by_skill": p.frozen_by_skill,
        "pending_selection": [c.id for c in p.pending_selection],
        "fogged_card_ids": sorted(p.fogged_card_ids),
        "deck": [_card_to_dict(c, c.id in p.fogged_card_ids) for c in p.deck],
    }


def snapshot(state: MatchState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current match state."""
    result = None
    if state.result is not None:
        result = {"winner": state.result.winner, "reason": state.result.reason}
    return {
        "epoch": state.epoch,
        "status": state.status,
        "duration": state.duration,
        "remaining_seconds": state.remaining_seconds,
        "now": state.now,
        "result": result,
        "players": [_player_to_dict(p) for p in state.players],
        "action_log": [_logged_to_dict(a) for a in state.action_log],
    }
