from __future__ import annotations

from .scheduler import ScheduledEvent, Scheduler
from .state import MatchState, PlayerState, StepResult


def _reject(msg: str) -> StepResult:
    return StepResult(ok=False, events=[], error=msg)


def select_card(state: MatchState, player: int, card_id: str, scheduler: Scheduler) -> StepResult:
    """Flip one card for `player`; resolves the pick once two cards are pending.

    Invalid picks are rejected without touching the state.
    """
    if state.status != "playing":
        return _reject("Match is not in progress.")
    if player not in (1, 2):
        return _reject("Unknown player.")
    ps = state.player(player)
    if ps.frozen:
        return _reject("Player is frozen.")
    if len(ps.pending_selection) >= 2:
        return _reject("Selection already pending.")
    card = ps.card(card_id)
    if card is None:
        return _reject("Unknown card.")
    if card.matched or card.selected:
        return _reject("Card is not selectable.")

    mark = len(state.event_log)
    card.selected = True
    ps.pending_selection.append(card)
    state.emit({"type": "CARD_SELECTED", "player": player, "card_id": card.id})

    if len(ps.pending_selection) == 2:
        _resolve_pair(state, ps, scheduler)
    return StepResult(ok=True, events=state.event_log[mark:])


def _resolve_pair(state: MatchState, ps: PlayerState, scheduler: Scheduler) -> None:
    cfg = state.config
    first, second = ps.pending_selection
    ids = (first.id, second.id)

    if first.pair_id == second.pair_id:
        first.transient_flag = "success"
        second.transient_flag = "success"
        # Cards stay `selected` until the success display ends so they can't be re-picked.
        ps.pending_selection.clear()
        ps.score += cfg.match_reward
        ps.streak += 1
        ps.skill_charges = min(cfg.max_charges, ps.skill_charges + 1)
        ps.fogged_card_ids.difference_update(ids)
        state.emit(
            {
                "type": "PAIR_MATCHED",
                "player": ps.player_index,
                "pair_id": first.pair_id,
                "score": ps.score,
                "streak": ps.streak,
                "skill_charges": ps.skill_charges,
            }
        )
        scheduler.schedule(state.now + cfg.success_delay, "success_done", ps.player_index, ids)
        return

    first.transient_flag = "error"
    second.transient_flag = "error"
    ps.frozen_by_mismatch = True
    ps.streak = 0
    state.emit({"type": "PAIR_MISMATCHED", "player": ps.player_index, "card_ids": list(ids)})
    scheduler.schedule(state.now + cfg.mismatch_delay, "mismatch_done", ps.player_index, ids)


def finish_success(state: MatchState, ev: ScheduledEvent) -> None:
    ps = state.player(ev.player)
    for cid in ev.card_ids:
        card = ps.card(cid)
        if card is None:
            continue
        card.matched = True
        card.selected = False
        card.transient_flag = "none"
    state.emit({"type": "PAIR_CLEARED", "player": ev.player, "remaining": ps.unmatched_count()})


def finish_mismatch(state: MatchState, ev: ScheduledEvent) -> None:
    ps = state.player(ev.player)
    penalty = state.config.mismatch_penalty
    ps.hp = max(0, ps.hp - penalty)
    ps.frozen_by_mismatch = False
    for card in ps.pending_selection:
        card.selected = False
        card.transient_flag = "none"
    ps.pending_selection.clear()
    state.emit({"type": "HP_LOST", "player": ev.player, "amount": penalty, "hp": ps.hp})
