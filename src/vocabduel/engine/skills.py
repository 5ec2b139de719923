from __future__ import annotations

import random

from .scheduler import ScheduledEvent, Scheduler
from .state import MatchState, PlayerState, StepResult
from .types import SKILL_KINDS, SkillKind


def _reject(msg: str) -> StepResult:
    return StepResult(ok=False, events=[], error=msg)


def cooldown_of(ps: PlayerState, skill: SkillKind) -> int:
    return ps.freeze_cooldown if skill == "freeze" else ps.fog_cooldown


def can_cast(state: MatchState, caster: int, skill: str) -> str | None:
    """Return the reason a cast would be rejected, or None if it is allowed."""
    if state.status != "playing":
        return "Match is not in progress."
    if caster not in (1, 2):
        return "Unknown player."
    if skill not in SKILL_KINDS:
        return "Unknown skill."
    ps = state.player(caster)
    if ps.frozen:
        return "Player is frozen."
    if ps.skill_charges < state.config.skill_cost:
        return "Not enough charges."
    if cooldown_of(ps, skill) > 0:  # type: ignore[arg-type]
        return "Skill on cooldown."
    return None


def cast_skill(
    state: MatchState, caster: int, skill: str, scheduler: Scheduler, rng: random.Random
) -> StepResult:
    err = can_cast(state, caster, skill)
    if err is not None:
        return _reject(err)

    cfg = state.config
    mark = len(state.event_log)
    ps = state.player(caster)
    target = state.opponent(caster)
    ops = state.player(target)

    ps.skill_charges -= cfg.skill_cost
    if skill == "freeze":
        ps.freeze_cooldown = cfg.skill_cooldown
        ops.frozen_by_skill = True
        # Re-casting restarts the timer: the newer expiry supersedes the older one.
        scheduler.schedule(state.now + cfg.freeze_duration, "freeze_expired", target, key=f"freeze:{target}")
        state.emit({"type": "SKILL_CAST", "player": caster, "skill": "freeze", "target": target})
    else:
        ps.fog_cooldown = cfg.skill_cooldown
        candidates = [c.id for c in ops.deck if not c.matched and not c.selected]
        fogged = rng.sample(candidates, min(cfg.fog_card_count, len(candidates)))
        ops.fogged_card_ids = set(fogged)
        scheduler.schedule(
            state.now + cfg.fog_duration, "fog_expired", target, tuple(fogged), key=f"fog:{target}"
        )
        state.emit(
            {"type": "SKILL_CAST", "player": caster, "skill": "fog", "target": target, "card_ids": fogged}
        )
    return StepResult(ok=True, events=state.event_log[mark:])


def expire_freeze(state: MatchState, ev: ScheduledEvent) -> None:
    state.player(ev.player).frozen_by_skill = False
    state.emit({"type": "FREEZE_ENDED", "player": ev.player})


def expire_fog(state: MatchState, ev: ScheduledEvent) -> None:
    ps = state.player(ev.player)
    # Cards matched meanwhile already left the fog set.
    cleared = sorted(cid for cid in ev.card_ids if cid in ps.fogged_card_ids)
    ps.fogged_card_ids.difference_update(ev.card_ids)
    state.emit({"type": "FOG_ENDED", "player": ev.player, "card_ids": cleared})


def tick_cooldowns(state: MatchState) -> None:
    for ps in state.players:
        ps.freeze_cooldown = max(0, ps.freeze_cooldown - 1)
        ps.fog_cooldown = max(0, ps.fog_cooldown - 1)
