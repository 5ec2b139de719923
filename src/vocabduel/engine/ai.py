from __future__ import annotations

import random
from dataclasses import dataclass

from .actions import Action, CastSkillAction, SelectCardAction
from .skills import can_cast
from .state import MatchState
from .types import Card, SKILL_KINDS

_RECALL = {0: 0.35, 1: 0.7, 2: 0.95}


@dataclass(frozen=True)
class AISpec:
    """Simple bot tuning parameters.

    difficulty:
      0 = easy (often flips the wrong partner, rarely uses skills)
      1 = normal
      2 = hard (almost always finds the partner card)
    """

    difficulty: int = 1

    @property
    def recall(self) -> float:
        return _RECALL.get(self.difficulty, _RECALL[1])


def _open_cards(state: MatchState, player: int) -> list[Card]:
    return [c for c in state.player(player).deck if not c.matched and not c.selected]


def _pick_skill(state: MatchState, player: int, rng: random.Random, spec: AISpec) -> CastSkillAction | None:
    if spec.difficulty <= 0 and rng.random() < 0.5:
        return None
    for skill in SKILL_KINDS:
        if can_cast(state, player, skill) is None:
            return CastSkillAction(player=player, skill=skill)
    return None


def choose_action(
    state: MatchState, player: int, rng: random.Random, spec: AISpec | None = None
) -> Action | None:
    """Next input for a bot-controlled player, or None when it has nothing to do.

    The bot uses its own `rng`, separate from the engine's, so replays of the
    recorded inputs stay exact.
    """
    spec = spec or AISpec()
    if state.status != "playing":
        return None
    ps = state.player(player)
    if ps.frozen or len(ps.pending_selection) >= 2:
        return None

    cast = _pick_skill(state, player, rng, spec)
    if cast is not None:
        return cast

    candidates = _open_cards(state, player)
    if not candidates:
        return None

    if ps.pending_selection:
        first = ps.pending_selection[0]
        # Fogged text can't be read, so a fogged partner is only found by luck.
        partners = [c for c in candidates if c.pair_id == first.pair_id and c.id not in ps.fogged_card_ids]
        if partners and rng.random() < spec.recall:
            return SelectCardAction(player=player, card_id=partners[0].id)

    visible = [c for c in candidates if c.id not in ps.fogged_card_ids] or candidates
    return SelectCardAction(player=player, card_id=rng.choice(visible).id)
