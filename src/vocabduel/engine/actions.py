from __future__ import annotations

from dataclasses import dataclass

from .types import SkillKind


@dataclass(frozen=True)
class SelectCardAction:
    player: int
    card_id: str


@dataclass(frozen=True)
class CastSkillAction:
    player: int
    skill: SkillKind


@dataclass(frozen=True)
class TickAction:
    now: float


Action = SelectCardAction | CastSkillAction | TickAction


@dataclass(frozen=True)
class LoggedAction:
    """An input together with the engine time it arrived at."""

    at: float
    action: Action
