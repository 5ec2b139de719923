from __future__ import annotations

from dataclasses import dataclass, field

from .actions import LoggedAction
from .types import Card, MatchResult, MatchStatus

Event = dict[str, object]

DURATION_PRESETS: tuple[int, ...] = (60, 120, 180, 240, 300)


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass(frozen=True)
class MatchConfig:
    starting_hp: int = 100
    match_reward: int = 100
    mismatch_penalty: int = 10
    success_delay: float = 0.25
    mismatch_delay: float = 1.0
    max_charges: int = 10
    skill_cost: int = 3
    skill_cooldown: int = 10
    freeze_duration: float = 3.0
    fog_duration: float = 6.0
    fog_card_count: int = 3
    default_duration: int = 180


@dataclass
class PlayerState:
    player_index: int
    hp: int
    deck: list[Card]
    score: int = 0
    pending_selection: list[Card] = field(default_factory=list)
    streak: int = 0
    skill_charges: int = 0
    freeze_cooldown: int = 0
    fog_cooldown: int = 0
    frozen_by_mismatch: bool = False
    frozen_by_skill: bool = False
    fogged_card_ids: set[str] = field(default_factory=set)

    @property
    def frozen(self) -> bool:
        return self.frozen_by_mismatch or self.frozen_by_skill

    def card(self, card_id: str) -> Card | None:
        for c in self.deck:
            if c.id == card_id:
                return c
        return None

    def unmatched_count(self) -> int:
        return sum(1 for c in self.deck if not c.matched)


@dataclass
class MatchState:
    config: MatchConfig
    duration: int
    players: tuple[PlayerState, PlayerState]
    status: MatchStatus = "setup"
    remaining_seconds: int = 0
    result: MatchResult | None = None
    epoch: int = 0
    started_at: float = 0.0
    now: float = 0.0
    elapsed_seconds: int = 0
    event_log: list[Event] = field(default_factory=list)
    action_log: list[LoggedAction] = field(default_factory=list)

    def player(self, index: int) -> PlayerState:
        return self.players[index - 1]

    def opponent(self, index: int) -> int:
        return 3 - index

    def emit(self, event: Event) -> Event:
        self.event_log.append(event)
        return event
