from __future__ import annotations

import copy
import logging
import random
from collections.abc import Iterable, Sequence

from .actions import Action, CastSkillAction, LoggedAction, SelectCardAction, TickAction
from .deck import build_decks
from .evaluator import evaluate
from .scheduler import ScheduledEvent, Scheduler
from .selection import finish_mismatch, finish_success, select_card
from .skills import cast_skill, expire_fog, expire_freeze, tick_cooldowns
from .state import DURATION_PRESETS, Event, MatchConfig, MatchState, PlayerState, StepResult
from .types import InsufficientVocabularyError, MatchResult, SkillKind, VocabularyPair

logger = logging.getLogger(__name__)

__all__ = [
    "DURATION_PRESETS",
    "Event",
    "MatchConfig",
    "MatchEngine",
    "MatchState",
    "PlayerState",
    "StepResult",
    "replay",
    "step",
]


class MatchEngine:
    """Owns one match at a time: both boards, the round clock and every pending timer.

    All mutation happens inside a single call (`select_card`, `cast_skill`, `tick`);
    deferred work lives in an epoch-tagged queue so starting a new match or
    finishing the current one silently invalidates whatever was still scheduled.
    """

    def __init__(self, config: MatchConfig | None = None, rng: random.Random | None = None) -> None:
        self.config = config or MatchConfig()
        self.rng = rng or random.Random()
        self.scheduler = Scheduler()
        self.state: MatchState | None = None

    # -- lifecycle -----------------------------------------------------

    def prepare(self, vocabulary: Sequence[VocabularyPair], duration_seconds: int) -> MatchState:
        """Build both decks and return a match in `setup`; the clock is not running yet."""
        if not vocabulary:
            raise InsufficientVocabularyError("A match needs at least one vocabulary pair.")
        if duration_seconds <= 0:
            raise ValueError(f"Match duration must be positive, got {duration_seconds}.")

        epoch = self.scheduler.new_epoch()
        deck1, deck2 = build_decks(self.rng, vocabulary)
        cfg = self.config
        players = (
            PlayerState(player_index=1, hp=cfg.starting_hp, deck=deck1),
            PlayerState(player_index=2, hp=cfg.starting_hp, deck=deck2),
        )
        self.state = MatchState(
            config=cfg,
            duration=duration_seconds,
            players=players,
            status="setup",
            remaining_seconds=duration_seconds,
            epoch=epoch,
        )
        return self.state

    def begin(self, now: float = 0.0) -> MatchState | None:
        st = self.state
        if st is None or st.status != "setup":
            return st
        st.status = "playing"
        st.started_at = now
        st.now = now
        st.emit({"type": "MATCH_STARTED", "epoch": st.epoch, "duration": st.duration})
        return st

    def start_match(
        self, vocabulary: Sequence[VocabularyPair], duration_seconds: int, now: float = 0.0
    ) -> MatchState:
        self.prepare(vocabulary, duration_seconds)
        st = self.begin(now)
        assert st is not None
        return st

    # -- host inputs ---------------------------------------------------

    def select_card(self, player: int, card_id: str) -> MatchState | None:
        self.apply(SelectCardAction(player=player, card_id=card_id))
        return self.state

    def cast_skill(self, player: int, skill: SkillKind) -> MatchState | None:
        self.apply(CastSkillAction(player=player, skill=skill))
        return self.state

    def tick(self, now: float) -> MatchState | None:
        self.apply(TickAction(now=now))
        return self.state

    def snapshot(self) -> MatchState | None:
        """Detached copy of the current match for rendering."""
        return copy.deepcopy(self.state)

    def apply(self, action: Action) -> StepResult:
        st = self.state
        if st is None:
            return StepResult(ok=False, events=[], error="No match has been started.")
        if st.status != "playing":
            return StepResult(ok=False, events=[], error="Match is not in progress.")

        # Log first so replay sees every attempted input.
        st.action_log.append(LoggedAction(at=st.now, action=action))

        if isinstance(action, SelectCardAction):
            res = select_card(st, action.player, action.card_id, self.scheduler)
        elif isinstance(action, CastSkillAction):
            res = cast_skill(st, action.player, action.skill, self.scheduler, self.rng)
        elif isinstance(action, TickAction):
            res = self._advance(action.now)
        else:
            res = StepResult(ok=False, events=[], error="Unknown action.")

        if not res.ok:
            logger.debug("Rejected %r: %s", action, res.error)
        return res

    # -- clock and deferred events -------------------------------------

    def _advance(self, now: float) -> StepResult:
        st = self.state
        assert st is not None
        if now < st.now:
            return StepResult(ok=False, events=[], error="Time went backwards.")

        mark = len(st.event_log)
        while st.status == "playing":
            due = self.scheduler.next_due()
            boundary = st.started_at + st.elapsed_seconds + 1
            # A callback due exactly on a second boundary runs before the boundary.
            if due is not None and due <= now and due <= boundary:
                ev = self.scheduler.pop_due(now)
                assert ev is not None
                st.now = max(st.now, ev.due)
                self._fire(ev)
            elif boundary <= now:
                st.now = boundary
                self._second_elapsed()
            else:
                break
        st.now = max(st.now, now)
        return StepResult(ok=True, events=st.event_log[mark:])

    def _second_elapsed(self) -> None:
        st = self.state
        assert st is not None
        st.elapsed_seconds += 1
        st.remaining_seconds = max(0, st.remaining_seconds - 1)
        tick_cooldowns(st)
        if st.remaining_seconds == 0:
            result = evaluate(st, timed_out=True)
            assert result is not None
            self._finish(result)

    def _fire(self, ev: ScheduledEvent) -> None:
        st = self.state
        assert st is not None
        if ev.kind == "success_done":
            finish_success(st, ev)
            self._check_winner()
        elif ev.kind == "mismatch_done":
            finish_mismatch(st, ev)
            self._check_winner()
        elif ev.kind == "freeze_expired":
            expire_freeze(st, ev)
        elif ev.kind == "fog_expired":
            expire_fog(st, ev)

    def _check_winner(self) -> None:
        st = self.state
        assert st is not None
        result = evaluate(st)
        if result is not None:
            self._finish(result)

    def _finish(self, result: MatchResult) -> None:
        st = self.state
        assert st is not None
        st.result = result
        st.status = "finished"
        # Drop every outstanding success/mismatch/skill-expiry callback.
        self.scheduler.new_epoch()
        st.emit({"type": "MATCH_ENDED", "winner": result.winner, "reason": result.reason})


def step(engine: MatchEngine, action: Action) -> StepResult:
    """Apply a single input to the engine's current match."""
    return engine.apply(action)


def replay(
    vocabulary: Sequence[VocabularyPair],
    duration_seconds: int,
    seed: int,
    actions: Iterable[Action],
    config: MatchConfig | None = None,
    start: float = 0.0,
) -> MatchEngine:
    engine = MatchEngine(config=config, rng=random.Random(seed))
    engine.start_match(vocabulary, duration_seconds, now=start)
    for a in actions:
        step(engine, a)
        assert engine.state is not None
        if engine.state.status == "finished":
            break
    return engine
