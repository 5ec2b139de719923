from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Literal

logger = logging.getLogger(__name__)

DeferredKind = Literal["success_done", "mismatch_done", "freeze_expired", "fog_expired"]


@dataclass(frozen=True)
class ScheduledEvent:
    due: float
    seq: int
    epoch: int
    kind: DeferredKind
    player: int
    card_ids: tuple[str, ...] = ()
    key: str | None = None


@dataclass
class Scheduler:
    """Deferred callbacks ordered by due time, tagged with the epoch they were issued under.

    Bumping the epoch invalidates everything scheduled before. Events that share a
    `key` supersede each other: only the most recently scheduled one fires.
    """

    epoch: int = 0
    _heap: list[tuple[float, int, ScheduledEvent]] = field(default_factory=list)
    _seq: int = 0
    _latest: dict[str, int] = field(default_factory=dict)

    def new_epoch(self) -> int:
        self.epoch += 1
        self._latest.clear()
        return self.epoch

    def schedule(
        self,
        due: float,
        kind: DeferredKind,
        player: int,
        card_ids: tuple[str, ...] = (),
        key: str | None = None,
    ) -> ScheduledEvent:
        self._seq += 1
        ev = ScheduledEvent(
            due=due, seq=self._seq, epoch=self.epoch, kind=kind, player=player, card_ids=card_ids, key=key
        )
        if key is not None:
            self._latest[key] = ev.seq
        heapq.heappush(self._heap, (due, ev.seq, ev))
        return ev

    def is_live(self, ev: ScheduledEvent) -> bool:
        if ev.epoch != self.epoch:
            return False
        if ev.key is not None and self._latest.get(ev.key) != ev.seq:
            return False
        return True

    def _drop_stale(self) -> None:
        while self._heap and not self.is_live(self._heap[0][2]):
            _, _, ev = heapq.heappop(self._heap)
            logger.debug("Discarding stale %s for player %s (epoch %s)", ev.kind, ev.player, ev.epoch)

    def next_due(self) -> float | None:
        self._drop_stale()
        if not self._heap:
            return None
        return self._heap[0][0]

    def pop_due(self, now: float) -> ScheduledEvent | None:
        due = self.next_due()
        if due is None or due > now:
            return None
        _, _, ev = heapq.heappop(self._heap)
        if ev.key is not None:
            self._latest.pop(ev.key, None)
        return ev

    def pending(self) -> list[ScheduledEvent]:
        return sorted((ev for _, _, ev in self._heap if self.is_live(ev)), key=lambda e: (e.due, e.seq))
