from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

CardFace = Literal["word", "meaning"]
TransientFlag = Literal["none", "error", "success"]
SkillKind = Literal["freeze", "fog"]

MatchStatus = Literal["setup", "playing", "finished"]
Winner = Literal[1, 2, "draw"]
EndReason = Literal["hpDepleted", "boardCleared", "timeExpired"]

SKILL_KINDS: tuple[SkillKind, ...] = ("freeze", "fog")


class InsufficientVocabularyError(ValueError):
    """Raised when a match is started without any vocabulary pairs."""


@dataclass(frozen=True)
class VocabularyPair:
    id: str
    word: str
    meaning: str


@dataclass
class Card:
    """One face of a vocabulary pair on a player's board.

    Only `matched`, `selected` and `transient_flag` change during a match.
    """

    id: str
    pair_id: str
    face: CardFace
    text: str
    matched: bool = False
    selected: bool = False
    transient_flag: TransientFlag = "none"


@dataclass(frozen=True)
class MatchResult:
    winner: Winner
    reason: EndReason
