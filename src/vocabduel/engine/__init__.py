"""Deterministic, headless match engine for VocabDuel.

IMPORTANT: This package must stay free of I/O and third-party imports.
"""

from .actions import CastSkillAction, SelectCardAction, TickAction
from .match import DURATION_PRESETS, MatchConfig, MatchEngine, MatchState, PlayerState, replay, step
from .types import Card, InsufficientVocabularyError, MatchResult, SkillKind, VocabularyPair

__all__ = [
    "DURATION_PRESETS",
    "Card",
    "CastSkillAction",
    "InsufficientVocabularyError",
    "MatchConfig",
    "MatchEngine",
    "MatchResult",
    "MatchState",
    "PlayerState",
    "SelectCardAction",
    "SkillKind",
    "TickAction",
    "VocabularyPair",
    "replay",
    "step",
]
