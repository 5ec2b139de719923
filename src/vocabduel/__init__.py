"""VocabDuel: a head-to-head vocabulary memory-matching contest."""

__version__ = "0.1.0"
