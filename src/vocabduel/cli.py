from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import Sequence

from vocabduel.engine.ai import AISpec, choose_action
from vocabduel.engine.match import DURATION_PRESETS, MatchEngine, MatchState
from vocabduel.engine.serialize import snapshot
from vocabduel.paths import get_paths
from vocabduel.services.content import ContentError, ContentService, VocabList
from vocabduel.services.telemetry import TelemetryService

STEP_SECONDS = 0.25


def simulate(
    engine: MatchEngine,
    vocab: VocabList,
    duration: int,
    bot_rng: random.Random,
    spec: AISpec,
    telemetry: TelemetryService | None = None,
) -> MatchState:
    """Play a full match between two bots on a fake clock."""
    state = engine.start_match(vocab.words, duration, now=0.0)
    seen = 0
    now = 0.0
    while state.status == "playing":
        for player in (1, 2):
            action = choose_action(state, player, bot_rng, spec)
            if action is not None:
                engine.apply(action)
        now += STEP_SECONDS
        engine.tick(now)
        if telemetry is not None:
            telemetry.log_events(state.event_log[seen:])
            seen = len(state.event_log)
    return state


def _cmd_simulate(args: argparse.Namespace, content: ContentService) -> int:
    if args.vocab is not None:
        vocab = content.load_vocab_list(Path(args.vocab))
    else:
        lists = content.load_builtin_lists()
        if args.list not in lists:
            print(f"Unknown list {args.list!r}; choose from: {', '.join(sorted(lists))}", file=sys.stderr)
            return 2
        vocab = lists[args.list]

    config = content.load_rules()
    duration = args.duration or config.default_duration
    engine = MatchEngine(config=config, rng=random.Random(args.seed))
    telemetry = TelemetryService(Path(args.telemetry)) if args.telemetry else None
    state = simulate(engine, vocab, duration, random.Random(args.seed + 1), AISpec(args.difficulty), telemetry)

    if args.json:
        print(json.dumps(snapshot(state), ensure_ascii=False, indent=2))
        return 0

    assert state.result is not None
    print(f"{vocab.name}: {len(vocab.words)} pairs, {duration}s")
    for ps in state.players:
        print(f"  P{ps.player_index}: hp={ps.hp} score={ps.score} left={ps.unmatched_count()}")
    winner = state.result.winner
    label = "Draw" if winner == "draw" else f"Player {winner} wins"
    print(f"{label} ({state.result.reason}) with {state.remaining_seconds}s left")
    return 0


def _cmd_lists(content: ContentService) -> int:
    for vl in content.load_builtin_lists().values():
        print(f"{vl.id}\t{vl.name}\t{len(vl.words)} words")
    return 0


def _cmd_validate(content: ContentService) -> int:
    content.validate_all()
    print("Content OK.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="vocabduel")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Run a headless bot-vs-bot match")
    src = sim.add_mutually_exclusive_group()
    src.add_argument("--vocab", help="Path to a vocabulary list JSON file")
    src.add_argument("--list", default="fruits", help="Bundled list id")
    sim.add_argument("--duration", type=int, choices=DURATION_PRESETS, default=None)
    sim.add_argument("--seed", type=int, default=0)
    sim.add_argument("--difficulty", type=int, choices=(0, 1, 2), default=1)
    sim.add_argument("--telemetry", help="Append match events to this JSONL file")
    sim.add_argument("--json", action="store_true", help="Print the final snapshot as JSON")

    sub.add_parser("lists", help="Show bundled vocabulary lists")
    sub.add_parser("validate", help="Validate bundled content against its schemas")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    try:
        if args.command == "simulate":
            return _cmd_simulate(args, content)
        if args.command == "lists":
            return _cmd_lists(content)
        return _cmd_validate(content)
    except ContentError as e:
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
