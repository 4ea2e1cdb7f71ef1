from __future__ import annotations

"""CLI for ChordTrainer: browse tiers, check chords, run a quiz."""

import argparse
import json
import sys
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .. import __version__
from ..config.config import load_config, validate_config
from ..drills.chord_build import ChordBuildDrill, DrillContext, parse_answer
from ..stats.stats import format_summary, write_stats
from ..theory.matcher import diagnose_match
from ..util.randomness import make_rng, seed_if_needed
from .explain import enable as enable_explain
from .tiers import DIFFICULTY_LEVELS, get_chords_for_difficulty, list_tiers


def _find_chord(tier: str, name: str):
    for chord in get_chords_for_difficulty(tier):
        if chord.name == name:
            return chord
    raise KeyError(f"No chord named {name!r} in {tier}")


def _cmd_list_tiers() -> int:
    for t in list_tiers():
        count = len(get_chords_for_difficulty(t["id"]))
        print(f"{t['id']:<8} {count:>4}  {t.get('label', '')}")
    return 0


def _cmd_show_tier(tier: str, as_json: bool) -> int:
    chords = get_chords_for_difficulty(tier)
    if as_json:
        print(json.dumps([c.to_json() for c in chords], indent=2))
        return 0
    for c in chords:
        degrees = " ".join(c.scale_degrees[i] for i in sorted(c.scale_degrees))
        print(f"{c.id:>4}  {c.name:<14} {' '.join(c.notes):<18} [{degrees}]")
    return 0


def _cmd_check(cfg: Dict[str, Any], notes: str, target: Optional[str], tier: Optional[str], chord_name: Optional[str]) -> int:
    engine = cfg["engine"]
    chord = None
    if chord_name:
        chord = _find_chord(tier or cfg["quiz"]["difficulty"], chord_name)
        target_notes: List[str] = list(chord.notes)
    elif target:
        target_notes = parse_answer(target)
    else:
        print("ERROR: either --target or --chord is required", file=sys.stderr)
        return 2
    if not engine["strict_matching"]:
        chord = None
    report = diagnose_match(parse_answer(notes), target_notes, chord, engine["default_octave"])
    print("MATCH" if report.is_match else "NO MATCH")
    for msg in report.messages:
        print(f"  {msg}")
    return 0 if report.is_match else 1


def _save_session(cfg: Dict[str, Any], difficulty: str, score: int, total: int, user: Optional[str]) -> None:
    from ..storage import append_game_sessions, validate_records, GameSessionRow

    row = GameSessionRow(
        session_id=str(uuid.uuid4()),
        user=user,
        difficulty=difficulty,
        score=score,
        total=total,
        completed_at=datetime.now(timezone.utc),
    )
    append_game_sessions(validate_records([row]), Path(cfg["storage"]["data_dir"]))


def _cmd_quiz(cfg: Dict[str, Any], user: Optional[str]) -> int:
    quiz = cfg["quiz"]
    engine = cfg["engine"]
    seed = seed_if_needed()
    ctx = DrillContext(
        difficulty=quiz["difficulty"],
        strict_matching=engine["strict_matching"],
        default_octave=engine["default_octave"],
        show_feedback=quiz["show_feedback"],
    )
    drill = ChordBuildDrill(ctx, rng=make_rng(seed))
    print(f"Starting ChordTrainer quiz at {ctx.difficulty}. Enter notes like 'C4 E4 G4' or MIDI numbers.")

    def ask(prompt: str) -> str:
        return input(prompt)

    def inform(msg: str) -> None:
        print(msg)

    result = drill.run(int(quiz["questions"]), {"ask": ask, "inform": inform})
    stats = {
        "difficulty": ctx.difficulty,
        "total": result.total,
        "correct": result.correct,
        "retries": result.retries,
        "per_type": result.per_type,
    }
    write_stats(stats, cfg["stats"]["output_path"])
    if cfg["storage"]["enabled"]:
        _save_session(cfg, ctx.difficulty, result.score, result.total, user)

    print("\nSession Summary:")
    print(format_summary(stats))
    return 0


def _cmd_top_scores(cfg: Dict[str, Any], limit: int, tier: Optional[str]) -> int:
    from ..storage import load_all, top_scores

    df = top_scores(load_all(Path(cfg["storage"]["data_dir"])), limit=limit, difficulty=tier)
    if df.empty:
        print("No sessions recorded yet.")
        return 0
    print(df[["completed_at", "user", "difficulty", "score", "total"]].to_string(index=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="chordtrainer")
    p.add_argument("--version", action="version", version=f"chordtrainer {__version__}")
    p.add_argument("--config", default=None, help="Path to YAML config")
    p.add_argument("--explain", action="store_true", help="Trace engine decisions")
    p.add_argument("--explain-only", action="append", default=None, metavar="EVENT",
                   help="Trace only this event (repeatable), e.g. match_checked")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("list-tiers")

    sp = sub.add_parser("show-tier")
    sp.add_argument("--tier", required=True, choices=DIFFICULTY_LEVELS)
    sp.add_argument("--json", action="store_true")

    cp = sub.add_parser("check")
    cp.add_argument("--notes", required=True, help="Played notes, e.g. 'E4 G4 C5' or '64 67 72'")
    cp.add_argument("--target", default=None, help="Target notes")
    cp.add_argument("--chord", default=None, help="Target chord name within --tier, e.g. 'C/E'")
    cp.add_argument("--tier", default=None, choices=DIFFICULTY_LEVELS)

    qp = sub.add_parser("quiz")
    qp.add_argument("--tier", default=None, choices=DIFFICULTY_LEVELS)
    qp.add_argument("--questions", type=int, default=None)
    qp.add_argument("--user", default=None)
    qp.add_argument("--save", action="store_true", help="Record the session score")

    tp = sub.add_parser("top-scores")
    tp.add_argument("--limit", type=int, default=10)
    tp.add_argument("--tier", default=None, choices=DIFFICULTY_LEVELS)

    args = p.parse_args(argv)
    if args.explain or args.explain_only:
        enable_explain(True, args.explain_only)

    cfg = load_config(args.config)
    if args.cmd == "quiz":
        quiz = cfg.setdefault("quiz", {})
        if args.tier:
            quiz["difficulty"] = args.tier
        if args.questions is not None:
            quiz["questions"] = args.questions
        if args.save:
            cfg.setdefault("storage", {})["enabled"] = True
    cfg = validate_config(cfg)

    if args.cmd == "list-tiers":
        return _cmd_list_tiers()
    if args.cmd == "show-tier":
        return _cmd_show_tier(args.tier, args.json)
    if args.cmd == "check":
        try:
            return _cmd_check(cfg, args.notes, args.target, args.tier, args.chord)
        except KeyError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            return 2
    if args.cmd == "quiz":
        return _cmd_quiz(cfg, args.user)
    if args.cmd == "top-scores":
        return _cmd_top_scores(cfg, args.limit, args.tier)
    return 2


if __name__ == "__main__":
    sys.exit(main())
