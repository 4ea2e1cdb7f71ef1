from __future__ import annotations

"""Quiz session stats, bucketed by chord type, stored as JSON."""

import json
from pathlib import Path
from typing import Dict


def new_session_stats(difficulty: str = "") -> Dict:
    return {"difficulty": difficulty, "total": 0, "correct": 0, "per_type": {}}


def update_stats(stats: Dict, chord_type: str, correct: bool) -> None:
    """Count one graded question against its chord type."""
    stats["total"] = int(stats.get("total", 0)) + 1
    stats["correct"] = int(stats.get("correct", 0)) + (1 if correct else 0)
    bucket = stats.setdefault("per_type", {}).setdefault(chord_type, {"asked": 0, "correct": 0})
    bucket["asked"] += 1
    bucket["correct"] += 1 if correct else 0


def accuracy(correct: int, asked: int) -> float:
    return correct / asked if asked else 0.0


def write_stats(stats: Dict, path: str) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(stats, f, indent=2)


def format_summary(stats: Dict) -> str:
    """Overall score, then one line per chord type, weakest first."""
    total = int(stats.get("total", 0))
    correct = int(stats.get("correct", 0))
    lines = [f"Score: {correct}/{total} ({accuracy(correct, total):.0%})"]
    per = stats.get("per_type", {})
    ranked = sorted(per.items(), key=lambda kv: (accuracy(kv[1]["correct"], kv[1]["asked"]), kv[0]))
    for chord_type, b in ranked:
        lines.append(f"  {chord_type:<18} {b['correct']}/{b['asked']}")
    return "\n".join(lines)
