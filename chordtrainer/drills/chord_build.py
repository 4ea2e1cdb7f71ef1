from __future__ import annotations

"""Chord building drill: show a chord name, grade the notes the user plays."""

import random
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..app.explain import trace as xtrace
from ..app.tiers import get_chords_for_difficulty, random_chord
from ..stats.stats import new_session_stats, update_stats
from ..theory.chord import ChordData
from ..theory.matcher import MatchReport, diagnose_match
from ..theory.note_utils import DEFAULT_OCTAVE, midi_to_note

_SPLIT_RE = re.compile(r"[\s,]+")


@dataclass
class DrillContext:
    """Context information for a drill session."""

    difficulty: str
    strict_matching: bool = True
    default_octave: int = DEFAULT_OCTAVE
    show_feedback: bool = True
    allow_consecutive_repeat: bool = False


@dataclass
class DrillResult:
    """Aggregated result statistics for a drill session."""

    total: int
    correct: int
    per_type: Dict[str, Dict[str, int]] = field(default_factory=dict)
    retries: int = 0

    @property
    def score(self) -> int:
        return self.correct


def parse_answer(text: str) -> List[str]:
    """Split an answer into note strings; bare integers are read as MIDI numbers."""
    notes: List[str] = []
    for token in _SPLIT_RE.split(text.strip()):
        if not token:
            continue
        if token.isdigit():
            try:
                notes.append(midi_to_note(int(token)))
                continue
            except ValueError:
                pass
        notes.append(token)
    return notes


class ChordBuildDrill:
    MAX_ATTEMPTS = 30

    def __init__(self, ctx: DrillContext, rng: Optional[random.Random] = None) -> None:
        self.ctx = ctx
        self.rng = rng or random.Random()
        self._chords = get_chords_for_difficulty(ctx.difficulty)
        limit = 6 if ctx.difficulty == "level1" else 10
        self._avoid = min(limit, len(self._chords) // 2)
        self._recent_ids: List[int] = []
        self._recent_types: List[str] = []

    def _id_ok(self, chord: ChordData) -> bool:
        if self.ctx.allow_consecutive_repeat:
            return True
        if self._avoid:
            return chord.id not in self._recent_ids
        return not self._recent_ids or chord.id != self._recent_ids[0]

    def _type_ok(self, chord: ChordData) -> bool:
        # at most two chords of one type in a row
        return not (len(self._recent_types) == 2 and all(t == chord.chord_type for t in self._recent_types))

    def next_question(self) -> ChordData:
        """Random chord from the tier, avoiding recent chords and a third type in a row."""
        chord = random_chord(self.ctx.difficulty, self.rng)
        attempts = 1
        while not (self._id_ok(chord) and self._type_ok(chord)) and attempts < self.MAX_ATTEMPTS:
            chord = random_chord(self.ctx.difficulty, self.rng)
            attempts += 1

        if not (self._id_ok(chord) and self._type_ok(chord)):
            candidates = [c for c in self._chords if self._id_ok(c) and self._type_ok(c)]
            candidates = candidates or [c for c in self._chords if self._id_ok(c)]
            if candidates:
                chord = self.rng.choice(candidates)
            if not self._type_ok(chord):
                xtrace("type_run_allowed", {"tier": self.ctx.difficulty, "type": chord.chord_type})

        self._recent_ids = [chord.id] + self._recent_ids[: max(self._avoid, 1) - 1]
        self._recent_types = [chord.chord_type] + self._recent_types[:1]
        return chord

    def grade(self, answer: List[str], chord: ChordData) -> MatchReport:
        target = chord if self.ctx.strict_matching else None
        return diagnose_match(answer, chord.notes, target, self.ctx.default_octave)

    def run(self, num_questions: int, ui_callbacks: Dict[str, Callable]) -> DrillResult:
        """Ask each chord until it is played correctly or revealed.

        A question counts as correct when it is eventually played without a
        reveal; wrong attempts are counted in `DrillResult.retries`.
        """
        ask = ui_callbacks["ask"]
        inform = ui_callbacks["inform"]

        stats = new_session_stats(self.ctx.difficulty)
        retries = 0
        for i in range(1, num_questions + 1):
            chord = self.next_question()
            xtrace("question_created", {"index": i, "chord": chord.name, "notes": list(chord.notes)})

            while True:
                ans = ask(f"Q{i}/{num_questions}: play {chord.name} ('?' bass hint, 'r' reveal): ")
                cmd = ans.strip().lower()
                if cmd == "?":
                    inform(f"Bass note: {chord.bass_note[:-1]}")
                    continue
                if cmd == "r":
                    correct = False
                    inform(f"{chord.name} is {' '.join(chord.notes)}.\n")
                    break
                report = self.grade(parse_answer(ans), chord)
                xtrace("graded", {"index": i, "answer": ans, "chord": chord.name, "correct": report.is_match})
                if report.is_match:
                    correct = True
                    inform("Correct!\n")
                    break
                retries += 1
                inform("Not quite right. Try again!")
                if self.ctx.show_feedback and report.messages:
                    inform("  " + "; ".join(report.messages))

            update_stats(stats, chord.chord_type or chord.name, correct)

        return DrillResult(
            total=stats["total"], correct=stats["correct"], per_type=stats["per_type"], retries=retries
        )
