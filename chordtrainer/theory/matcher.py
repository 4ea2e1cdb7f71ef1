"""Voicing-aware chord matching.

A played chord matches a target when:
  1. the pitch-class multisets are equal (no extra, missing or wrong notes);
  2. the lowest played note is the target's bass note;
  3. with a target ChordData at hand, every scale degree of the target
     resolves (from its root) to a played pitch class and the bass degree
     resolves to the played bass. This replaces the positional bass check
     of (2), since it does not rely on the octaves of the target notes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from ..app.explain import trace as xtrace
from .chord import ChordData
from .note_utils import DEFAULT_OCTAVE, degree_to_semitone, get_root_name, normalize_pitch_class, parse_note

DEGREE_LABELS = {
    "1": "root", "2": "2nd", "3": "3rd", "4": "4th", "5": "5th", "6": "6th", "7": "7th",
}


@dataclass
class MatchReport:
    is_match: bool
    missing: List[str] = field(default_factory=list)   # scale degrees (or note names) not played
    extra: List[str] = field(default_factory=list)     # played note names not in the chord
    expected_bass: Optional[str] = None
    actual_bass: Optional[str] = None
    messages: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.is_match


def degree_label(degree: str) -> str:
    base = degree.lstrip("b#")
    accidentals = degree[: len(degree) - len(base)]
    label = DEGREE_LABELS.get(base, degree)
    return f"{accidentals}{label}" if accidentals else label


def _lowest(parsed: Sequence[Tuple[int, int]]) -> Tuple[int, int]:
    # (octave, pitch class) ordering; pitch classes run C=1..B=12 inside an octave
    return min(parsed, key=lambda n: (n[1], n[0]))


def _multiset_diff(a: Sequence[int], b: Sequence[int]) -> List[int]:
    rest = list(b)
    out: List[int] = []
    for x in a:
        if x in rest:
            rest.remove(x)
        else:
            out.append(x)
    return out


def expected_pitch_classes(chord: ChordData) -> List[int]:
    """Pitch classes recomputed from the chord's root and scale degrees."""
    return [
        normalize_pitch_class(chord.root_note + degree_to_semitone(chord.scale_degrees[i]))
        for i in sorted(chord.scale_degrees)
    ]


def diagnose_match(
    user_notes: Sequence[str],
    target_notes: Sequence[str],
    target_chord: Optional[ChordData] = None,
    default_octave: int = DEFAULT_OCTAVE,
) -> MatchReport:
    """Compare played notes to a target and explain any difference."""
    user = [parse_note(n, default_octave) for n in user_notes]
    target = [parse_note(n, default_octave) for n in target_notes]

    if len(user) != len(target):
        report = MatchReport(is_match=False)
        report.messages.append(f"expected {len(target)} notes, got {len(user)}")
        return report

    if not user or any(pc == 0 for pc, _ in user) or any(pc == 0 for pc, _ in target):
        return MatchReport(is_match=False, messages=["unrecognized note"])

    user_pcs = [pc for pc, _ in user]
    target_pcs = [pc for pc, _ in target]
    report = MatchReport(is_match=True)

    # Pitch-class content
    missing_pcs = _multiset_diff(target_pcs, user_pcs)
    extra_pcs = _multiset_diff(user_pcs, target_pcs)
    if missing_pcs or extra_pcs:
        report.is_match = False
        report.extra = [get_root_name(pc) for pc in extra_pcs]
        report.missing = [get_root_name(pc) for pc in missing_pcs]

    user_bass = _lowest(user)[0]
    report.actual_bass = get_root_name(user_bass)

    if target_chord is not None and target_chord.scale_degrees:
        _check_degrees(report, user_pcs, user_bass, target_chord)
    else:
        target_bass = _lowest(target)[0]
        report.expected_bass = get_root_name(target_bass)
        if user_bass != target_bass:
            report.is_match = False
        for name in report.missing:
            report.messages.append(f"missing {name}")

    if report.expected_bass and report.actual_bass != report.expected_bass:
        report.messages.append(f"wrong inversion - needs {report.expected_bass} in the bass")
    for name in report.extra:
        report.messages.append(f"extra note {name}")
    return report


def _check_degrees(report: MatchReport, user_pcs: List[int], user_bass: int, chord: ChordData) -> None:
    expected = expected_pitch_classes(chord)
    missing_degrees = [
        chord.scale_degrees[i]
        for i, pc in zip(sorted(chord.scale_degrees), expected)
        if pc not in user_pcs
    ]
    if missing_degrees or sorted(expected) != sorted(user_pcs):
        report.is_match = False
    if missing_degrees:
        report.missing = missing_degrees
        for d in missing_degrees:
            report.messages.append(f"missing {degree_label(d)}")

    bass_pc = normalize_pitch_class(chord.root_note + degree_to_semitone(chord.bass_degree))
    report.expected_bass = get_root_name(bass_pc)
    if user_bass != bass_pc:
        report.is_match = False


def check_chord_match(
    user_notes: Sequence[str],
    target_notes: Sequence[str],
    target_chord: Optional[ChordData] = None,
    default_octave: int = DEFAULT_OCTAVE,
) -> bool:
    """True when the played notes are a correctly voiced rendition of the target."""
    report = diagnose_match(user_notes, target_notes, target_chord, default_octave)
    xtrace(
        "match_checked",
        {
            "user": list(user_notes),
            "target": list(target_notes),
            "chord": target_chord.name if target_chord is not None else None,
            "match": report.is_match,
        },
    )
    return report.is_match
