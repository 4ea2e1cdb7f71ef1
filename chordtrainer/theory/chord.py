from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .note_utils import (
    DEFAULT_OCTAVE,
    get_root_name,
    normalize_pitch_class,
    note_to_numeric,
    numeric_to_note,
)
from .patterns import ChordPattern


@dataclass(frozen=True)
class ChordData:
    """A concrete chord instance served to a question/API caller."""

    id: int
    name: str
    notes: Tuple[str, ...]            # bass first, ascending
    note_numbers: Tuple[int, ...]     # pitch class of each note, same order
    difficulty: str
    root_note: int
    scale_degrees: Mapping[int, str] = field(hash=False)  # note position -> degree ("1", "b3", ...)
    inversion: int = 0
    chord_type: str = field(default="")

    @property
    def root_name(self) -> str:
        return get_root_name(self.root_note)

    @property
    def bass_note(self) -> str:
        return self.notes[0]

    @property
    def bass_degree(self) -> str:
        return self.scale_degrees[0]

    def to_json(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "notes": list(self.notes),
            "noteNumbers": list(self.note_numbers),
            "difficulty": self.difficulty,
            "rootNote": self.root_note,
            "scaleDegrees": {i: d for i, d in sorted(self.scale_degrees.items())},
            "inversion": self.inversion,
            "type": self.chord_type,
        }

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "ChordData":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            notes=tuple(data.get("notes", [])),
            note_numbers=tuple(int(n) for n in data.get("noteNumbers", [])),
            difficulty=str(data.get("difficulty", "")),
            root_note=int(data.get("rootNote", 0)),
            scale_degrees=MappingProxyType({int(k): str(v) for k, v in (data.get("scaleDegrees") or {}).items()}),
            inversion=int(data.get("inversion", 0)),
            chord_type=str(data.get("type", "")),
        )


def calculate_chord_notes(root: int, intervals: Sequence[int]) -> List[int]:
    """Pitch classes (1..12) of `root` transposed by each interval."""
    return [normalize_pitch_class(root + iv) for iv in intervals]


def generate_chord_name(root: int, pattern: ChordPattern) -> str:
    """'Cm7' in root position, slash-bass notation ('C/E') for inversions."""
    name = f"{get_root_name(root)}{pattern.display}"
    if pattern.inversion == 0:
        return name
    bass = calculate_chord_notes(root, pattern.intervals[:1])[0]
    return f"{name}/{get_root_name(bass)}"


def generate_note_strings(root: int, pattern: ChordPattern, base_octave: int = DEFAULT_OCTAVE) -> List[str]:
    """Place the chord low-to-high starting at `base_octave`.

    The octave steps up whenever a note's pitch class is not above the
    previous one, so the first note is always the lowest.
    """
    pcs = calculate_chord_notes(root, pattern.intervals)
    octave = base_octave
    notes: List[str] = []
    prev = None
    for pc in pcs:
        if prev is not None and pc <= prev:
            octave += 1
        notes.append(numeric_to_note(pc, octave))
        prev = pc
    return notes


def scale_degrees_for(root: int, pattern: ChordPattern) -> Dict[int, str]:
    """Map each note position to its degree.

    Inversion k rotates the root-position degree order by k, so position i
    holds the degree at (i + k) mod n.
    """
    degrees = pattern.degrees
    n = len(degrees)
    return {i: degrees[(i + pattern.inversion) % n] for i in range(n)}


def create_chord(
    root: int,
    pattern: ChordPattern,
    chord_id: int,
    difficulty: str,
    base_octave: int = DEFAULT_OCTAVE,
) -> ChordData:
    notes = generate_note_strings(root, pattern, base_octave=base_octave)
    return ChordData(
        id=chord_id,
        name=generate_chord_name(root, pattern),
        notes=tuple(notes),
        note_numbers=tuple(note_to_numeric(n) for n in notes),
        difficulty=difficulty,
        root_note=normalize_pitch_class(root),
        scale_degrees=MappingProxyType(scale_degrees_for(root, pattern)),
        inversion=pattern.inversion,
        chord_type=pattern.type,
    )
