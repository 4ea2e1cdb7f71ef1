# chordtrainer/theory/note_utils.py
from __future__ import annotations

"""Pitch-class and note-string helpers.

Pitch classes are numbered 1..12 (1 = C, 12 = B). Note strings use
scientific pitch notation, e.g. "C4", "F#3", "Bb5".
"""

import re
from typing import Dict, Tuple

DEFAULT_OCTAVE = 4

PITCH_NAMES: Dict[int, str] = {
    1: "C", 2: "C#", 3: "D", 4: "Eb", 5: "E", 6: "F",
    7: "F#", 8: "G", 9: "Ab", 10: "A", 11: "Bb", 12: "B",
}
NAME_TO_NUMBER: Dict[str, int] = {
    "C": 1, "C#": 2, "Db": 2, "D": 3, "D#": 4, "Eb": 4,
    "E": 5, "F": 6, "F#": 7, "Gb": 7, "G": 8, "G#": 9,
    "Ab": 9, "A": 10, "A#": 11, "Bb": 11, "B": 12,
}

BASE_DEGREE_SEMITONES = {"1": 0, "2": 2, "3": 4, "4": 5, "5": 7, "6": 9, "7": 11}

_NOTE_RE = re.compile(r"^([A-Ga-g][#b]?)(-?\d+)?$")


def normalize_pitch_class(value: int) -> int:
    """Wrap any integer into 1..12 (0 -> 12, 13 -> 1, -1 -> 11)."""
    return (int(value) - 1) % 12 + 1


def get_root_name(pitch_class: int) -> str:
    return PITCH_NAMES.get(pitch_class, "")


def numeric_to_note(pitch_class: int, octave: int) -> str:
    return f"{PITCH_NAMES[normalize_pitch_class(pitch_class)]}{octave}"


def parse_note(note: str, default_octave: int = DEFAULT_OCTAVE) -> Tuple[int, int]:
    """Parse a note string into (pitch_class, octave).

    Malformed input yields pitch class 0. A missing octave is assumed to be
    `default_octave`.
    """
    m = _NOTE_RE.match(str(note).strip())
    if not m:
        return 0, default_octave
    name = m.group(1)
    name = name[0].upper() + name[1:]
    octave = int(m.group(2)) if m.group(2) is not None else default_octave
    return NAME_TO_NUMBER.get(name, 0), octave


def note_to_numeric(note: str) -> int:
    """Pitch class (1..12) of a note string, 0 when it cannot be parsed."""
    return parse_note(note)[0]


def degree_to_semitone(degree: str) -> int:
    """Semitone offset of a scale degree token such as 'b3', '#5' or 'bb7'."""
    token = str(degree)
    base = token.lstrip("b#")
    if base not in BASE_DEGREE_SEMITONES:
        raise ValueError(f"Unknown scale degree: {degree}")
    shift = token.count("#") - token.count("b")
    return (BASE_DEGREE_SEMITONES[base] + shift) % 12


def midi_to_note(midi: int) -> str:
    """Convert a MIDI number to a note string (60 -> 'C4')."""
    midi = int(midi)
    if midi < 0 or midi > 127:
        raise ValueError("MIDI out of range")
    return numeric_to_note(midi % 12 + 1, midi // 12 - 1)


def note_to_midi(note: str) -> int:
    """Convert a note string to a MIDI number ('C4' -> 60)."""
    pc, octave = parse_note(note)
    if pc == 0:
        raise ValueError(f"Invalid note string: {note}")
    midi = (octave + 1) * 12 + pc - 1
    if midi < 0 or midi > 127:
        raise ValueError("MIDI out of range")
    return midi
