from __future__ import annotations

"""Chord pattern catalog: chord types crossed with inversions.

The catalog is built once by a pure function and never mutated afterwards.
"""

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .note_utils import degree_to_semitone


class CatalogLookupError(KeyError):
    """Raised when a (chord type, inversion) pair has no pattern."""


# type -> (display suffix, root-position degrees)
CHORD_TYPES: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "major": ("", ("1", "3", "5")),
    "minor": ("m", ("1", "b3", "5")),
    "augmented": ("aug", ("1", "3", "#5")),
    "diminished": ("dim", ("1", "b3", "b5")),
    "sus2": ("sus2", ("1", "2", "5")),
    "sus4": ("sus4", ("1", "4", "5")),
    "dominant7": ("7", ("1", "3", "5", "b7")),
    "major7": ("maj7", ("1", "3", "5", "7")),
    "minor7": ("m7", ("1", "b3", "5", "b7")),
    "minor_major7": ("m(maj7)", ("1", "b3", "5", "7")),
    "diminished7": ("dim7", ("1", "b3", "b5", "bb7")),
    "half_diminished7": ("m7b5", ("1", "b3", "b5", "b7")),
    "diminished_major7": ("dim(maj7)", ("1", "b3", "b5", "7")),
    "augmented_minor7": ("aug7", ("1", "3", "#5", "b7")),
    "augmented_major7": ("aug(maj7)", ("1", "3", "#5", "7")),
}

TRIAD_TYPES = ("major", "minor", "augmented", "diminished", "sus2", "sus4")
SEVENTH_TYPES = tuple(t for t in CHORD_TYPES if t not in TRIAD_TYPES)


@dataclass(frozen=True)
class ChordPattern:
    """Template for one chord type in one inversion.

    `intervals` are semitone offsets from the root, ordered from the bass
    upwards. Members that sit below the root in an inversion carry negative
    offsets, so C major in first inversion is (-8, -5, 0): E, G, C.
    """

    type: str
    display: str
    intervals: Tuple[int, ...]
    inversion: int
    scale_degree_map: Mapping[int, str] = field(compare=False)

    @property
    def size(self) -> int:
        return len(self.intervals)

    @property
    def degrees(self) -> Tuple[str, ...]:
        """Root-position degrees in interval order."""
        return tuple(self.scale_degree_map[k] for k in sorted(self.scale_degree_map))

    @property
    def bass_intervals(self) -> Tuple[int, ...]:
        """Offsets measured from the bass note instead of the root."""
        bass = self.intervals[0]
        return tuple(iv - bass for iv in self.intervals)


def invert_intervals(root_intervals: Tuple[int, ...], inversion: int) -> Tuple[int, ...]:
    """Rotate members so member `inversion` becomes the bass.

    Members that wrap past the top are placed in the octave above the
    previous one; the whole voicing is then shifted so the root keeps
    offset 0 in root position and sits above the bass otherwise.
    """
    n = len(root_intervals)
    k = inversion % n
    rotated = [root_intervals[(i + k) % n] for i in range(n)]
    ascending = [rotated[0]]
    for iv in rotated[1:]:
        while iv <= ascending[-1]:
            iv += 12
        ascending.append(iv)
    if k == 0:
        return tuple(ascending)
    return tuple(iv - 12 for iv in ascending)


def _make_patterns(chord_type: str, display: str, degrees: Tuple[str, ...]) -> List[ChordPattern]:
    root_intervals = tuple(degree_to_semitone(d) for d in degrees)
    degree_map = MappingProxyType(dict(zip(root_intervals, degrees)))
    return [
        ChordPattern(
            type=chord_type,
            display=display,
            intervals=invert_intervals(root_intervals, inv),
            inversion=inv,
            scale_degree_map=degree_map,
        )
        for inv in range(len(degrees))
    ]


class ChordCatalog:
    """Read-only index of chord patterns keyed by (type, inversion)."""

    def __init__(self, patterns: List[ChordPattern]) -> None:
        self._patterns: Tuple[ChordPattern, ...] = tuple(patterns)
        self._index = MappingProxyType({(p.type, p.inversion): p for p in self._patterns})

    def __iter__(self) -> Iterator[ChordPattern]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    @property
    def types(self) -> List[str]:
        seen: List[str] = []
        for p in self._patterns:
            if p.type not in seen:
                seen.append(p.type)
        return seen

    def lookup_pattern(self, chord_type: str, inversion: int = 0) -> Optional[ChordPattern]:
        return self._index.get((chord_type, int(inversion)))

    def require(self, chord_type: str, inversion: int = 0) -> ChordPattern:
        pattern = self.lookup_pattern(chord_type, inversion)
        if pattern is None:
            raise CatalogLookupError(f"No chord pattern for {chord_type!r} inversion {inversion}")
        return pattern


def build_catalog(types: Optional[Mapping[str, Tuple[str, Tuple[str, ...]]]] = None) -> ChordCatalog:
    """Build the catalog: every type in every inversion it supports.

    Triads get inversions 0-2, seventh chords 0-3.
    """
    table = CHORD_TYPES if types is None else types
    patterns: List[ChordPattern] = []
    for chord_type, (display, degrees) in table.items():
        patterns.extend(_make_patterns(chord_type, display, degrees))
    return ChordCatalog(patterns)


@lru_cache(maxsize=1)
def default_catalog() -> ChordCatalog:
    return build_catalog()
