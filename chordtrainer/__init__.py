"""ChordTrainer: build the named chord on the piano, get it verified.

The music-theory engine lives in `chordtrainer.theory`; difficulty tiers in
`chordtrainer.app.tiers`.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .app.tiers import DIFFICULTY_LEVELS, get_all_chords, get_chords_for_difficulty  # noqa: E402
from .theory.matcher import check_chord_match  # noqa: E402

__all__ = [
    "__version__",
    "DIFFICULTY_LEVELS",
    "get_all_chords",
    "get_chords_for_difficulty",
    "check_chord_match",
]
