from __future__ import annotations

"""Difficulty tiers: declarative (root x pattern) rules loaded from YAML.

Each tier in resources/tiers.yml lists rules of roots, chord types and
inversions. Chord lists are built on demand and memoized per tier.
"""

import random
import sys
from dataclasses import replace
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple

import yaml

from ..theory.chord import ChordData, create_chord
from ..theory.note_utils import DEFAULT_OCTAVE, note_to_numeric
from ..theory.patterns import CatalogLookupError, ChordCatalog, default_catalog
from .explain import trace as xtrace


DIFFICULTY_LEVELS = (
    "level1", "level2", "level3", "level4", "level5",
    "level6", "level7", "level8", "level9",
)
DifficultyLevel = Literal[
    "level1", "level2", "level3", "level4", "level5",
    "level6", "level7", "level8", "level9",
]

ALL_ROOTS = tuple(range(1, 13))


def _default_tiers_path() -> str:
    return str(Path(__file__).resolve().parents[1] / "resources" / "tiers.yml")


@lru_cache(maxsize=4)
def load_tiers(path: str | None = None) -> Dict[str, Any]:
    p = path or _default_tiers_path()
    with open(p, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return data


def list_tiers(path: str | None = None) -> List[Dict[str, Any]]:
    data = load_tiers(path)
    items = []
    for tid, tdef in (data.get("tiers") or {}).items():
        items.append({"id": tid, **(tdef or {})})
    return items


def get_tier(tier_id: str, path: str | None = None) -> Dict[str, Any]:
    data = load_tiers(path)
    t = (data.get("tiers") or {}).get(tier_id)
    if not t:
        raise KeyError(f"Unknown difficulty level: {tier_id}")
    return dict(t)


def _resolve_roots(value: Any) -> List[int]:
    if value is None or value == "all":
        return list(ALL_ROOTS)
    if isinstance(value, (str, int)):
        value = [value]
    roots: List[int] = []
    for item in value:
        if isinstance(item, int):
            pc = item if 1 <= item <= 12 else 0
        else:
            pc = note_to_numeric(str(item))
        if pc == 0:
            raise ValueError(f"Invalid root in tier rule: {item!r}")
        roots.append(pc)
    return roots


def expand_rule(rule: Dict[str, Any]) -> Iterator[Tuple[int, str, int]]:
    """Yield (root, chord type, inversion), root-major then type then inversion."""
    excluded = set(_resolve_roots(rule["exclude_roots"])) if rule.get("exclude_roots") else set()
    roots = [r for r in _resolve_roots(rule.get("roots", "all")) if r not in excluded]
    types = list(rule.get("types") or [])
    inversions = [int(i) for i in (rule.get("inversions") or [0])]
    for root in roots:
        for chord_type in types:
            for inv in inversions:
                yield root, str(chord_type), inv


def build_chord_set(
    tier: str,
    rules: Optional[List[Dict[str, Any]]] = None,
    catalog: Optional[ChordCatalog] = None,
    strict: bool = False,
    base_octave: int = DEFAULT_OCTAVE,
) -> List[ChordData]:
    """Build the ordered chord list for a tier.

    Combinations missing from the catalog are skipped (and traced) unless
    `strict` is set, in which case CatalogLookupError is raised.
    """
    if rules is None:
        rules = list(get_tier(tier).get("rules") or [])
    if catalog is None:
        catalog = default_catalog()

    chords: List[ChordData] = []
    next_id = 1
    for rule in rules:
        for root, chord_type, inv in expand_rule(rule):
            pattern = catalog.lookup_pattern(chord_type, inv)
            if pattern is None:
                if strict:
                    raise CatalogLookupError(f"{tier}: no pattern for {chord_type!r} inversion {inv}")
                xtrace("pattern_missing", {"tier": tier, "type": chord_type, "inversion": inv})
                continue
            chords.append(create_chord(root, pattern, next_id, tier, base_octave=base_octave))
            next_id += 1
    xtrace("chord_set_built", {"tier": tier, "count": len(chords)})
    return chords


@lru_cache(maxsize=None)
def _cached_chord_set(tier: str) -> Tuple[ChordData, ...]:
    return tuple(build_chord_set(tier))


def get_chords_for_difficulty(tier: str) -> List[ChordData]:
    """Full ordered chord list for a tier (ids start at 1 within the tier)."""
    if tier not in DIFFICULTY_LEVELS:
        raise KeyError(f"Unknown difficulty level: {tier}")
    return list(_cached_chord_set(tier))


def get_all_chords() -> List[ChordData]:
    """All tiers concatenated in order, with ids renumbered across tiers.

    A tier that fails to build is reported and left out; the others are
    still returned.
    """
    out: List[ChordData] = []
    for tier in DIFFICULTY_LEVELS:
        try:
            chords = get_chords_for_difficulty(tier)
        except (KeyError, ValueError) as e:
            print(f"WARNING: Skipping tier '{tier}': {e}", file=sys.stderr)
            continue
        for chord in chords:
            out.append(replace(chord, id=len(out) + 1))
    return out


def random_chord(tier: str, rng: Optional[random.Random] = None) -> ChordData:
    chords = get_chords_for_difficulty(tier)
    if not chords:
        raise ValueError(f"No chords available for {tier}")
    return (rng or random).choice(chords)
