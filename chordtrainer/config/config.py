from __future__ import annotations

"""Configuration loading and validation for ChordTrainer.

This module loads YAML configuration, applies defaults, and validates
that enumerations and numeric ranges are sane for the CLI.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import sys

import yaml

from ..app.tiers import DIFFICULTY_LEVELS


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        print(f"ERROR: Config file not found: {path}", file=sys.stderr)
        sys.exit(1)


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from YAML or defaults.

    Args:
        path: Optional path to a YAML config. If None, use package defaults.

    Returns:
        A dictionary with configuration values.
    """
    if path:
        cfg = _load_yaml(Path(path))
    else:
        default_path = Path(__file__).with_name("defaults.yml")
        cfg = _load_yaml(default_path)
    return cfg


def _int_in_range(section: Dict[str, Any], key: str, default: int, low: int, high: int) -> None:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError):
        print(f"WARNING: Invalid {key} '{section.get(key)}', using {default}.")
        value = default
    if not (low <= value <= high):
        print(f"WARNING: {key} {value} out of range {low}..{high}, using {default}.")
        value = default
    section[key] = value


def validate_config(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Apply defaults and validate configuration values.

    Args:
        cfg: The raw configuration dictionary.

    Returns:
        The validated and merged configuration dictionary.
    """
    cfg.setdefault("engine", {})
    cfg.setdefault("quiz", {})
    cfg.setdefault("stats", {})
    cfg.setdefault("storage", {})

    engine = cfg["engine"]
    quiz = cfg["quiz"]
    stats = cfg["stats"]
    storage = cfg["storage"]

    engine.setdefault("default_octave", 4)
    engine.setdefault("strict_matching", True)

    quiz.setdefault("difficulty", "level1")
    quiz.setdefault("questions", 10)
    quiz.setdefault("show_feedback", True)

    stats.setdefault("output_path", "./session_stats.json")

    storage.setdefault("enabled", False)
    storage.setdefault("data_dir", "./data")

    _int_in_range(engine, "default_octave", 4, 0, 8)
    _int_in_range(quiz, "questions", 10, 1, 1000)
    engine["strict_matching"] = bool(engine["strict_matching"])
    quiz["show_feedback"] = bool(quiz["show_feedback"])
    storage["enabled"] = bool(storage["enabled"])

    difficulty = quiz.get("difficulty")
    if difficulty not in DIFFICULTY_LEVELS:
        print(f"WARNING: Unsupported difficulty '{difficulty}', using 'level1'.")
        quiz["difficulty"] = "level1"

    return cfg
