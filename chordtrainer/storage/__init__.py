from .schema import DTYPES, GameSessionRow
from .store import (
    init_store,
    validate_records,
    append_game_sessions,
    load_all,
    top_scores,
    export_ndjson,
)

__all__ = [
    "DTYPES",
    "GameSessionRow",
    "init_store",
    "validate_records",
    "append_game_sessions",
    "load_all",
    "top_scores",
    "export_ndjson",
]
