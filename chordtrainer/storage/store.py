from __future__ import annotations

"""Parquet-backed store for finished game sessions using pandas + pyarrow.

Unit of data: one row per completed quiz session (difficulty, score, total).
"""

from pathlib import Path

import pandas as pd

from .schema import DTYPES, GameSessionRow


DATA_FILE = "game_sessions.parquet"


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def _fix_dtypes(df: pd.DataFrame) -> pd.DataFrame:
    for col, dt in DTYPES.items():
        if col not in df.columns:
            df[col] = pd.NA
        df[col] = df[col].astype(dt)
    return df[list(DTYPES.keys())]


def init_store(data_dir: Path) -> None:
    """Ensure the data directory and an empty Parquet file with the right schema exist."""
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    path = data_dir / DATA_FILE
    if not path.exists():
        _empty_df().to_parquet(path, engine="pyarrow", compression="zstd", index=False)


def validate_records(records: list[GameSessionRow]) -> pd.DataFrame:
    """Validate GameSessionRow records (or dicts) and return a typed DataFrame."""
    if not isinstance(records, list):
        raise TypeError("records must be a list[GameSessionRow]")
    rows = [r if isinstance(r, GameSessionRow) else GameSessionRow.model_validate(r) for r in records]
    df = pd.DataFrame([r.model_dump() for r in rows])
    return _fix_dtypes(df)


def append_game_sessions(df_new: pd.DataFrame, data_dir: Path) -> None:
    """Append rows to the game_sessions table, dropping exact duplicates."""
    f = Path(data_dir) / DATA_FILE
    if f.exists():
        df_old = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    else:
        Path(data_dir).mkdir(parents=True, exist_ok=True)
        df_old = _empty_df()
    frames = [df for df in (df_old, _fix_dtypes(df_new.copy())) if not df.empty]
    combined = pd.concat(frames, ignore_index=True) if frames else _empty_df()
    combined = _fix_dtypes(combined).drop_duplicates()
    combined.to_parquet(f, engine="pyarrow", compression="zstd", index=False)


def load_all(data_dir: Path) -> pd.DataFrame:
    """Load every stored session and add `acc` (score / total, float32)."""
    f = Path(data_dir) / DATA_FILE
    if not f.exists():
        return _empty_df().assign(acc=pd.Series(dtype="float32"))
    df = _fix_dtypes(pd.read_parquet(f, engine="pyarrow"))
    total = df["total"].astype("float32").where(df["total"] > 0, other=1.0)
    df["acc"] = (df["score"].astype("float32") / total).astype("float32")
    return df


def top_scores(df: pd.DataFrame, limit: int = 10, difficulty: str | None = None) -> pd.DataFrame:
    """Highest scores first; ties broken by earliest completion."""
    if difficulty is not None:
        df = df[df["difficulty"].astype("string") == difficulty]
    ordered = df.sort_values(["score", "completed_at"], ascending=[False, True], kind="mergesort")
    return ordered.head(int(limit)).reset_index(drop=True)


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON) for quick inspection."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True, date_format="iso")
