from __future__ import annotations

"""Schema constants and Pydantic models for Parquet-backed game sessions."""

from datetime import datetime, timezone
from typing import Optional

import pandas as pd
from pandas.api.types import CategoricalDtype
from pydantic import BaseModel, Field, field_validator, model_validator

from ..app.tiers import DIFFICULTY_LEVELS, DifficultyLevel

# --- Constants ---

DTYPES = {
    "session_id": "string",
    "user": "string",
    "difficulty": CategoricalDtype(categories=list(DIFFICULTY_LEVELS), ordered=True),
    "score": "UInt16",
    "total": "UInt16",
    # timezone-aware UTC timestamps
    "completed_at": pd.DatetimeTZDtype(tz="UTC"),
}


# --- Pydantic models ---

class GameSessionRow(BaseModel):
    session_id: str
    user: Optional[str] = None
    difficulty: DifficultyLevel
    score: int = Field(ge=0, le=65535)
    total: int = Field(ge=0, le=65535)
    completed_at: datetime

    @model_validator(mode="after")
    def _score_le_total(self) -> "GameSessionRow":
        if self.score > self.total:
            raise ValueError("score must be <= total")
        return self

    @field_validator("completed_at")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
