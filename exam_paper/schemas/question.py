# exam_paper/schemas/question.py
from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exam_paper.core.constants import DifficultyLevels, Units


class QuestionItem(BaseModel):
    """
    One normalized question row. Immutable once created.
    """
    model_config = ConfigDict(frozen=True)

    id: int
    unit: int = Field(ge=Units.MIN, le=Units.MAX)
    difficulty_level: str
    text: str = ""
    image_ref: str = ""

    # pass-through metadata
    subject_code: str = ""
    subject: str = ""
    branch: str = ""
    regulation: str = ""
    year: str = ""
    semester: str = ""
    month: str = ""
    serial_no: str = ""

    @field_validator("difficulty_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        if v not in DifficultyLevels.ALL:
            raise ValueError(f"difficulty_level must be one of {DifficultyLevels.ALL}, got {v!r}")
        return v


class QuestionPool(BaseModel):
    """
    Immutable snapshot of the uploaded questions.
    The pool store swaps whole snapshots; nothing mutates one in place.
    """
    model_config = ConfigDict(frozen=True)

    version: int = 0
    items: Tuple[QuestionItem, ...] = ()
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def __len__(self) -> int:
        return len(self.items)

    def count_by_unit(self) -> Dict[int, int]:
        counts = {u: 0 for u in Units.ALL}
        counts.update(Counter(q.unit for q in self.items))
        return counts

    def count_by_level(self) -> Dict[str, int]:
        counts = {lv: 0 for lv in DifficultyLevels.ALL}
        counts.update(Counter(q.difficulty_level for q in self.items))
        return counts


class PoolSummary(BaseModel):
    """Upload-time counts reported back to the uploader."""
    version: int
    question_count: int
    dropped_rows: int = 0
    per_unit: Dict[int, int]
    per_level: Dict[str, int]
    recall_tier: int
    higher_tiers: int

    @classmethod
    def from_pool(cls, pool: QuestionPool, dropped_rows: int = 0) -> "PoolSummary":
        per_level = pool.count_by_level()
        recall = per_level.get(DifficultyLevels.RECALL, 0)
        return cls(
            version=pool.version,
            question_count=len(pool),
            dropped_rows=dropped_rows,
            per_unit=pool.count_by_unit(),
            per_level=per_level,
            recall_tier=recall,
            higher_tiers=len(pool) - recall,
        )
