# exam_paper/schemas/paper.py
from __future__ import annotations

from collections import Counter
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from exam_paper.schemas.question import QuestionItem


# ── engine output ───────────────────────────────────────────────
class SelectedQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: QuestionItem
    label: str
    section: str
    relaxed: bool = False   # filled by the unit-only fallback


class Selection(BaseModel):
    """Labeled, ordered picks for one section. Never cached."""
    model_config = ConfigDict(frozen=True)

    section: str
    questions: Tuple[SelectedQuestion, ...] = ()

    def __len__(self) -> int:
        return len(self.questions)

    @property
    def ids(self) -> List[int]:
        return [q.item.id for q in self.questions]

    @property
    def labels(self) -> List[str]:
        return [q.label for q in self.questions]

    def unit_counts(self) -> Dict[int, int]:
        return dict(Counter(q.item.unit for q in self.questions))

    def level_counts(self) -> Dict[str, int]:
        return dict(Counter(q.item.difficulty_level for q in self.questions))

    @property
    def relaxed_labels(self) -> List[str]:
        return [q.label for q in self.questions if q.relaxed]


# ── assembler output ────────────────────────────────────────────
class PaperQuestion(BaseModel):
    label: str
    unit: int
    difficulty_level: str = Field(serialization_alias="btLevel")
    text: str = Field(serialization_alias="question")
    image_ref: str = Field(default="", serialization_alias="imageUrl")


class PaperDetails(BaseModel):
    subject_code: str = Field(default="", serialization_alias="subjectCode")
    subject: str = ""
    branch: str = ""
    regulation: str = ""
    year: str = ""
    semester: str = ""
    month: str = ""


class Paper(BaseModel):
    paper_type: str
    pool_version: int
    sections: Dict[str, List[PaperQuestion]]
    details: PaperDetails

    def to_dict(self) -> Dict[str, Any]:
        """Front-end payload: {"partA": [...], "partB": [...], "paperDetails": {...}}"""
        payload: Dict[str, Any] = {
            f"part{name}": [q.model_dump(by_alias=True) for q in questions]
            for name, questions in self.sections.items()
        }
        payload["paperDetails"] = self.details.model_dump(by_alias=True)
        return payload
