"""
Data model
Questions, requirement sets and paper output
"""
from exam_paper.schemas.question import PoolSummary, QuestionItem, QuestionPool
from exam_paper.schemas.requirements import (
    DifficultyQuota,
    DifficultyTier,
    PaperTemplate,
    RequirementSet,
    Slot,
    UnitQuota,
)
from exam_paper.schemas.paper import (
    Paper,
    PaperDetails,
    PaperQuestion,
    SelectedQuestion,
    Selection,
)

__all__ = [
    "PoolSummary",
    "QuestionItem",
    "QuestionPool",
    "DifficultyQuota",
    "DifficultyTier",
    "PaperTemplate",
    "RequirementSet",
    "Slot",
    "UnitQuota",
    "Paper",
    "PaperDetails",
    "PaperQuestion",
    "SelectedQuestion",
    "Selection",
]
