"""
Service layer
Normalizing, storing, checking, selecting and assembling questions
"""
from exam_paper.services.feasibility import (
    FeasibilityReport,
    check,
    eligible_items,
    resolve_difficulty_quotas,
)
from exam_paper.services.selection_engine import (
    build_difficulty_schedule,
    select,
    select_paper,
)
from exam_paper.services.normalizer import (
    NormalizedRows,
    normalize_row,
    normalize_rows,
    direct_image_url,
)
from exam_paper.services.pool_store import (
    QuestionPoolStore,
    get_pool_store,
)
from exam_paper.services.paper_assembler import (
    assemble_paper,
    paper_details,
)
from exam_paper.services.paper_generator import (
    PaperGenerator,
    get_paper_generator,
)

__all__ = [
    # Feasibility
    "FeasibilityReport",
    "check",
    "eligible_items",
    "resolve_difficulty_quotas",

    # Selection
    "build_difficulty_schedule",
    "select",
    "select_paper",

    # Normalizer
    "NormalizedRows",
    "normalize_row",
    "normalize_rows",
    "direct_image_url",

    # Pool store
    "QuestionPoolStore",
    "get_pool_store",

    # Assembly
    "assemble_paper",
    "paper_details",
    "PaperGenerator",
    "get_paper_generator",
]
