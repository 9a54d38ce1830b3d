"""
Paper assembler
Maps engine selections plus shared metadata onto the Paper payload
"""
from typing import Dict, List, Optional, Sequence

from exam_paper.core.exceptions import MissingMetadataError
from exam_paper.core.settings import settings
from exam_paper.schemas.paper import Paper, PaperDetails, PaperQuestion, Selection
from exam_paper.schemas.question import QuestionItem
from exam_paper.schemas.requirements import PaperTemplate


def _first_item(selections: Sequence[Selection]) -> Optional[QuestionItem]:
    for selection in selections:
        if selection.questions:
            return selection.questions[0].item
    return None


def paper_details(selections: Sequence[Selection], required_fields: Optional[List[str]] = None) -> PaperDetails:
    """
    Metadata echoed from the first selected question (Part A first).

    Raises MissingMetadataError for an empty required field.
    """
    first = _first_item(selections)
    details = PaperDetails(
        subject_code=first.subject_code if first else "",
        subject=first.subject if first else "",
        branch=first.branch if first else "",
        regulation=first.regulation if first else "",
        year=first.year if first else "",
        semester=first.semester if first else "",
        month=first.month if first else "",
    )

    fields = required_fields if required_fields is not None else settings.required_metadata_fields
    for field in fields:
        if not getattr(details, field, ""):
            raise MissingMetadataError(field)
    return details


def assemble_paper(
    template: PaperTemplate,
    selections: Sequence[Selection],
    pool_version: int,
    required_fields: Optional[List[str]] = None,
) -> Paper:
    sections: Dict[str, List[PaperQuestion]] = {}
    for selection in selections:
        sections[selection.section] = [
            PaperQuestion(
                label=q.label,
                unit=q.item.unit,
                difficulty_level=q.item.difficulty_level,
                text=q.item.text,
                image_ref=q.item.image_ref,
            )
            for q in selection.questions
        ]

    return Paper(
        paper_type=template.paper_type,
        pool_version=pool_version,
        sections=sections,
        details=paper_details(selections, required_fields),
    )
