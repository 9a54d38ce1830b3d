"""
Item normalizer
Turns decoded sheet rows (column header -> cell value) into QuestionItem records
"""
import logging
import re
from typing import Any, Iterable, List, Mapping

from pydantic import BaseModel

from exam_paper.core.constants import DifficultyLevels, SheetColumns, Units
from exam_paper.schemas.question import QuestionItem

logger = logging.getLogger(__name__)

_DRIVE_SHARE_RE = re.compile(r"https://drive\.google\.com/file/d/([^/]+)/view")
_LEVEL_PREFIX_RE = re.compile(r"^L", re.IGNORECASE)
_ENUMERATOR_RE = re.compile(r"(\d+\.\s|[a-z]\)\s)")
_QUOTED_BREAK = '"<br>"'
_BREAK = "<br>"


class NormalizedRows(BaseModel):
    items: List[QuestionItem]
    dropped_rows: int = 0


def cell_text(value: Any) -> str:
    """Cell value as a trimmed string; integral floats lose their '.0'."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def direct_image_url(url: str) -> str:
    """Rewrite a Google Drive share link to its direct-view form."""
    match = _DRIVE_SHARE_RE.search(url or "")
    if match:
        return f"https://drive.google.com/uc?export=view&id={match.group(1)}"
    return url or ""


def parse_unit(value: Any) -> int:
    """Roman numeral I-V (or 1-5) -> unit number; 0 when unrecognised."""
    raw = cell_text(value).upper()
    if raw in Units.ROMAN:
        return Units.ROMAN[raw]
    if raw.isdigit() and int(raw) in Units.ALL:
        return int(raw)
    return 0


def parse_level(value: Any) -> str:
    """'L3' / 'l3' / '3' -> '3'; '0' when empty."""
    return _LEVEL_PREFIX_RE.sub("", cell_text(value)) or "0"


def format_question_text(value: Any) -> str:
    text = cell_text(value)
    if not text:
        return text
    text = text.replace(_QUOTED_BREAK, _BREAK)
    if _BREAK not in text:
        # break after enumerators such as "1. " or "a) "
        text = _ENUMERATOR_RE.sub(r"\1" + _BREAK, text)
    return text


def normalize_row(row: Mapping[str, Any], item_id: int) -> QuestionItem:
    """
    Build one QuestionItem. Raises pydantic.ValidationError when the unit or
    level is out of range.
    """
    image_url = cell_text(row.get(SheetColumns.IMAGE_URL))
    return QuestionItem(
        id=item_id,
        unit=parse_unit(row.get(SheetColumns.UNIT)),
        difficulty_level=parse_level(row.get(SheetColumns.BT_LEVEL)),
        text=format_question_text(row.get(SheetColumns.QUESTION)),
        image_ref=direct_image_url(image_url) if image_url else "",
        subject_code=cell_text(row.get(SheetColumns.SUBJECT_CODE)),
        subject=cell_text(row.get(SheetColumns.SUBJECT)),
        branch=cell_text(row.get(SheetColumns.BRANCH)),
        regulation=cell_text(row.get(SheetColumns.REGULATION)),
        year=cell_text(row.get(SheetColumns.YEAR)),
        semester=cell_text(row.get(SheetColumns.SEMESTER)),
        month=cell_text(row.get(SheetColumns.MONTH)),
        serial_no=cell_text(row.get(SheetColumns.SERIAL_NO)),
    )


def normalize_rows(rows: Iterable[Mapping[str, Any]]) -> NormalizedRows:
    """
    Normalize every row; ids are 1-based row positions.

    Rows with a unit outside 1-5 or an unknown B.T level are dropped and
    counted rather than failing the upload.
    """
    items: List[QuestionItem] = []
    dropped = 0
    for index, row in enumerate(rows, start=1):
        unit = parse_unit(row.get(SheetColumns.UNIT))
        level = parse_level(row.get(SheetColumns.BT_LEVEL))
        if unit not in Units.ALL or level not in DifficultyLevels.ALL:
            dropped += 1
            logger.debug("row_dropped", extra={"row": index, "unit": unit, "btl": level})
            continue
        items.append(normalize_row(row, index))

    if dropped:
        logger.info("rows_dropped", extra={"dropped_rows": dropped, "kept_rows": len(items)})
    return NormalizedRows(items=items, dropped_rows=dropped)
