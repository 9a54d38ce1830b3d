"""
Shared test configuration and fixtures
pytest's conftest.py defines the fixtures every test module can use
"""
import os
import sys
import random
import pytest
from typing import Any, Dict, Iterable, List, Tuple

# settings are read at import time, so pick the test config first
os.environ.setdefault("ENV", "test")

# put the project root on the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from exam_paper.schemas.question import QuestionItem, QuestionPool
from exam_paper.services.pool_store import QuestionPoolStore


METADATA = {
    "subject_code": "CS301",
    "subject": "Operating Systems",
    "branch": "CSE",
    "regulation": "R20",
    "year": "III",
    "semester": "I",
    "month": "March 2025",
}

ROMAN = {1: "I", 2: "II", 3: "III", 4: "IV", 5: "V"}

# (unit, level, count) rows of a bank that fills both mid1 and mid2 at max level 6
FULL_BANK_LAYOUT: List[Tuple[int, str, int]] = [
    (unit, level, count)
    for unit in range(1, 6)
    for level, count in (("1", 2), ("2", 2), ("3", 2), ("4", 1), ("5", 1), ("6", 1))
]


# ===========================================
# Question builders
# ===========================================

def make_items(layout: Iterable[Tuple[int, str, int]], start_id: int = 1) -> List[QuestionItem]:
    """Expand (unit, level, count) triples into QuestionItems with unique ids"""
    items = []
    next_id = start_id
    for unit, level, count in layout:
        for _ in range(count):
            items.append(QuestionItem(
                id=next_id,
                unit=unit,
                difficulty_level=level,
                text=f"Q{next_id} (unit {unit}, L{level})",
                **METADATA,
            ))
            next_id += 1
    return items


def make_rows(layout: Iterable[Tuple[int, str, int]]) -> List[Dict[str, Any]]:
    """Same layout as decoded sheet rows"""
    rows = []
    serial = 1
    for unit, level, count in layout:
        for _ in range(count):
            rows.append({
                "S.NO": serial,
                "Unit": ROMAN[unit],
                "Question": f"Question {serial}",
                "B.T Level": f"L{level}",
                "Subject Code": METADATA["subject_code"],
                "Subject": METADATA["subject"],
                "Branch": METADATA["branch"],
                "Regulation": METADATA["regulation"],
                "Year": METADATA["year"],
                "Sem": METADATA["semester"],
                "Month": METADATA["month"],
                "Image Url": "",
            })
            serial += 1
    return rows


@pytest.fixture
def item_factory():
    """make_items as a fixture"""
    return make_items


@pytest.fixture
def full_bank() -> List[QuestionItem]:
    """Bank that satisfies every built-in paper type"""
    return make_items(FULL_BANK_LAYOUT)


@pytest.fixture
def full_pool(full_bank) -> QuestionPool:
    return QuestionPool(version=1, items=tuple(full_bank))


@pytest.fixture
def full_bank_rows() -> List[Dict[str, Any]]:
    return make_rows(FULL_BANK_LAYOUT)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source"""
    return random.Random(42)


@pytest.fixture
def pool_store() -> QuestionPoolStore:
    """Fresh store with the catalog-derived size gate"""
    return QuestionPoolStore(min_size=17)


# ===========================================
# Utility fixtures
# ===========================================

@pytest.fixture
def capture_logs():
    """Capture log records"""
    import logging

    class LogCapture(logging.Handler):
        def __init__(self):
            super().__init__()
            self.records = []

        def emit(self, record):
            self.records.append(record)

        def get_messages(self):
            return [r.getMessage() for r in self.records]

    handler = LogCapture()
    logger = logging.getLogger()
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    yield handler
    logger.removeHandler(handler)
    logger.setLevel(previous_level)
