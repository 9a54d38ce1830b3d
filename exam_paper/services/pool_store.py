"""
Question pool store
Holds the single active question pool for the process.

Swap-and-read protocol: an upload builds a brand-new immutable
QuestionPool and swaps the reference under a lock; a generate request
takes one snapshot() and works on it alone. A request in flight therefore
never sees a half-replaced pool.
"""
import logging
import threading
from typing import Iterable, List, Optional

from exam_paper.core.exceptions import (
    EmptyPoolError,
    MissingMetadataError,
    PoolTooSmallError,
    ValidationError,
)
from exam_paper.core.settings import settings
from exam_paper.schemas.question import PoolSummary, QuestionItem, QuestionPool
from exam_paper.specs.registry import min_pool_size

logger = logging.getLogger(__name__)


class QuestionPoolStore:
    """
    Versioned holder of the active QuestionPool
    Version starts at 0 (nothing uploaded) and grows by one per upload.
    """

    def __init__(
        self,
        min_size: Optional[int] = None,
        required_fields: Optional[List[str]] = None
    ):
        self._lock = threading.Lock()
        self._pool: Optional[QuestionPool] = None
        self._version = 0
        self._min_size = min_size
        self.required_fields = (
            required_fields if required_fields is not None
            else settings.required_metadata_fields
        )

    @property
    def min_size(self) -> int:
        """Upload gate: explicit value, then settings, then the catalog"""
        if self._min_size is not None:
            return self._min_size
        if settings.MIN_POOL_SIZE is not None:
            return settings.MIN_POOL_SIZE
        return min_pool_size()

    @property
    def version(self) -> int:
        return self._version

    @property
    def has_pool(self) -> bool:
        return self._pool is not None

    def _validate(self, items: tuple) -> None:
        if not items:
            raise EmptyPoolError("The uploaded sheet holds no usable questions.")

        if len(items) < self.min_size:
            raise PoolTooSmallError(have=len(items), need=self.min_size)

        sample = items[0]
        for field in self.required_fields:
            if not getattr(sample, field, ""):
                raise MissingMetadataError(field)

        ids = [q.id for q in items]
        if len(set(ids)) != len(ids):
            raise ValidationError("Question ids must be unique within a pool.")

    def replace(self, items: Iterable[QuestionItem], dropped_rows: int = 0) -> PoolSummary:
        """
        Validate and install a new pool, replacing any previous one

        Args:
            items: normalized questions
            dropped_rows: rows the normalizer discarded, for the summary

        Returns:
            PoolSummary of the installed pool

        Raises:
            EmptyPoolError, PoolTooSmallError, MissingMetadataError,
            ValidationError. The previous pool stays active on failure.
        """
        items = tuple(items)
        self._validate(items)

        with self._lock:
            self._version += 1
            pool = QuestionPool(version=self._version, items=items)
            self._pool = pool

        summary = PoolSummary.from_pool(pool, dropped_rows=dropped_rows)
        logger.info("pool_replaced", extra=summary.model_dump())
        return summary

    def snapshot(self) -> QuestionPool:
        """Current pool. Raises EmptyPoolError when nothing was uploaded."""
        with self._lock:
            pool = self._pool
        if pool is None:
            raise EmptyPoolError()
        return pool

    def clear(self) -> None:
        with self._lock:
            self._pool = None


# ===========================================
# Singleton instance
# ===========================================

_pool_store: Optional[QuestionPoolStore] = None


def get_pool_store() -> QuestionPoolStore:
    """Process-wide QuestionPoolStore"""
    global _pool_store
    if _pool_store is None:
        _pool_store = QuestionPoolStore()
    return _pool_store
