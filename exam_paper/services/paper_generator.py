"""
Paper generator
Upload and generate entry points: store -> catalog -> checker -> engine -> assembler
"""
import logging
import random
import time
from typing import Any, Iterable, Mapping, Optional

from exam_paper.core.exceptions import (
    AppException,
    ConstraintViolationError,
    NoEligibleItemForSlotError,
)
from exam_paper.core.logging import log_generation
from exam_paper.core.settings import settings
from exam_paper.schemas.paper import Paper
from exam_paper.schemas.question import PoolSummary
from exam_paper.services.normalizer import normalize_rows
from exam_paper.services.paper_assembler import assemble_paper
from exam_paper.services.pool_store import QuestionPoolStore, get_pool_store
from exam_paper.services.selection_engine import select_paper
from exam_paper.specs.registry import get_paper_template

logger = logging.getLogger(__name__)

# Failures that depend on the random draw; everything else is deterministic.
RETRYABLE_ERRORS = (NoEligibleItemForSlotError, ConstraintViolationError)


class PaperGenerator:
    """
    Request-level façade

    - upload(): normalize sheet rows and swap in a new pool
    - generate(): build one paper from the current pool snapshot
    """

    def __init__(
        self,
        store: Optional[QuestionPoolStore] = None,
        max_retries: Optional[int] = None,
        seed: Optional[int] = None
    ):
        self.store = store or get_pool_store()
        self.max_retries = settings.GENERATE_MAX_RETRIES if max_retries is None else max_retries
        self.seed = settings.RANDOM_SEED if seed is None else seed

    def _new_rng(self) -> random.Random:
        return random.Random(self.seed) if self.seed is not None else random.Random()

    def upload(self, rows: Iterable[Mapping[str, Any]]) -> PoolSummary:
        """
        Normalize decoded sheet rows and install them as the active pool

        Raises:
            EmptyPoolError, PoolTooSmallError, MissingMetadataError
        """
        normalized = normalize_rows(rows)
        return self.store.replace(normalized.items, dropped_rows=normalized.dropped_rows)

    def generate(self, paper_type: str, rng: Optional[random.Random] = None) -> Paper:
        """
        Generate one paper of the given type

        Args:
            paper_type: registered paper type, e.g. "mid1"
            rng: random source; defaults to one seeded from RANDOM_SEED

        Returns:
            Paper

        Raises:
            UnknownPaperTypeError, EmptyPoolError, and the feasibility and
            selection errors. Only draw-dependent errors are retried, up to
            max_retries extra attempts.
        """
        template = get_paper_template(paper_type)
        pool = self.store.snapshot()
        rng = rng or self._new_rng()

        attempts = 1 + self.max_retries
        for attempt in range(1, attempts + 1):
            start = time.perf_counter()
            try:
                selections = select_paper(pool, template, rng)
                paper = assemble_paper(template, selections, pool.version)
            except RETRYABLE_ERRORS as e:
                elapsed_ms = int((time.perf_counter() - start) * 1000)
                final = attempt == attempts
                log_generation(logger, template.paper_type, pool.version, attempt, elapsed_ms,
                               "failed" if final else "retry", error=e.code)
                if final:
                    raise
                continue
            except AppException as e:
                elapsed_ms = int((time.perf_counter() - start) * 1000)
                log_generation(logger, template.paper_type, pool.version, attempt, elapsed_ms,
                               "failed", error=e.code)
                raise

            elapsed_ms = int((time.perf_counter() - start) * 1000)
            log_generation(logger, template.paper_type, pool.version, attempt, elapsed_ms, "ok")
            return paper

        # attempts >= 1, so the loop always returns or raises
        raise AssertionError("unreachable")


# ===========================================
# Singleton instance
# ===========================================

_paper_generator: Optional[PaperGenerator] = None


def get_paper_generator() -> PaperGenerator:
    """Process-wide PaperGenerator bound to the shared pool store"""
    global _paper_generator
    if _paper_generator is None:
        _paper_generator = PaperGenerator()
    return _paper_generator
