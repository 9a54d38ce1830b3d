"""
Feasibility checker
Decides, before any random draw, whether a pool can fill a requirement set
"""
import logging
from collections import Counter
from typing import Dict, Iterable, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict

from exam_paper.core.exceptions import (
    InsufficientDifficultyError,
    InsufficientUnitError,
    UnsupportedDifficultyMixError,
)
from exam_paper.schemas.question import QuestionItem, QuestionPool
from exam_paper.schemas.requirements import DifficultyQuota, RequirementSet

logger = logging.getLogger(__name__)

PoolLike = Union[QuestionPool, Sequence[QuestionItem]]


class FeasibilityReport(BaseModel):
    """Counts the verdict was based on, plus the difficulty quotas in force."""
    model_config = ConfigDict(frozen=True)

    section: str
    unit_counts: Dict[int, int]
    level_counts: Dict[str, int]
    quotas: Tuple[DifficultyQuota, ...]


def pool_items(pool: PoolLike) -> Tuple[QuestionItem, ...]:
    if isinstance(pool, QuestionPool):
        return pool.items
    return tuple(pool)


def eligible_items(pool: PoolLike, requirement_set: RequirementSet) -> Tuple[QuestionItem, ...]:
    """Items the section may draw from: its level filter and its units."""
    levels = set(requirement_set.levels) if requirement_set.levels is not None else None
    units = requirement_set.units
    return tuple(
        q for q in pool_items(pool)
        if q.unit in units and (levels is None or q.difficulty_level in levels)
    )


def present_levels(items: Iterable[QuestionItem]) -> Tuple[str, ...]:
    return tuple(sorted({q.difficulty_level for q in items}, key=int))


def resolve_difficulty_quotas(pool: PoolLike, requirement_set: RequirementSet) -> Tuple[DifficultyQuota, ...]:
    """
    Difficulty quotas in force for this pool.

    Fixed quotas are returned as declared. Tiered sections pick the tier
    keyed by the highest level among the eligible items, then fall back to
    "that level for every slot" when only one level is present.
    """
    rs = requirement_set
    if rs.difficulty_quotas or not rs.difficulty_tiers:
        return rs.difficulty_quotas

    levels = present_levels(eligible_items(pool, rs))
    max_level = levels[-1] if levels else None

    for tier in rs.difficulty_tiers:
        if tier.max_level == max_level:
            return tier.quotas

    if rs.single_level_fallback and len(levels) == 1:
        return (DifficultyQuota.fixed(levels[0], rs.slot_count),)

    raise UnsupportedDifficultyMixError(max_level, levels, section=rs.name)


def check(pool: PoolLike, requirement_set: RequirementSet) -> FeasibilityReport:
    """
    Verify the pool can satisfy every quota of the requirement set.

    Pure function of its inputs: the same pool and requirement set always
    give the same verdict.

    Raises:
        InsufficientUnitError: a unit has fewer eligible items than its
            quota minimum (or than the slots placed in it)
        InsufficientDifficultyError: a difficulty quota cannot be met from
            the eligible items of the referenced units
        UnsupportedDifficultyMixError: no difficulty tier fits the pool
    """
    rs = requirement_set
    items = eligible_items(pool, rs)
    unit_counts = Counter(q.unit for q in items)
    level_counts = Counter(q.difficulty_level for q in items)

    slot_demand = Counter(s.unit for s in rs.slots)
    for unit in sorted(rs.units):
        quota = rs.unit_quota(unit)
        need = max(quota.min_count if quota else 0, slot_demand.get(unit, 0))
        have = unit_counts.get(unit, 0)
        if have < need:
            logger.warning(
                "feasibility_failed",
                extra={"section": rs.name, "unit": unit, "have": have, "need": need},
            )
            raise InsufficientUnitError(unit, have, need, section=rs.name)

    quotas = resolve_difficulty_quotas(items, rs)
    for quota in quotas:
        have = sum(level_counts.get(lv, 0) for lv in quota.levels)
        if have < quota.count:
            logger.warning(
                "feasibility_failed",
                extra={"section": rs.name, "btl": quota.label, "have": have, "need": quota.count},
            )
            raise InsufficientDifficultyError(quota.label, have, quota.count, section=rs.name)

    return FeasibilityReport(
        section=rs.name,
        unit_counts={u: unit_counts.get(u, 0) for u in sorted(rs.units)},
        level_counts=dict(sorted(level_counts.items())),
        quotas=quotas,
    )
