# exam_paper/specs/base.py
"""
Building blocks shared by the mid-term paper types.

Part A is five short recall-tier (BTL L1) questions. Part B is twelve
questions from BTL L2-L6 whose difficulty mix depends on the highest level
the uploaded bank reaches.
"""
from __future__ import annotations

from typing import Iterable, Tuple

from exam_paper.core.constants import DifficultyLevels
from exam_paper.schemas.requirements import (
    DifficultyQuota,
    DifficultyTier,
    RequirementSet,
    Slot,
    UnitQuota,
)

PART_A = "A"
PART_B = "B"

PART_A_LEVELS: Tuple[str, ...] = (DifficultyLevels.RECALL,)
PART_B_LEVELS: Tuple[str, ...] = tuple(DifficultyLevels.HIGHER)

PART_A_SIZE = 5
PART_B_SIZE = 12

PART_B_LABEL_ORDER: Tuple[str, ...] = (
    "2a", "2b", "3a", "3b", "4a", "4b", "5a", "5b", "6a", "6b", "7a", "7b",
)

# First tier whose max_level equals the bank's highest Part B level wins.
PART_B_DIFFICULTY_TIERS: Tuple[DifficultyTier, ...] = (
    DifficultyTier(max_level="6", quotas=(
        DifficultyQuota.fixed("2", 4),
        DifficultyQuota.fixed("3", 4),
        DifficultyQuota.fixed("4", 2),
        DifficultyQuota.one_of(("5", "6"), 2),
    )),
    DifficultyTier(max_level="5", quotas=(
        DifficultyQuota.fixed("2", 4),
        DifficultyQuota.fixed("3", 4),
        DifficultyQuota.fixed("4", 2),
        DifficultyQuota.one_of(("5", "3"), 2),
    )),
    DifficultyTier(max_level="4", quotas=(
        DifficultyQuota.fixed("2", 4),
        DifficultyQuota.fixed("3", 4),
        DifficultyQuota.fixed("4", 2),
        DifficultyQuota.one_of(("3", "4"), 2),
    )),
    DifficultyTier(max_level="3", quotas=(
        DifficultyQuota.fixed("2", 5),
        DifficultyQuota.fixed("3", 5),
        DifficultyQuota.one_of(("2", "3"), 2),
    )),
    DifficultyTier(max_level="2", quotas=(
        DifficultyQuota.fixed("2", 12),
    )),
)


def slots(*pairs: Tuple[str, int]) -> Tuple[Slot, ...]:
    return tuple(Slot(label=label, unit=unit) for label, unit in pairs)


def exact_quotas(counts: Iterable[Tuple[int, int]]) -> Tuple[UnitQuota, ...]:
    return tuple(UnitQuota.exact(unit, count) for unit, count in counts)


def part_a(unit_counts: Iterable[Tuple[int, int]], layout: Tuple[Slot, ...]) -> RequirementSet:
    return RequirementSet(
        name=PART_A,
        levels=PART_A_LEVELS,
        unit_quotas=exact_quotas(unit_counts),
        difficulty_quotas=(DifficultyQuota.fixed(DifficultyLevels.RECALL, PART_A_SIZE),),
        slots=layout,
    )


def part_b(unit_counts: Iterable[Tuple[int, int]], layout: Tuple[Slot, ...]) -> RequirementSet:
    return RequirementSet(
        name=PART_B,
        levels=PART_B_LEVELS,
        unit_quotas=exact_quotas(unit_counts),
        difficulty_tiers=PART_B_DIFFICULTY_TIERS,
        single_level_fallback=True,
        slots=layout,
        label_order=PART_B_LABEL_ORDER,
    )
