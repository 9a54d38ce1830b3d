"""
Selection engine
Constrained random sampling of questions into labeled slots.

Greedy, no backtracking:
    1. work on a copy of the section's eligible items, removing each pick
    2. expand the difficulty quotas into one scheduled level per slot
    3. fill slots in order from {slot unit, scheduled level}, falling back
       to {slot unit} when that is empty
    4. re-validate unit quotas and the slot count
    5. sort by (unit, canonical label order) when the section has one

Every pick is uniform over the items eligible at that moment. Passing a
seeded random.Random makes the outcome reproducible.
"""
import logging
import random
from collections import Counter
from typing import List, Optional, Sequence, Tuple

from exam_paper.core.exceptions import ConstraintViolationError, NoEligibleItemForSlotError
from exam_paper.schemas.paper import SelectedQuestion, Selection
from exam_paper.schemas.question import QuestionItem
from exam_paper.schemas.requirements import DifficultyQuota, PaperTemplate, RequirementSet
from exam_paper.services.feasibility import (
    FeasibilityReport,
    PoolLike,
    check,
    eligible_items,
    present_levels,
)

logger = logging.getLogger(__name__)


def _pick(candidates: Sequence[QuestionItem], rng: random.Random) -> QuestionItem:
    return candidates[rng.randrange(len(candidates))]


def build_difficulty_schedule(
    quotas: Sequence[DifficultyQuota],
    slot_count: int,
    fallback_levels: Sequence[str],
    rng: random.Random,
) -> List[Optional[str]]:
    """
    One target level per slot, in slot order.

    Quotas are consumed in declared order. A "choose one of" rule draws its
    level again for every unit of its count. Slots left over once the
    quotas run out take a level drawn from `fallback_levels`.
    """
    schedule: List[Optional[str]] = []
    for quota in quotas:
        for _ in range(quota.count):
            if len(schedule) == slot_count:
                return schedule
            schedule.append(rng.choice(quota.options) if quota.is_choice else quota.level)

    while len(schedule) < slot_count:
        schedule.append(rng.choice(list(fallback_levels)) if fallback_levels else None)
    return schedule


def _validate(picked: Sequence[SelectedQuestion], requirement_set: RequirementSet) -> None:
    rs = requirement_set
    if len(picked) != rs.slot_count:
        raise ConstraintViolationError(
            f"Failed to select exactly {rs.slot_count} questions for Part {rs.name}: got {len(picked)}",
            section=rs.name,
        )

    ids = [q.item.id for q in picked]
    if len(set(ids)) != len(ids):
        raise ConstraintViolationError(
            f"Part {rs.name} selected the same question twice",
            section=rs.name,
        )

    unit_counts = Counter(q.item.unit for q in picked)
    for quota in rs.unit_quotas:
        have = unit_counts.get(quota.unit, 0)
        if not quota.min_count <= have <= quota.max_count:
            raise ConstraintViolationError(
                f"Unit {quota.unit} has {have} questions in Part {rs.name}, "
                f"needs between {quota.min_count} and {quota.max_count}",
                unit=quota.unit,
                have=have,
                min_count=quota.min_count,
                max_count=quota.max_count,
                section=rs.name,
            )


def _order(picked: List[SelectedQuestion], requirement_set: RequirementSet) -> List[SelectedQuestion]:
    if not requirement_set.label_order:
        return picked
    index = {label: i for i, label in enumerate(requirement_set.label_order)}
    return sorted(picked, key=lambda q: (q.item.unit, index[q.label]))


def select(
    pool: PoolLike,
    requirement_set: RequirementSet,
    rng: Optional[random.Random] = None,
    report: Optional[FeasibilityReport] = None,
) -> Selection:
    """
    Fill every slot of one requirement set from the pool.

    Args:
        pool: QuestionPool snapshot or a plain sequence of QuestionItem
        requirement_set: section to fill
        rng: random source; a fresh unseeded one when omitted
        report: result of an earlier check() on the same pool, reused to
            skip the second feasibility pass

    Returns:
        Selection with exactly one question per slot

    Raises:
        InsufficientUnitError / InsufficientDifficultyError /
        UnsupportedDifficultyMixError from the feasibility check,
        NoEligibleItemForSlotError, ConstraintViolationError
    """
    rs = requirement_set
    rng = rng or random.Random()
    if report is None:
        report = check(pool, rs)

    remaining = list(eligible_items(pool, rs))
    schedule = build_difficulty_schedule(report.quotas, rs.slot_count, present_levels(remaining), rng)

    picked: List[SelectedQuestion] = []
    for slot, level in zip(rs.slots, schedule):
        in_unit = [q for q in remaining if q.unit == slot.unit]
        matches = [q for q in in_unit if q.difficulty_level == level]
        relaxed = not matches
        if relaxed:
            matches = in_unit
        if not matches:
            raise NoEligibleItemForSlotError(slot.label, slot.unit, section=rs.name)

        item = _pick(matches, rng)
        remaining = [q for q in remaining if q.id != item.id]
        picked.append(SelectedQuestion(item=item, label=slot.label, section=rs.name, relaxed=relaxed))

        if relaxed:
            logger.debug(
                "difficulty_relaxed",
                extra={
                    "section": rs.name,
                    "label": slot.label,
                    "unit": slot.unit,
                    "wanted_level": level,
                    "got_level": item.difficulty_level,
                },
            )

    _validate(picked, rs)
    ordered = _order(picked, rs)

    logger.debug(
        "section_selected",
        extra={
            "section": rs.name,
            "picks": [f"{q.label}:U{q.item.unit}:L{q.item.difficulty_level}" for q in ordered],
        },
    )
    return Selection(section=rs.name, questions=tuple(ordered))


def select_paper(
    pool: PoolLike,
    template: PaperTemplate,
    rng: Optional[random.Random] = None,
) -> Tuple[Selection, ...]:
    """
    Fill every section of a paper type.

    All sections are checked before any is sampled, so an infeasible
    section fails without consuming randomness.
    """
    rng = rng or random.Random()
    reports = [check(pool, section) for section in template.sections]
    return tuple(
        select(pool, section, rng, report=report)
        for section, report in zip(template.sections, reports)
    )
