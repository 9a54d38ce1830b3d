# exam_paper/schemas/requirements.py
from __future__ import annotations

from typing import Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from exam_paper.core.constants import DifficultyLevels, Units


class UnitQuota(BaseModel):
    """min_count == max_count means an exact count"""
    model_config = ConfigDict(frozen=True)

    unit: int = Field(ge=Units.MIN, le=Units.MAX)
    min_count: int = Field(ge=0)
    max_count: int = Field(ge=0)

    @model_validator(mode="after")
    def _ordered(self):
        if self.min_count > self.max_count:
            raise ValueError(f"unit {self.unit}: min_count {self.min_count} > max_count {self.max_count}")
        return self

    @classmethod
    def exact(cls, unit: int, count: int) -> "UnitQuota":
        return cls(unit=unit, min_count=count, max_count=count)


class DifficultyQuota(BaseModel):
    """
    Either a fixed level with a count, or a "choose one of" rule whose
    level is drawn from `options` for every unit of `count`.
    """
    model_config = ConfigDict(frozen=True)

    level: Optional[str] = None
    options: Tuple[str, ...] = ()
    count: int = Field(ge=0)

    @model_validator(mode="after")
    def _one_kind(self):
        if (self.level is None) == (not self.options):
            raise ValueError("exactly one of 'level' or 'options' must be given")
        unknown = [lv for lv in self.levels if lv not in DifficultyLevels.ALL]
        if unknown:
            raise ValueError(f"unknown difficulty levels: {unknown}")
        return self

    @property
    def is_choice(self) -> bool:
        return bool(self.options)

    @property
    def levels(self) -> Tuple[str, ...]:
        return self.options if self.options else (self.level,)

    @property
    def label(self) -> str:
        """'2' for a fixed rule, '5|6' for a choice rule"""
        return "|".join(self.levels)

    @classmethod
    def fixed(cls, level: str, count: int) -> "DifficultyQuota":
        return cls(level=level, count=count)

    @classmethod
    def one_of(cls, options: Tuple[str, ...], count: int) -> "DifficultyQuota":
        return cls(options=tuple(options), count=count)


class DifficultyTier(BaseModel):
    """Quotas that apply when `max_level` is the highest level present."""
    model_config = ConfigDict(frozen=True)

    max_level: str
    quotas: Tuple[DifficultyQuota, ...]


class Slot(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    unit: int = Field(ge=Units.MIN, le=Units.MAX)


class RequirementSet(BaseModel):
    """
    Declarative constraints for one section of a paper.

    `difficulty_quotas` apply as given. When they are empty the quotas are
    picked from `difficulty_tiers` by the highest level present among the
    eligible items; with `single_level_fallback` a pool holding a single
    level gets that level for every slot.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    levels: Optional[Tuple[str, ...]] = None
    unit_quotas: Tuple[UnitQuota, ...]
    difficulty_quotas: Tuple[DifficultyQuota, ...] = ()
    difficulty_tiers: Tuple[DifficultyTier, ...] = ()
    single_level_fallback: bool = False
    slots: Tuple[Slot, ...]
    label_order: Optional[Tuple[str, ...]] = None

    @model_validator(mode="after")
    def _consistent(self):
        labels = [s.label for s in self.slots]
        if len(set(labels)) != len(labels):
            raise ValueError(f"section {self.name}: duplicate slot labels")
        quota_units = [q.unit for q in self.unit_quotas]
        if len(set(quota_units)) != len(quota_units):
            raise ValueError(f"section {self.name}: duplicate unit quotas")
        if self.label_order is not None and set(labels) - set(self.label_order):
            missing = sorted(set(labels) - set(self.label_order))
            raise ValueError(f"section {self.name}: label_order misses {missing}")
        if self.difficulty_quotas and self.difficulty_tiers:
            raise ValueError(f"section {self.name}: give difficulty_quotas or difficulty_tiers, not both")
        return self

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    @property
    def units(self) -> Set[int]:
        """Every unit the section refers to"""
        return {q.unit for q in self.unit_quotas} | {s.unit for s in self.slots}

    def unit_quota(self, unit: int) -> Optional[UnitQuota]:
        for q in self.unit_quotas:
            if q.unit == unit:
                return q
        return None


class PaperTemplate(BaseModel):
    """A paper type: its sections in presentation order."""
    model_config = ConfigDict(frozen=True)

    paper_type: str
    sections: Tuple[RequirementSet, ...]

    @model_validator(mode="after")
    def _disjoint_sections(self):
        # sections draw from separate level partitions, so no item can land twice
        names = [s.name for s in self.sections]
        if len(set(names)) != len(names):
            raise ValueError(f"{self.paper_type}: duplicate section names")
        if len(self.sections) > 1:
            seen: Set[str] = set()
            for s in self.sections:
                if s.levels is None:
                    raise ValueError(f"{self.paper_type}: section {s.name} needs a level filter")
                if seen & set(s.levels):
                    raise ValueError(f"{self.paper_type}: section {s.name} overlaps an earlier section's levels")
                seen |= set(s.levels)
        return self

    @property
    def slot_count(self) -> int:
        return sum(s.slot_count for s in self.sections)

    def section(self, name: str) -> RequirementSet:
        for s in self.sections:
            if s.name == name:
                return s
        raise KeyError(name)
