"""
Custom exceptions
Exception hierarchy for consistent, request-scoped error handling.
Every error carries the structured details (unit, level, have/need counts)
a caller needs to render a specific message.
"""
from typing import Any, Dict, Iterable, Optional
from fastapi import status

from exam_paper.core.constants import ErrorCodes, ErrorMessages


class AppException(Exception):
    """
    Base application exception
    Parent class of every custom exception
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: Optional[Dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the exception into a dict"""
        result = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


def _section_suffix(section: Optional[str]) -> str:
    return f" in Part {section}" if section else ""


# ===========================================
# Input validation
# ===========================================

class ValidationError(AppException):
    """Input validation failed"""

    def __init__(
        self,
        message: str = ErrorMessages.INVALID_INPUT,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            code=ErrorCodes.VALIDATION_FAILED,
            message=message,
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details
        )


class UnknownPaperTypeError(AppException):
    """No requirement set is registered for the paper type"""

    def __init__(self, paper_type: str, known: Iterable[str] = ()):
        known = sorted(known)
        super().__init__(
            code=ErrorCodes.UNKNOWN_PAPER_TYPE,
            message=f"Invalid paper type '{paper_type}'. Expected one of: {', '.join(known)}",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"paper_type": paper_type, "known": known}
        )


# ===========================================
# Pool errors
# ===========================================

class EmptyPoolError(AppException):
    """No question pool has been uploaded, or it holds no usable rows"""

    def __init__(self, message: str = ErrorMessages.EMPTY_POOL):
        super().__init__(
            code=ErrorCodes.EMPTY_POOL,
            message=message,
            status_code=status.HTTP_409_CONFLICT,
        )


class PoolTooSmallError(AppException):
    """The uploaded pool is below the minimum size gate"""

    def __init__(self, have: int, need: int):
        super().__init__(
            code=ErrorCodes.POOL_TOO_SMALL,
            message=f"Insufficient questions: got {have}, need at least {need}",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"have": have, "need": need}
        )


class MissingMetadataError(AppException):
    """A required paper metadata field is missing or empty"""

    def __init__(self, field: str):
        super().__init__(
            code=ErrorCodes.MISSING_METADATA,
            message=f"Missing or empty field '{field}' in question data",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"field": field}
        )


# ===========================================
# Feasibility errors
# ===========================================

class InsufficientUnitError(AppException):
    """The pool holds fewer items for a unit than its quota minimum"""

    def __init__(self, unit: int, have: int, need: int, section: Optional[str] = None):
        super().__init__(
            code=ErrorCodes.INSUFFICIENT_UNIT,
            message=(
                f"Insufficient questions for Unit {unit}{_section_suffix(section)}: "
                f"got {have}, need {need}"
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"unit": unit, "have": have, "need": need, "section": section}
        )
        self.unit = unit
        self.have = have
        self.need = need
        self.section = section


class InsufficientDifficultyError(AppException):
    """The pool holds fewer items for a difficulty quota than it requires"""

    def __init__(self, level: str, have: int, need: int, section: Optional[str] = None):
        super().__init__(
            code=ErrorCodes.INSUFFICIENT_DIFFICULTY,
            message=(
                f"Insufficient BTL L{level} questions{_section_suffix(section)}: "
                f"got {have}, need {need}"
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"level": level, "have": have, "need": need, "section": section}
        )
        self.level = level
        self.have = have
        self.need = need
        self.section = section


class UnsupportedDifficultyMixError(AppException):
    """No difficulty tier matches the levels present in the pool"""

    def __init__(self, max_level: Optional[str], available: Iterable[str], section: Optional[str] = None):
        available = sorted(available)
        super().__init__(
            code=ErrorCodes.UNSUPPORTED_DIFFICULTY_MIX,
            message=(
                f"Unsupported case{_section_suffix(section)}: max BTL = {max_level} "
                f"with BTLs ({', '.join(available)})"
            ),
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"max_level": max_level, "available": available, "section": section}
        )
        self.max_level = max_level
        self.available = available
        self.section = section


# ===========================================
# Selection errors
# ===========================================

class NoEligibleItemForSlotError(AppException):
    """Nothing left in the slot's unit when the slot came up"""

    def __init__(self, label: str, unit: int, section: Optional[str] = None):
        super().__init__(
            code=ErrorCodes.NO_ELIGIBLE_ITEM_FOR_SLOT,
            message=(
                f"No questions available for Unit {unit} "
                f"(slot {label}{_section_suffix(section)})"
            ),
            status_code=status.HTTP_409_CONFLICT,
            details={"label": label, "unit": unit, "section": section}
        )
        self.label = label
        self.unit = unit
        self.section = section


class ConstraintViolationError(AppException):
    """A finished selection broke a unit quota or the slot count"""

    def __init__(
        self,
        message: str,
        unit: Optional[int] = None,
        have: Optional[int] = None,
        min_count: Optional[int] = None,
        max_count: Optional[int] = None,
        section: Optional[str] = None
    ):
        super().__init__(
            code=ErrorCodes.CONSTRAINT_VIOLATION,
            message=message,
            status_code=status.HTTP_409_CONFLICT,
            details={
                "unit": unit,
                "have": have,
                "min": min_count,
                "max": max_count,
                "section": section,
            }
        )
        self.unit = unit
        self.have = have
        self.section = section
