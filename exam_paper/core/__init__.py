"""
Core module
Settings, constants and exceptions
"""
from exam_paper.core.settings import settings, get_settings
from exam_paper.core.constants import (
    ErrorCodes,
    ErrorMessages,
    Units,
    DifficultyLevels,
    PaperTypes,
    SheetColumns,
)
from exam_paper.core.exceptions import (
    AppException,
    ValidationError,
    UnknownPaperTypeError,
    EmptyPoolError,
    PoolTooSmallError,
    MissingMetadataError,
    InsufficientUnitError,
    InsufficientDifficultyError,
    UnsupportedDifficultyMixError,
    NoEligibleItemForSlotError,
    ConstraintViolationError,
)

__all__ = [
    # Settings
    "settings",
    "get_settings",

    # Constants
    "ErrorCodes",
    "ErrorMessages",
    "Units",
    "DifficultyLevels",
    "PaperTypes",
    "SheetColumns",

    # Exceptions
    "AppException",
    "ValidationError",
    "UnknownPaperTypeError",
    "EmptyPoolError",
    "PoolTooSmallError",
    "MissingMetadataError",
    "InsufficientUnitError",
    "InsufficientDifficultyError",
    "UnsupportedDifficultyMixError",
    "NoEligibleItemForSlotError",
    "ConstraintViolationError",
]
