"""
Constants module
Magic strings and small enumerations shared across the package
"""


class ErrorCodes:
    """Error codes"""
    VALIDATION_FAILED = "VALIDATION_FAILED"
    UNKNOWN_PAPER_TYPE = "UNKNOWN_PAPER_TYPE"
    INSUFFICIENT_UNIT = "INSUFFICIENT_UNIT"
    INSUFFICIENT_DIFFICULTY = "INSUFFICIENT_DIFFICULTY"
    UNSUPPORTED_DIFFICULTY_MIX = "UNSUPPORTED_DIFFICULTY_MIX"
    NO_ELIGIBLE_ITEM_FOR_SLOT = "NO_ELIGIBLE_ITEM_FOR_SLOT"
    CONSTRAINT_VIOLATION = "CONSTRAINT_VIOLATION"
    EMPTY_POOL = "EMPTY_POOL"
    POOL_TOO_SMALL = "POOL_TOO_SMALL"
    MISSING_METADATA = "MISSING_METADATA"


class ErrorMessages:
    """User-facing error messages"""
    INVALID_INPUT = "Invalid input."
    EMPTY_POOL = "No questions available. Please upload an Excel file first."


class Units:
    """Syllabus units"""
    MIN = 1
    MAX = 5

    ALL = list(range(MIN, MAX + 1))

    ROMAN = {"I": 1, "II": 2, "III": 3, "IV": 4, "V": 5}


class DifficultyLevels:
    """Bloom's taxonomy (B.T) levels, lowest first"""
    RECALL = "1"

    ALL = ["1", "2", "3", "4", "5", "6"]
    HIGHER = ALL[1:]


class PaperTypes:
    """Built-in paper types"""
    MID1 = "mid1"
    MID2 = "mid2"

    ALL = [MID1, MID2]


class SheetColumns:
    """Column headers of the uploaded question sheet"""
    SERIAL_NO = "S.NO"
    UNIT = "Unit"
    QUESTION = "Question"
    BT_LEVEL = "B.T Level"
    SUBJECT_CODE = "Subject Code"
    SUBJECT = "Subject"
    BRANCH = "Branch"
    REGULATION = "Regulation"
    YEAR = "Year"
    SEMESTER = "Sem"
    MONTH = "Month"
    IMAGE_URL = "Image Url"
