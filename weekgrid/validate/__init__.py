from .checks import validate_all
from .deficits import class_deficits, placement_suggestions, total_missing
from .report import format_validation_report, write_validation_report

__all__ = [
    "validate_all",
    "class_deficits",
    "placement_suggestions",
    "total_missing",
    "format_validation_report",
    "write_validation_report",
]
