# Re-export common types
from .assignment import AssignmentBook, assignment_key
from .period import DAYS, slot_index, slot_label, slot_labels
from .school import GradeSections, SchoolClass, SchoolConfig, format_class_name
from .subject import Subject, SubjectRule
from .teacher import Teacher
from .timetable import Cell, Grid, Timetable, empty_grid

__all__ = [
    "DAYS",
    "slot_label",
    "slot_index",
    "slot_labels",
    "Subject",
    "SubjectRule",
    "Teacher",
    "SchoolConfig",
    "SchoolClass",
    "GradeSections",
    "format_class_name",
    "AssignmentBook",
    "assignment_key",
    "Cell",
    "Grid",
    "Timetable",
    "empty_grid",
]
