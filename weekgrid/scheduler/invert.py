from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping

from ..models.period import DAYS
from ..models.school import format_class_name
from ..models.subject import Subject
from ..models.teacher import Teacher
from ..models.timetable import Grid


@dataclass(frozen=True)
class TeacherCell:
    class_key: str = ""
    class_name: str = ""
    subject_id: str = ""
    subject_name: str = ""

    @property
    def empty(self) -> bool:
        return not self.class_key


TeacherGrid = Dict[str, List[TeacherCell]]


def calculate_teacher_schedules(
    grids: Mapping[str, Grid] | None,
    teachers: Iterable[Teacher],
    subjects: Iterable[Subject],
    daily_lessons: int,
) -> Dict[str, TeacherGrid]:
    """Invert class grids into one grid per teacher.

    Occupancy was enforced during generation, so clashes are not re-checked
    here: a later class simply overwrites an earlier one at the same slot.
    """
    names = {s.id: s.name for s in subjects}
    result: Dict[str, TeacherGrid] = {
        t.id: {day: [TeacherCell() for _ in range(daily_lessons)] for day in DAYS} for t in teachers
    }
    for class_key, grid in (grids or {}).items():
        for day in DAYS:
            for si, cell in enumerate(grid.get(day, [])):
                if not cell.subject_id or not cell.teacher_id:
                    continue
                if cell.teacher_id not in result or si >= daily_lessons:
                    continue
                result[cell.teacher_id][day][si] = TeacherCell(
                    class_key=class_key,
                    class_name=format_class_name(class_key),
                    subject_id=cell.subject_id,
                    subject_name=names.get(cell.subject_id, ""),
                )
    return result


def teacher_hours(schedule: TeacherGrid) -> int:
    return sum(1 for cells in schedule.values() for c in cells if not c.empty)
