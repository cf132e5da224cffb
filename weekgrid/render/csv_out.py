from __future__ import annotations

import csv
import io
import json
from pathlib import Path
from typing import Dict, Iterable, List

from ..models.period import DAYS, slot_label
from ..models.school import SchoolClass
from ..models.subject import Subject
from ..models.teacher import Teacher
from ..models.timetable import Timetable
from ..scheduler.invert import TeacherGrid, teacher_hours

CLASS_HEADER = "Class,Day,Slot,Subject,Teacher"
TEACHER_HEADER = "Teacher,Day,Slot,Class,Subject"


def _row(*fields: str) -> str:
    # Names may carry commas or quotes
    buf = io.StringIO()
    csv.writer(buf, lineterminator="").writerow(fields)
    return buf.getvalue()


def csv_blocks(
    tt: Timetable,
    classes: Iterable[SchoolClass],
    subjects: Iterable[Subject],
    teachers: Iterable[Teacher],
) -> str:
    # One block per class, separated by a blank line
    subject_names = {s.id: s.name for s in subjects}
    teacher_names = {t.id: t.name for t in teachers}
    lines: List[str] = []
    for c in classes:
        lines.append(CLASS_HEADER)
        for day in DAYS:
            for si, cell in enumerate(tt.grids.get(c.key, {}).get(day, [])):
                subject = subject_names.get(cell.subject_id, cell.subject_id or "")
                teacher = teacher_names.get(cell.teacher_id, cell.teacher_id or "")
                lines.append(_row(c.key, day, slot_label(si), subject, teacher))
        lines.append("")
    return "\n".join(lines)


def teacher_csv_blocks(schedules: Dict[str, TeacherGrid], teachers: Iterable[Teacher]) -> str:
    lines: List[str] = []
    for t in teachers:
        schedule = schedules.get(t.id)
        if schedule is None:
            continue
        lines.append(_row(f"# {t.name}: {teacher_hours(schedule)} hours"))
        lines.append(TEACHER_HEADER)
        for day in DAYS:
            for si, cell in enumerate(schedule[day]):
                lines.append(_row(t.name, day, slot_label(si), cell.class_name, cell.subject_name))
        lines.append("")
    return "\n".join(lines)


def write_csv_blocks(text: str, outputs_dir: Path, name: str = "timetable.csv") -> None:
    outputs_dir.mkdir(parents=True, exist_ok=True)
    with (outputs_dir / name).open("w", encoding="utf-8") as f:
        f.write(text)


def write_schedule_json(tt: Timetable, outputs_dir: Path) -> Path:
    json_dir = outputs_dir / "json"
    json_dir.mkdir(parents=True, exist_ok=True)
    schedule = {
        class_key: {
            day: [{"subjectId": c.subject_id, "teacherId": c.teacher_id} for c in cells]
            for day, cells in grid.items()
        }
        for class_key, grid in tt.grids.items()
    }
    path = json_dir / "schedule.json"
    with path.open("w", encoding="utf-8") as f:
        json.dump(schedule, f, indent=2, ensure_ascii=False)
    return path
