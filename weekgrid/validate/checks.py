from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List

from ..data.teachers import TeacherDirectory, is_eligible
from ..models.period import DAYS, slot_label
from ..models.school import SchoolClass
from ..models.subject import Subject
from ..models.teacher import Teacher
from ..models.timetable import Timetable
from .deficits import class_deficits, placement_suggestions, total_missing


def validate_all(
    tt: Timetable,
    classes: Iterable[SchoolClass],
    subjects: Iterable[Subject],
    teachers: Iterable[Teacher],
) -> Dict[str, object]:
    classes = list(classes)
    subjects = list(subjects)
    directory = TeacherDirectory(teachers)
    by_subject = {s.id: s for s in subjects}
    grade_of = {c.key: c.grade for c in classes}
    report: Dict[str, object] = {}
    violations_by_rule: Dict[str, List[str]] = defaultdict(list)

    # Teacher clashes across classes
    teacher_slots: Counter = Counter()
    teacher_load: Counter = Counter()
    for class_key, day, si, cell in tt.all():
        if not cell.teacher_id:
            continue
        teacher_slots[(cell.teacher_id, day, si)] += 1
        teacher_load[cell.teacher_id] += 1
        teacher = directory.get(cell.teacher_id)
        where = f"{class_key} {day} {slot_label(si)}"
        if teacher is None:
            violations_by_rule["unknown_teacher"].append(f"{where} {cell.teacher_id}")
            continue
        if teacher.is_unavailable(day, si):
            violations_by_rule["teacher_unavailable"].append(f"{where} {teacher.id}")
        grade = grade_of.get(class_key, class_key.partition("-")[0])
        if cell.subject_id and not is_eligible(teacher, cell.subject_id, grade):
            violations_by_rule["teacher_not_eligible"].append(f"{where} {teacher.id}:{cell.subject_id}")
    clashes = [f"{t} {d} {slot_label(si)}" for (t, d, si), c in teacher_slots.items() if c > 1]
    violations_by_rule["double_booking"].extend(clashes)
    report["clash_count"] = len(clashes)

    for t in directory.records:
        if t.max_hours and teacher_load[t.id] > t.max_hours:
            violations_by_rule["max_hours"].append(f"{t.id}: {teacher_load[t.id]}>{t.max_hours}")

    # Per-class subject rules
    for c in classes:
        for day in DAYS:
            cells = tt.grids[c.key][day]
            day_counts = Counter(cell.subject_id for cell in cells if cell.subject_id)
            for subj_id, count in day_counts.items():
                subject = by_subject.get(subj_id)
                if subject is None or subject.rule is None:
                    continue
                rule = subject.rule
                if rule.per_day_max and count > rule.per_day_max:
                    violations_by_rule["per_day_max"].append(f"{c.key} {day} {subj_id}")
                for label in _runs_over(cells, subj_id, rule.max_consecutive):
                    violations_by_rule["max_consecutive"].append(f"{c.key} {day} {subj_id} @{label}")
                if rule.prefer_block_scheduling:
                    _check_blocks(c, day, cells, subject, violations_by_rule)

    report["violations_by_rule"] = {k: v for k, v in violations_by_rule.items() if v}
    deficits = class_deficits(tt, classes, subjects)
    report["unmet_weekly_loads"] = {
        f"{item['class_key']}:{d['subject_id']}": d["missing"]
        for item in deficits
        for d in item["deficits"]
    }
    report["total_missing"] = total_missing(deficits)
    report["filled_cells"] = tt.filled_count()
    report["placement_suggestions"] = placement_suggestions(tt, classes, subjects, directory)
    return report


def _runs_over(cells, subject_id: str, cap: int) -> List[str]:
    if not cap:
        return []
    out: List[str] = []
    run = 0
    for si, cell in enumerate(cells):
        run = run + 1 if cell.subject_id == subject_id else 0
        if run == cap + 1:
            out.append(slot_label(si))
    return out


def _check_blocks(c: SchoolClass, day: str, cells, subject: Subject, violations: Dict[str, List[str]]) -> None:
    # Block subjects appear as pairs sharing one teacher; the only allowed
    # singleton is the odd hour of an odd weekly demand.
    si = 0
    while si < len(cells):
        if cells[si].subject_id != subject.id:
            si += 1
            continue
        start = si
        while si < len(cells) and cells[si].subject_id == subject.id:
            si += 1
        length = si - start
        teachers = {cells[k].teacher_id for k in range(start, si)}
        if len(teachers) > 1:
            violations["block_teacher_mismatch"].append(f"{c.key} {day} {subject.id}")
        if length % 2 == 1 and subject.hours_for(c.grade) % 2 == 0:
            violations["block_fragment"].append(f"{c.key} {day} {subject.id} @{slot_label(start)}")
