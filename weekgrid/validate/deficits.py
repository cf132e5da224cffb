from __future__ import annotations

from typing import Dict, Iterable, List

from ..data.registry import OccupancyLedger
from ..data.teachers import TeacherDirectory
from ..models.period import slot_label
from ..models.school import SchoolClass
from ..models.subject import Subject
from ..models.timetable import Timetable


def required_subjects(subjects: Iterable[Subject], grade: str) -> List[Subject]:
    return [s for s in subjects if s.hours_for(grade) > 0]


def class_deficits(
    tt: Timetable, classes: Iterable[SchoolClass], subjects: Iterable[Subject]
) -> List[Dict[str, object]]:
    subjects = list(subjects)
    out: List[Dict[str, object]] = []
    for c in classes:
        counts = tt.subject_counts(c.key)
        missing = [
            {"subject_id": s.id, "name": s.name, "missing": s.hours_for(c.grade) - counts.get(s.id, 0)}
            for s in required_subjects(subjects, c.grade)
        ]
        missing = [m for m in missing if m["missing"] > 0]
        if missing:
            out.append({"class_key": c.key, "deficits": missing})
    return out


def total_missing(deficits: Iterable[Dict[str, object]]) -> int:
    return sum(int(d["missing"]) for item in deficits for d in item["deficits"])


def placement_suggestions(
    tt: Timetable,
    classes: Iterable[SchoolClass],
    subjects: Iterable[Subject],
    directory: TeacherDirectory,
    limit: int = 9,
) -> List[str]:
    """Explain what would unblock a missing lesson in an empty cell.

    An eligible teacher who is free but marked unavailable at that hour
    suggests opening the hour. One who is available but already teaching
    another class then suggests freeing that hour. Teacher occupancy is
    rebuilt from the finished timetable; at most ``limit`` lines come back.
    """
    ledger = OccupancyLedger()
    for _, day, si, cell in tt.all():
        if cell.teacher_id:
            ledger.commit(cell.teacher_id, day, si)
    classes = list(classes)
    by_key = {c.key: c for c in classes}
    by_id = {s.id: s for s in subjects}
    suggestions: List[str] = []
    for item in class_deficits(tt, classes, by_id.values()):
        c = by_key[item["class_key"]]
        empty = [(day, si) for day, si, cell in tt.iter_class(c.key) if cell.empty]
        for d in item["deficits"]:
            subject = by_id[d["subject_id"]]
            candidates = directory.eligible_teachers(subject.id, c.grade)
            for day, si in empty:
                label = slot_label(si)
                for t in candidates:
                    unavailable = t.is_unavailable(day, si)
                    busy = not ledger.is_free(t.id, day, si)
                    if unavailable and not busy:
                        suggestions.append(
                            f"{c.key} {subject.name}: opening {day} {label} for {t.name} would let it fit"
                        )
                    elif busy and not unavailable:
                        suggestions.append(
                            f"{c.key} {subject.name}: {t.name} teaches another class at {day} {label}; "
                            f"freeing that hour would let it fit"
                        )
                    if len(suggestions) >= limit:
                        return suggestions
    return suggestions
