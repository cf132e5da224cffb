from __future__ import annotations

from typing import Dict, Iterable, List

from ..models.assignment import AssignmentBook
from ..models.school import SchoolClass
from ..models.subject import Subject
from ..models.teacher import Teacher


class TeacherDirectory:
    def __init__(self, teachers: Iterable[Teacher]):
        self.records: List[Teacher] = list(teachers)
        self.by_id: Dict[str, Teacher] = {t.id: t for t in self.records}

    def get(self, teacher_id: str) -> Teacher | None:
        return self.by_id.get(teacher_id)

    def eligible_teachers(self, subject_id: str, grade: str) -> List[Teacher]:
        return [t for t in self.records if is_eligible(t, subject_id, grade)]

    def auto_assign_single_options(
        self,
        classes: Iterable[SchoolClass],
        subjects: Iterable[Subject],
        assignments: AssignmentBook,
    ) -> int:
        """Pin every class/subject pair that has exactly one eligible teacher.

        Existing pins are left untouched. Returns the number of new pins.
        """
        subjects = list(subjects)
        added = 0
        for c in classes:
            for s in subjects:
                if s.hours_for(c.grade) <= 0 or assignments.get(c.key, s.id):
                    continue
                eligible = self.eligible_teachers(s.id, c.grade)
                if len(eligible) == 1:
                    assignments.assign(c.key, s.id, eligible[0].id)
                    added += 1
        return added

    def assignment_stats(
        self,
        classes: Iterable[SchoolClass],
        subjects: Iterable[Subject],
        assignments: AssignmentBook,
    ) -> Dict[str, int]:
        # Only pairs with a real choice (more than one eligible teacher) count
        subjects = list(subjects)
        total = assigned = needs_choice = 0
        for c in classes:
            for s in subjects:
                if s.hours_for(c.grade) <= 0:
                    continue
                if len(self.eligible_teachers(s.id, c.grade)) <= 1:
                    continue
                total += 1
                if assignments.get(c.key, s.id):
                    assigned += 1
                else:
                    needs_choice += 1
        return {"total": total, "assigned": assigned, "needs_choice": needs_choice}


def is_eligible(teacher: Teacher, subject_id: str, grade: str) -> bool:
    if not teacher.teaches(subject_id):
        return False
    # A per-subject entry, even an empty one, overrides the general preference
    if subject_id in teacher.preferred_grades_by_subject:
        grades = teacher.preferred_grades_by_subject[subject_id]
    else:
        grades = teacher.preferred_grades
    return not grades or grade in grades
