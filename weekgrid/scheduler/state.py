from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Set, Tuple

from ..data.registry import OccupancyLedger
from ..data.teachers import TeacherDirectory
from ..models.assignment import AssignmentBook
from ..models.school import SchoolClass
from ..models.timetable import Timetable
from .pick import RandomSource, try_resolve


@dataclass
class GenerationContext:
    """Everything one generation run shares across classes."""

    timetable: Timetable
    ledger: OccupancyLedger
    directory: TeacherDirectory
    rng: RandomSource
    assignments: AssignmentBook
    consecutive_lookback: int = 3


class ClassPlacement:
    """Placement bookkeeping for one class within a generation run."""

    def __init__(self, ctx: GenerationContext, school_class: SchoolClass):
        self.ctx = ctx
        self.school_class = school_class
        self.day_counts: Dict[Tuple[str, str], int] = {}
        self.placed_days: Dict[str, Set[str]] = {}
        # First teacher committed for a subject in this class during this run
        self.subject_teacher: Dict[str, str] = {}

    @property
    def key(self) -> str:
        return self.school_class.key

    @property
    def grade(self) -> str:
        return self.school_class.grade

    @property
    def daily_lessons(self) -> int:
        return self.ctx.timetable.daily_lessons

    def is_free(self, day: str, slot_index: int) -> bool:
        return self.ctx.timetable.is_free(self.key, day, slot_index)

    def day_count(self, day: str, subject_id: str) -> int:
        return self.day_counts.get((day, subject_id), 0)

    def days_with(self, subject_id: str) -> Set[str]:
        return self.placed_days.get(subject_id, set())

    def required_teacher(self, subject_id: str) -> str | None:
        pinned = self.ctx.assignments.get(self.key, subject_id)
        if pinned:
            return pinned
        return self.subject_teacher.get(subject_id)

    def resolve(self, subject_id: str, day: str, slot_index: int, required: str | None) -> str | None:
        return try_resolve(
            self.ctx.directory,
            self.ctx.ledger,
            self.ctx.rng,
            subject_id,
            self.grade,
            day,
            slot_index,
            required,
        )

    def run_before(self, day: str, slot_index: int, subject_id: str, limit: int | None = None) -> int:
        cells = self.ctx.timetable.grids[self.key][day]
        run = 0
        k = slot_index - 1
        while k >= 0 and cells[k].subject_id == subject_id:
            run += 1
            if limit is not None and run >= limit:
                break
            k -= 1
        return run

    def run_after(self, day: str, slot_index: int, subject_id: str) -> int:
        cells = self.ctx.timetable.grids[self.key][day]
        run = 0
        k = slot_index + 1
        while k < len(cells) and cells[k].subject_id == subject_id:
            run += 1
            k += 1
        return run

    def place(self, day: str, slot_index: int, subject_id: str, teacher_id: str) -> None:
        self.ctx.timetable.place(self.key, day, slot_index, subject_id, teacher_id)
        self.ctx.ledger.commit(teacher_id, day, slot_index)
        self.day_counts[(day, subject_id)] = self.day_count(day, subject_id) + 1
        self.placed_days.setdefault(subject_id, set()).add(day)
        self.subject_teacher.setdefault(subject_id, teacher_id)
        logging.getLogger(__name__).debug(
            f"Place {self.key} {day} S{slot_index + 1} -> {subject_id} by {teacher_id}"
        )
