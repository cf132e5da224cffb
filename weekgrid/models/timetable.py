from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Tuple

from .period import DAYS


@dataclass
class Cell:
    subject_id: str | None = None
    teacher_id: str | None = None

    @property
    def empty(self) -> bool:
        return not self.subject_id


Grid = Dict[str, List[Cell]]  # day -> cells, one per slot


def empty_grid(daily_lessons: int) -> Grid:
    return {day: [Cell() for _ in range(daily_lessons)] for day in DAYS}


@dataclass
class Timetable:
    daily_lessons: int
    grids: Dict[str, Grid] = field(default_factory=dict)

    def add_class(self, class_key: str) -> Grid:
        grid = empty_grid(self.daily_lessons)
        self.grids[class_key] = grid
        return grid

    def place(self, class_key: str, day: str, slot_index: int, subject_id: str, teacher_id: str) -> None:
        self.grids[class_key][day][slot_index] = Cell(subject_id, teacher_id)

    def get(self, class_key: str, day: str, slot_index: int) -> Cell:
        return self.grids[class_key][day][slot_index]

    def is_free(self, class_key: str, day: str, slot_index: int) -> bool:
        return self.get(class_key, day, slot_index).empty

    def day_count(self, class_key: str, day: str, subject_id: str) -> int:
        return sum(1 for c in self.grids[class_key][day] if c.subject_id == subject_id)

    def iter_class(self, class_key: str) -> Iterator[Tuple[str, int, Cell]]:
        grid = self.grids.get(class_key, {})
        for day in DAYS:
            for si, cell in enumerate(grid.get(day, [])):
                yield day, si, cell

    def all(self) -> Iterable[Tuple[str, str, int, Cell]]:
        for class_key in self.grids:
            for day, si, cell in self.iter_class(class_key):
                yield class_key, day, si, cell

    def subject_counts(self, class_key: str) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for _, _, cell in self.iter_class(class_key):
            if cell.subject_id:
                counts[cell.subject_id] = counts.get(cell.subject_id, 0) + 1
        return counts

    def filled_count(self) -> int:
        return sum(1 for _, _, _, cell in self.all() if not cell.empty)
