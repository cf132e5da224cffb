from __future__ import annotations

from typing import Dict, Set, Tuple

from ..models.teacher import Teacher


class OccupancyLedger:
    """Teacher commitments for a single generation run, shared by all classes."""

    def __init__(self):
        # teacher -> {(day, slot_index)}
        self.occupied: Dict[str, Set[Tuple[str, int]]] = {}
        self.loads: Dict[str, int] = {}

    def is_free(self, teacher_id: str, day: str, slot_index: int) -> bool:
        return (day, slot_index) not in self.occupied.get(teacher_id, ())

    def commit(self, teacher_id: str, day: str, slot_index: int) -> None:
        self.occupied.setdefault(teacher_id, set()).add((day, slot_index))
        self.loads[teacher_id] = self.loads.get(teacher_id, 0) + 1

    def load(self, teacher_id: str) -> int:
        return self.loads.get(teacher_id, 0)

    def under_cap(self, teacher: Teacher) -> bool:
        if not teacher.max_hours:
            return True
        return self.load(teacher.id) < teacher.max_hours
