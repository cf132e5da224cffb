from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict


def assignment_key(class_key: str, subject_id: str) -> str:
    return f"{class_key}|{subject_id}"


@dataclass
class AssignmentBook:
    """Manual teacher pins, keyed by ``"{classKey}|{subjectId}"``."""

    pins: Dict[str, str] = field(default_factory=dict)

    def assign(self, class_key: str, subject_id: str, teacher_id: str | None) -> None:
        if teacher_id is None:
            self.unassign(class_key, subject_id)
            return
        self.pins[assignment_key(class_key, subject_id)] = teacher_id

    def unassign(self, class_key: str, subject_id: str) -> None:
        self.pins.pop(assignment_key(class_key, subject_id), None)

    def get(self, class_key: str, subject_id: str) -> str | None:
        return self.pins.get(assignment_key(class_key, subject_id))

    def reset(self) -> None:
        self.pins.clear()

    def count_by_teacher(self, teacher_id: str) -> int:
        return sum(1 for t in self.pins.values() if t == teacher_id)

    def __len__(self) -> int:
        return len(self.pins)
