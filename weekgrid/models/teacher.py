from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .period import slot_label


@dataclass(frozen=True)
class Teacher:
    id: str
    name: str
    subject_ids: List[str]
    min_hours: int = 0
    max_hours: int = 0
    unavailable: Dict[str, List[str]] = field(default_factory=dict)
    preferred_grades: List[str] = field(default_factory=list)
    preferred_grades_by_subject: Dict[str, List[str]] = field(default_factory=dict)

    def teaches(self, subject_id: str) -> bool:
        return subject_id in self.subject_ids

    def is_unavailable(self, day: str, slot_index: int) -> bool:
        return slot_label(slot_index) in self.unavailable.get(day, [])

    def unavailable_count(self) -> int:
        return sum(len(labels) for labels in self.unavailable.values())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Teacher":
        # Older records carry a single "subjectId" instead of "subjectIds"
        subject_ids = list(data.get("subjectIds") or [])
        if not subject_ids and data.get("subjectId"):
            subject_ids = [data["subjectId"]]
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            subject_ids=[str(s) for s in subject_ids],
            min_hours=int(data.get("minHours") or 0),
            max_hours=int(data.get("maxHours") or 0),
            unavailable={
                str(d): list(labels or []) for d, labels in (data.get("unavailable") or {}).items()
            },
            preferred_grades=[str(g) for g in data.get("preferredGrades") or []],
            preferred_grades_by_subject={
                str(s): [str(g) for g in (grades or [])]
                for s, grades in (data.get("preferredGradesBySubject") or {}).items()
            },
        )
