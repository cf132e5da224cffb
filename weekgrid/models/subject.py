from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class SubjectRule:
    per_day_max: int = 0
    max_consecutive: int = 0
    min_days: int = 0
    prefer_block_scheduling: bool = False
    avoid_slots: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SubjectRule":
        return cls(
            per_day_max=int(data.get("perDayMax") or 0),
            max_consecutive=int(data.get("maxConsecutive") or 0),
            min_days=int(data.get("minDays") or 0),
            prefer_block_scheduling=bool(data.get("preferBlockScheduling", False)),
            avoid_slots=list(data.get("avoidSlots") or []),
        )


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    weekly_hours_by_grade: Dict[str, int] = field(default_factory=dict)
    rule: SubjectRule | None = None
    color: str | None = None

    def hours_for(self, grade: str) -> int:
        return int(self.weekly_hours_by_grade.get(grade, 0) or 0)

    @property
    def is_block(self) -> bool:
        return self.rule is not None and self.rule.prefer_block_scheduling

    def avoids(self, label: str) -> bool:
        return self.rule is not None and label in self.rule.avoid_slots

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        rule = data.get("rule")
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", data["id"])),
            weekly_hours_by_grade={
                str(g): int(h) for g, h in (data.get("weeklyHoursByGrade") or {}).items()
            },
            rule=SubjectRule.from_dict(rule) if isinstance(rule, dict) else None,
            color=data.get("color"),
        )
