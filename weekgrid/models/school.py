from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class SchoolClass:
    key: str
    grade: str
    section: str

    @property
    def display_name(self) -> str:
        return format_class_name(self.key)


@dataclass(frozen=True)
class GradeSections:
    grade: str
    sections: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SchoolConfig:
    daily_lessons: int = 6
    grades: List[GradeSections] = field(default_factory=list)

    def build_classes(self) -> List[SchoolClass]:
        return [
            SchoolClass(f"{g.grade}-{s}", g.grade, s) for g in self.grades for s in g.sections
        ]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchoolConfig":
        return cls(
            daily_lessons=int(data.get("dailyLessons", 6)),
            grades=[
                GradeSections(str(g["grade"]), [str(s) for s in g.get("sections", [])])
                for g in data.get("grades", [])
            ],
        )


def format_class_name(class_key: str) -> str:
    grade, _, section = class_key.partition("-")
    return f"{grade}/{section}" if section else grade
