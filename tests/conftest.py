from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import pytest

from weekgrid.models import GradeSections, SchoolConfig, Subject, SubjectRule, Teacher

ROOT = Path(__file__).resolve().parents[1]


class LastIndexSource:
    """Shuffles become no-ops and picks take the last candidate."""

    def pick_index(self, n: int) -> int:
        return n - 1


class FirstIndexSource:
    def pick_index(self, n: int) -> int:
        return 0


def school(daily_lessons: int = 7, grades: Dict[str, List[str]] | None = None) -> SchoolConfig:
    grades = grades if grades is not None else {"5": ["A"]}
    return SchoolConfig(daily_lessons, [GradeSections(g, s) for g, s in grades.items()])


def subject(sid: str, hours: Dict[str, int], **rule) -> Subject:
    return Subject(sid, sid.title(), hours, SubjectRule(**rule) if rule else None)


def teacher(tid: str, subjects: List[str], **kwargs) -> Teacher:
    return Teacher(tid, tid.title(), subjects, **kwargs)


@pytest.fixture
def last_index() -> LastIndexSource:
    return LastIndexSource()


@pytest.fixture
def first_index() -> FirstIndexSource:
    return FirstIndexSource()


@pytest.fixture
def data_dir() -> Path:
    return ROOT / "data"
