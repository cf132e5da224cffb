from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List

from ..models.assignment import AssignmentBook
from ..models.period import MAX_DAILY_LESSONS
from ..models.school import SchoolConfig
from ..models.subject import Subject
from ..models.teacher import Teacher


class ConfigError(ValueError):
    pass


@dataclass
class LoadedData:
    school: SchoolConfig
    subjects: List[Subject]
    teachers: List[Teacher]
    assignments: AssignmentBook = field(default_factory=AssignmentBook)


def load_json(path: Path) -> Any:
    if not path.exists():
        raise ConfigError(f"Missing configuration file: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc


def _load_list(path: Path) -> List[dict]:
    raw = load_json(path)
    if not isinstance(raw, list):
        raise ConfigError(f"{path.name} must contain a list")
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"{path.name}[{i}] must be an object, got {type(entry).__name__}")
    return raw


def load_school(path: Path) -> SchoolConfig:
    raw = load_json(path)
    if not isinstance(raw, dict):
        raise ConfigError(f"{path.name} must contain an object")
    school = SchoolConfig.from_dict(raw)
    if not 1 <= school.daily_lessons <= MAX_DAILY_LESSONS:
        raise ConfigError(
            f"dailyLessons must be between 1 and {MAX_DAILY_LESSONS}, got {school.daily_lessons}"
        )
    return school


def load_data(data_dir: Path) -> LoadedData:
    assignments = AssignmentBook()
    pins_path = data_dir / "assignments.json"
    if pins_path.exists():
        raw = load_json(pins_path)
        if not isinstance(raw, dict):
            raise ConfigError("assignments.json must contain an object")
        assignments.pins.update({str(k): str(v) for k, v in raw.items()})
    try:
        return LoadedData(
            school=load_school(data_dir / "school.json"),
            subjects=[Subject.from_dict(s) for s in _load_list(data_dir / "subjects.json")],
            teachers=[Teacher.from_dict(t) for t in _load_list(data_dir / "teachers.json")],
            assignments=assignments,
        )
    except ConfigError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise ConfigError(f"Malformed entity in {data_dir}: {exc!r}") from exc
