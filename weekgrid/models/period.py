from __future__ import annotations

from typing import List, Tuple

DAYS: Tuple[str, ...] = ("Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma")

MAX_DAILY_LESSONS = 12


def slot_label(slot_index: int) -> str:
    return f"S{slot_index + 1}"


def slot_index(label: str) -> int:
    # "S3" -> 2
    return int(label[1:]) - 1


def slot_labels(daily_lessons: int) -> List[str]:
    return [slot_label(i) for i in range(max(1, daily_lessons))]
