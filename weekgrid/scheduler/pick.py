from __future__ import annotations

import random
from typing import List, MutableSequence, Protocol, TypeVar

from ..data.registry import OccupancyLedger
from ..data.teachers import TeacherDirectory

T = TypeVar("T")


class RandomSource(Protocol):
    def pick_index(self, n: int) -> int:
        """Return an index in ``[0, n)``."""
        ...


class SystemRandomSource:
    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def pick_index(self, n: int) -> int:
        return self._rng.randrange(n)


def shuffle(items: MutableSequence[T], rng: RandomSource) -> MutableSequence[T]:
    # Fisher-Yates, in place
    for i in range(len(items) - 1, 0, -1):
        j = rng.pick_index(i + 1)
        items[i], items[j] = items[j], items[i]
    return items


def candidate_teachers(
    directory: TeacherDirectory,
    ledger: OccupancyLedger,
    subject_id: str,
    grade: str,
    day: str,
    slot_index: int,
    required_teacher_id: str | None = None,
) -> List[str]:
    out: List[str] = []
    for t in directory.eligible_teachers(subject_id, grade):
        if required_teacher_id is not None and t.id != required_teacher_id:
            continue
        if t.is_unavailable(day, slot_index):
            continue
        if not ledger.under_cap(t):
            continue
        if not ledger.is_free(t.id, day, slot_index):
            continue
        out.append(t.id)
    return out


def try_resolve(
    directory: TeacherDirectory,
    ledger: OccupancyLedger,
    rng: RandomSource,
    subject_id: str,
    grade: str,
    day: str,
    slot_index: int,
    required_teacher_id: str | None = None,
) -> str | None:
    """Pick a teacher for one slot without touching the ledger.

    ``None`` means nobody can take the slot; callers leave it unplaced.
    """
    choices = candidate_teachers(
        directory, ledger, subject_id, grade, day, slot_index, required_teacher_id
    )
    if not choices:
        return None
    if len(choices) == 1:
        return choices[0]
    return choices[rng.pick_index(len(choices))]
