from __future__ import annotations

import logging
from collections import Counter
from typing import Dict, Iterable, List, Set

from ..models.period import DAYS, slot_label
from ..models.subject import Subject
from .pick import shuffle
from .state import ClassPlacement


def build_pool(placement: ClassPlacement, subjects: Iterable[Subject]) -> List[str]:
    pool: List[str] = []
    for s in subjects:
        if s.is_block:
            continue
        count = s.hours_for(placement.grade)
        if count > 0:
            pool.extend([s.id] * count)
    shuffle(pool, placement.ctx.rng)
    return pool


def fill_class(placement: ClassPlacement, subjects: Iterable[Subject]) -> int:
    """Fill the cells left empty by the block phase from a shuffled lesson pool.

    Each empty cell takes the first pool entry that passes every rule and
    resolves a teacher; a cell nobody can take stays empty.
    """
    logger = logging.getLogger(__name__)
    subjects = list(subjects)
    by_id: Dict[str, Subject] = {s.id: s for s in subjects}
    pool = build_pool(placement, subjects)
    remaining = Counter(pool)
    placed = 0
    for day in DAYS:
        for si in range(placement.daily_lessons):
            if not pool:
                return placed
            if not placement.is_free(day, si):
                continue
            rejected: Set[str] = set()
            for idx, subject_id in enumerate(pool):
                if subject_id in rejected:
                    continue
                teacher = _accept(placement, by_id[subject_id], day, si, remaining[subject_id])
                if teacher is None:
                    rejected.add(subject_id)
                    continue
                del pool[idx]
                remaining[subject_id] -= 1
                placement.place(day, si, subject_id, teacher)
                placed += 1
                break
    if pool:
        logger.debug(f"Fill {placement.key}: {len(pool)} lessons left unplaced")
    return placed


def _accept(placement: ClassPlacement, subject: Subject, day: str, si: int, remaining: int) -> str | None:
    if subject.avoids(slot_label(si)):
        return None
    rule = subject.rule
    if rule is not None:
        if rule.per_day_max and placement.day_count(day, subject.id) >= rule.per_day_max:
            return None
        if rule.max_consecutive:
            run = placement.run_before(day, si, subject.id, limit=placement.ctx.consecutive_lookback)
            if run >= rule.max_consecutive:
                return None
        if rule.min_days and not _keeps_spread(placement, subject, day, remaining, rule.min_days):
            return None
    return placement.resolve(subject.id, day, si, placement.required_teacher(subject.id))


def _keeps_spread(placement: ClassPlacement, subject: Subject, day: str, remaining: int, min_days: int) -> bool:
    days = placement.days_with(subject.id)
    if day not in days or len(days) >= min_days:
        return True
    # A repeat today must leave enough hours to still reach min_days distinct days
    return remaining - 1 >= min_days - len(days)
