from __future__ import annotations

import logging
from typing import Iterable

from ..models.period import DAYS, slot_label
from ..models.subject import Subject
from .state import ClassPlacement


def place_blocks(placement: ClassPlacement, subjects: Iterable[Subject]) -> int:
    """Place block-scheduled subjects as two-slot units before anything else.

    Returns the number of lessons placed. Demand that finds no compliant pair
    (or single slot for an odd hour) is left unplaced.
    """
    logger = logging.getLogger(__name__)
    placed = 0
    for subject in subjects:
        if not subject.is_block:
            continue
        count = subject.hours_for(placement.grade)
        if count <= 0:
            continue
        got = _place_subject(placement, subject, count)
        if got < count:
            logger.debug(f"Block {placement.key} {subject.id}: {got}/{count} placed")
        placed += got
    return placed


def _place_subject(placement: ClassPlacement, subject: Subject, count: int) -> int:
    blocks_needed = count // 2
    single_needed = count % 2
    n = placement.daily_lessons
    blocks = 0
    for day in DAYS:
        if blocks >= blocks_needed:
            break
        si = 0
        while si < n - 1 and blocks < blocks_needed:
            teacher = _pair_teacher(placement, subject, day, si) if _pair_open(placement, subject, day, si) else None
            if teacher is None:
                si += 1
                continue
            placement.place(day, si, subject.id, teacher)
            placement.place(day, si + 1, subject.id, teacher)
            blocks += 1
            si += 2
    placed = blocks * 2
    if single_needed and placed < count and _place_single(placement, subject):
        placed += 1
    return placed


def _pair_open(placement: ClassPlacement, subject: Subject, day: str, si: int) -> bool:
    if not placement.is_free(day, si) or not placement.is_free(day, si + 1):
        return False
    if subject.avoids(slot_label(si)) or subject.avoids(slot_label(si + 1)):
        return False
    return _within_rules(placement, subject, day, si, 2)


def _within_rules(placement: ClassPlacement, subject: Subject, day: str, si: int, width: int) -> bool:
    rule = subject.rule
    if rule is None:
        return True
    if rule.per_day_max and placement.day_count(day, subject.id) + width > rule.per_day_max:
        return False
    if rule.max_consecutive:
        run = (
            placement.run_before(day, si, subject.id)
            + width
            + placement.run_after(day, si + width - 1, subject.id)
        )
        if run > rule.max_consecutive:
            return False
    return True


def _pair_teacher(placement: ClassPlacement, subject: Subject, day: str, si: int) -> str | None:
    # Both halves of a block must be taught by the same teacher
    first = placement.resolve(subject.id, day, si, placement.required_teacher(subject.id))
    if first is None:
        return None
    second = placement.resolve(subject.id, day, si + 1, first)
    return first if second == first else None


def _place_single(placement: ClassPlacement, subject: Subject) -> bool:
    for day in DAYS:
        for si in range(placement.daily_lessons):
            if not placement.is_free(day, si) or subject.avoids(slot_label(si)):
                continue
            if not _within_rules(placement, subject, day, si, 1):
                continue
            teacher = placement.resolve(subject.id, day, si, placement.required_teacher(subject.id))
            if teacher is None:
                continue
            placement.place(day, si, subject.id, teacher)
            return True
    return False
