from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List

from ..data.registry import OccupancyLedger
from ..data.teachers import TeacherDirectory
from ..models.assignment import AssignmentBook
from ..models.school import SchoolClass, SchoolConfig
from ..models.subject import Subject
from ..models.teacher import Teacher
from ..models.timetable import Timetable
from ..validate.deficits import class_deficits, total_missing
from .blocks import place_blocks
from .fill import fill_class
from .pick import RandomSource, SystemRandomSource
from .state import ClassPlacement, GenerationContext


@dataclass
class GeneratorConfig:
    attempts: int = 1
    seed: int | None = None
    # How far back the regular phase looks when enforcing max_consecutive
    consecutive_lookback: int = 3


@dataclass
class GenerationResult:
    timetable: Timetable
    ledger: OccupancyLedger
    classes: List[SchoolClass]
    missing: int = 0
    audit: List[str] = field(default_factory=list)


def generate(
    school: SchoolConfig,
    subjects: Iterable[Subject],
    teachers: Iterable[Teacher],
    assignments: AssignmentBook | None = None,
    *,
    rng: RandomSource | None = None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Build a fresh timetable for every class of the school.

    Classes are processed in configuration order; each runs the block phase and
    then the regular phase. Teacher occupancy and load are shared across
    classes and live only for this call.
    """
    logger = logging.getLogger(__name__)
    config = config or GeneratorConfig()
    rng = rng or SystemRandomSource(config.seed)
    subjects = list(subjects)
    classes = school.build_classes()

    tt = Timetable(school.daily_lessons)
    ctx = GenerationContext(
        timetable=tt,
        ledger=OccupancyLedger(),
        directory=TeacherDirectory(teachers),
        rng=rng,
        assignments=assignments or AssignmentBook(),
        consecutive_lookback=config.consecutive_lookback,
    )
    for c in classes:
        tt.add_class(c.key)

    audit: List[str] = []
    for c in classes:
        placement = ClassPlacement(ctx, c)
        blocks = place_blocks(placement, subjects)
        regular = fill_class(placement, subjects)
        demand = sum(max(0, s.hours_for(c.grade)) for s in subjects)
        line = f"{c.key}: {blocks + regular}/{demand} lessons placed ({blocks} in blocks)"
        audit.append(line)
        logger.info(line)

    missing = total_missing(class_deficits(tt, classes, subjects))
    return GenerationResult(tt, ctx.ledger, classes, missing, audit)


def generate_best(
    school: SchoolConfig,
    subjects: Iterable[Subject],
    teachers: Iterable[Teacher],
    assignments: AssignmentBook | None = None,
    *,
    rng: RandomSource | None = None,
    config: GeneratorConfig | None = None,
) -> GenerationResult:
    """Reroll ``generate`` up to ``config.attempts`` times, keeping the fewest missing hours."""
    logger = logging.getLogger(__name__)
    config = config or GeneratorConfig()
    rng = rng or SystemRandomSource(config.seed)
    subjects = list(subjects)
    teachers = list(teachers)
    best: GenerationResult | None = None
    for attempt in range(1, max(1, config.attempts) + 1):
        res = generate(school, subjects, teachers, assignments, rng=rng, config=config)
        logger.info(f"Attempt {attempt}: {res.missing} lessons missing")
        if best is None or res.missing < best.missing:
            best = res
        if best.missing == 0:
            break
    best.audit.append(f"Best of {attempt} attempt(s): {best.missing} lessons missing")
    return best
