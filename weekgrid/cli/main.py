from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from ..data.loader import ConfigError, load_data
from ..data.teachers import TeacherDirectory
from ..render.csv_out import csv_blocks, teacher_csv_blocks, write_csv_blocks, write_schedule_json
from ..scheduler import GeneratorConfig, calculate_teacher_schedules, generate_best
from ..validate.checks import validate_all
from ..validate.report import format_validation_report, write_validation_report

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _setup_logging(outputs_dir: Path) -> None:
    logs_dir = outputs_dir / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(logs_dir / "weekgrid.log", encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )


def run_pipeline(
    data_dir: Path,
    outputs_dir: Path,
    *,
    log_level: int | None = None,
    attempts: int = 1,
    seed: int | None = None,
    consecutive_lookback: int = 3,
    auto_assign: bool = False,
) -> tuple[str, str, str]:
    _setup_logging(outputs_dir)
    if log_level is not None:
        logging.getLogger().setLevel(log_level)
    logger = logging.getLogger(__name__)

    loaded = load_data(data_dir)
    classes = loaded.school.build_classes()
    logger.info(
        f"Loaded {len(classes)} classes, {len(loaded.subjects)} subjects, "
        f"{len(loaded.teachers)} teachers from {data_dir}"
    )
    if auto_assign:
        added = TeacherDirectory(loaded.teachers).auto_assign_single_options(
            classes, loaded.subjects, loaded.assignments
        )
        logger.info(f"Auto-pinned {added} single-option class subjects")

    config = GeneratorConfig(attempts=attempts, seed=seed, consecutive_lookback=consecutive_lookback)
    result = generate_best(
        loaded.school, loaded.subjects, loaded.teachers, loaded.assignments, config=config
    )
    tt = result.timetable

    report = validate_all(tt, classes, loaded.subjects, loaded.teachers)
    write_validation_report(report, outputs_dir)

    csv = csv_blocks(tt, classes, loaded.subjects, loaded.teachers)
    write_csv_blocks(csv, outputs_dir)
    schedules = calculate_teacher_schedules(
        tt.grids, loaded.teachers, loaded.subjects, loaded.school.daily_lessons
    )
    teacher_csv = teacher_csv_blocks(schedules, loaded.teachers)
    write_csv_blocks(teacher_csv, outputs_dir, "teachers.csv")
    write_schedule_json(tt, outputs_dir)

    with (outputs_dir / "audit.txt").open("w", encoding="utf-8") as f:
        f.write("\n".join(result.audit))

    return csv, format_validation_report(report), teacher_csv


app = typer.Typer(add_completion=False, help="Weekly school timetable generator")


def _run(
    data_dir: Path,
    outputs_dir: Path,
    log_level: str = "INFO",
    attempts: int = 1,
    seed: int | None = None,
    lookback: int = 3,
    auto_assign: bool = False,
) -> tuple[str, str, str]:
    level = getattr(logging, log_level.upper(), logging.INFO)
    try:
        return run_pipeline(
            data_dir,
            outputs_dir,
            log_level=level,
            attempts=attempts,
            seed=seed,
            consecutive_lookback=lookback,
            auto_assign=auto_assign,
        )
    except ConfigError as exc:
        logging.getLogger(__name__).error(str(exc))
        raise typer.Exit(code=1)


@app.command("generate")
def cli_generate(
    data_dir: Path = typer.Option(PROJECT_ROOT / "data", help="Directory with school/subjects/teachers JSON"),
    outputs_dir: Path = typer.Option(PROJECT_ROOT / "outputs", help="Where exports and logs go"),
    log_level: str = typer.Option("INFO", help="Log level"),
    attempts: int = typer.Option(1, help="Independent rerolls; the run with fewest missing lessons wins"),
    seed: Optional[int] = typer.Option(None, help="Seed for a reproducible run"),
    lookback: int = typer.Option(3, help="Slots inspected for the max-consecutive rule"),
    auto_assign: bool = typer.Option(False, help="Pin subjects that have a single eligible teacher"),
) -> None:
    csv, validation, _ = _run(data_dir, outputs_dir, log_level, attempts, seed, lookback, auto_assign)
    print(csv)
    print(validation)


@app.command("validate")
def cli_validate(
    data_dir: Path = typer.Option(PROJECT_ROOT / "data"),
    outputs_dir: Path = typer.Option(PROJECT_ROOT / "outputs"),
    attempts: int = typer.Option(1),
) -> None:
    _, validation, _ = _run(data_dir, outputs_dir, attempts=attempts)
    print(validation)


@app.command("export-csv")
def cli_export_csv(
    data_dir: Path = typer.Option(PROJECT_ROOT / "data"),
    outputs_dir: Path = typer.Option(PROJECT_ROOT / "outputs"),
) -> None:
    csv, _, _ = _run(data_dir, outputs_dir)
    print(csv)


@app.command("teachers")
def cli_teachers(
    data_dir: Path = typer.Option(PROJECT_ROOT / "data"),
    outputs_dir: Path = typer.Option(PROJECT_ROOT / "outputs"),
) -> None:
    _, _, teacher_csv = _run(data_dir, outputs_dir)
    print(teacher_csv)


@app.command("assignments")
def cli_assignments(data_dir: Path = typer.Option(PROJECT_ROOT / "data")) -> None:
    """Show how many class subjects still need a manual teacher choice."""
    try:
        loaded = load_data(data_dir)
    except ConfigError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    stats = TeacherDirectory(loaded.teachers).assignment_stats(
        loaded.school.build_classes(), loaded.subjects, loaded.assignments
    )
    for k, v in stats.items():
        print(f"{k}: {v}")


if __name__ == "__main__":  # pragma: no cover
    app()
