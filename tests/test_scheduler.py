from collections import Counter

from weekgrid.models import DAYS, AssignmentBook
from weekgrid.scheduler import GeneratorConfig, SystemRandomSource, generate, generate_best

from conftest import school, subject, teacher


def _cells(result, class_key, subject_id=None):
    return [
        (day, si, cell)
        for day, si, cell in result.timetable.iter_class(class_key)
        if cell.subject_id and (subject_id is None or cell.subject_id == subject_id)
    ]


def _longest_run(cells, subject_id) -> int:
    best = run = 0
    for cell in cells:
        run = run + 1 if cell.subject_id == subject_id else 0
        best = max(best, run)
    return best


def test_single_subject_single_teacher(last_index) -> None:
    result = generate(
        school(7),
        [subject("mat", {"5": 5})],
        [teacher("t1", ["mat"], max_hours=30)],
        rng=last_index,
    )
    placed = _cells(result, "5-A", "mat")
    assert len(placed) == 5
    assert {c.teacher_id for _, _, c in placed} == {"t1"}
    assert result.ledger.load("t1") == 5
    assert result.missing == 0


def test_block_subject_with_odd_demand(last_index) -> None:
    result = generate(
        school(7),
        [subject("bed", {"5": 3}, prefer_block_scheduling=True)],
        [teacher("t1", ["bed"])],
        rng=last_index,
    )
    grid = result.timetable.grids["5-A"]
    assert [c.subject_id for c in grid["Pazartesi"][:3]] == ["bed", "bed", "bed"]
    assert len(_cells(result, "5-A", "bed")) == 3


def test_block_respects_avoid_slots_and_day_cap(last_index) -> None:
    result = generate(
        school(6),
        [subject("bed", {"5": 4}, prefer_block_scheduling=True, per_day_max=2, avoid_slots=["S1"])],
        [teacher("t1", ["bed"])],
        rng=last_index,
    )
    placed = _cells(result, "5-A", "bed")
    assert [(day, si) for day, si, _ in placed] == [("Pazartesi", 1), ("Pazartesi", 2), ("Salı", 1), ("Salı", 2)]


def test_block_halves_share_one_teacher(last_index) -> None:
    teachers = [
        teacher("a", ["bed"], unavailable={"Pazartesi": ["S2"]}),
        teacher("b", ["bed"], unavailable={"Pazartesi": ["S1"]}),
    ]
    result = generate(
        school(4), [subject("bed", {"5": 2}, prefer_block_scheduling=True)], teachers, rng=last_index
    )
    placed = _cells(result, "5-A", "bed")
    assert [(day, si, c.teacher_id) for day, si, c in placed] == [
        ("Pazartesi", 1, "b"),
        ("Pazartesi", 2, "b"),
    ]


def test_block_subject_never_fragments_even_demand() -> None:
    subjects = [
        subject("bed", {"5": 4}, prefer_block_scheduling=True),
        subject("mat", {"5": 10}),
        subject("tur", {"5": 10}),
    ]
    teachers = [teacher("b1", ["bed"]), teacher("b2", ["bed"]), teacher("m", ["mat"]), teacher("t", ["tur"])]
    for seed in range(5):
        result = generate(school(6), subjects, teachers, rng=SystemRandomSource(seed))
        for day in DAYS:
            cells = result.timetable.grids["5-A"][day]
            si = 0
            while si < len(cells):
                if cells[si].subject_id != "bed":
                    si += 1
                    continue
                start = si
                while si < len(cells) and cells[si].subject_id == "bed":
                    si += 1
                assert (si - start) % 2 == 0
                assert len({cells[k].teacher_id for k in range(start, si)}) == 1


def test_block_pair_keeps_max_consecutive(last_index) -> None:
    result = generate(
        school(7),
        [subject("bed", {"5": 4}, prefer_block_scheduling=True, max_consecutive=2)],
        [teacher("t1", ["bed"])],
        rng=last_index,
    )
    placed = _cells(result, "5-A", "bed")
    assert [(day, si) for day, si, _ in placed] == [("Pazartesi", 0), ("Pazartesi", 1), ("Pazartesi", 3), ("Pazartesi", 4)]


def test_block_single_keeps_day_cap_and_run_cap(last_index) -> None:
    capped = generate(
        school(4),
        [subject("bed", {"5": 3}, prefer_block_scheduling=True, per_day_max=2)],
        [teacher("t1", ["bed"])],
        rng=last_index,
    )
    assert [(day, si) for day, si, _ in _cells(capped, "5-A")] == [("Pazartesi", 0), ("Pazartesi", 1), ("Salı", 0)]

    short_runs = generate(
        school(3),
        [subject("bed", {"5": 3}, prefer_block_scheduling=True, max_consecutive=2)],
        [teacher("t1", ["bed"])],
        rng=last_index,
    )
    assert [(day, si) for day, si, _ in _cells(short_runs, "5-A")] == [("Pazartesi", 0), ("Pazartesi", 1), ("Salı", 0)]


def test_block_pin_holds_both_halves(last_index) -> None:
    pins = AssignmentBook()
    pins.assign("5-A", "bed", "a")
    subjects = [subject("bed", {"5": 2}, prefer_block_scheduling=True)]
    result = generate(school(4), subjects, [teacher("a", ["bed"]), teacher("b", ["bed"])], pins, rng=last_index)
    assert [(day, si, c.teacher_id) for day, si, c in _cells(result, "5-A")] == [
        ("Pazartesi", 0, "a"),
        ("Pazartesi", 1, "a"),
    ]

    # The pinned teacher can never take the second half, so no pair goes in
    blocked = {day: ["S2"] for day in DAYS}
    result = generate(
        school(2), subjects, [teacher("a", ["bed"], unavailable=blocked), teacher("b", ["bed"])], pins, rng=last_index
    )
    assert result.timetable.filled_count() == 0
    assert result.missing == 2


def test_unavailable_day_is_never_used(last_index) -> None:
    blocked = {"Çarşamba": [f"S{i}" for i in range(1, 8)]}
    result = generate(
        school(7), [subject("mat", {"5": 30})], [teacher("t1", ["mat"], unavailable=blocked)], rng=last_index
    )
    assert all(c.empty for c in result.timetable.grids["5-A"]["Çarşamba"])
    assert len(_cells(result, "5-A")) == 28
    assert result.missing == 2


def test_shared_teacher_is_never_double_booked(last_index) -> None:
    result = generate(
        school(1, {"5": ["A", "B"]}),
        [subject("mat", {"5": 5})],
        [teacher("t1", ["mat"])],
        rng=last_index,
    )
    # The first class takes every slot the teacher has
    assert len(_cells(result, "5-A")) == 5
    assert _cells(result, "5-B") == []
    assert result.missing == 5


def test_min_days_spreads_lessons(last_index) -> None:
    result = generate(school(7), [subject("mat", {"5": 3}, min_days=3)], [teacher("t1", ["mat"])], rng=last_index)
    days = [day for day, _, _ in _cells(result, "5-A", "mat")]
    assert days == ["Pazartesi", "Salı", "Çarşamba"]


def test_min_days_allows_repeats_once_spread_is_safe(last_index) -> None:
    result = generate(school(7), [subject("mat", {"5": 5}, min_days=3)], [teacher("t1", ["mat"])], rng=last_index)
    per_day = Counter(day for day, _, _ in _cells(result, "5-A", "mat"))
    assert sum(per_day.values()) == 5
    assert len(per_day) >= 3


def test_no_eligible_teacher_leaves_cells_empty(last_index) -> None:
    result = generate(
        school(6, {"5": ["A", "B"]}),
        [subject("mat", {"5": 4}), subject("bed", {"5": 2}, prefer_block_scheduling=True)],
        [teacher("t1", ["mat"], preferred_grades=["6"])],
        rng=last_index,
    )
    assert result.timetable.filled_count() == 0
    assert result.missing == 12


def test_per_day_cap_in_regular_phase(last_index) -> None:
    result = generate(school(7), [subject("mat", {"5": 5}, per_day_max=1)], [teacher("t1", ["mat"])], rng=last_index)
    per_day = Counter(day for day, _, _ in _cells(result, "5-A", "mat"))
    assert per_day == Counter({day: 1 for day in DAYS})


def test_max_consecutive_breaks_runs(last_index) -> None:
    result = generate(school(7), [subject("mat", {"5": 10}, max_consecutive=2)], [teacher("t1", ["mat"])], rng=last_index)
    monday = result.timetable.grids["5-A"]["Pazartesi"]
    assert [c.subject_id for c in monday] == ["mat", "mat", None, "mat", "mat", None, "mat"]
    for day in DAYS:
        assert _longest_run(result.timetable.grids["5-A"][day], "mat") <= 2


def test_consecutive_lookback_window(last_index) -> None:
    subjects = [subject("mat", {"5": 7}, max_consecutive=5)]
    teachers = [teacher("t1", ["mat"])]
    # Three slots of lookback never see a run of five
    loose = generate(school(7), subjects, teachers, rng=last_index)
    assert _longest_run(loose.timetable.grids["5-A"]["Pazartesi"], "mat") == 7

    strict = generate(school(7), subjects, teachers, rng=last_index, config=GeneratorConfig(consecutive_lookback=5))
    assert _longest_run(strict.timetable.grids["5-A"]["Pazartesi"], "mat") == 5


def test_avoid_slots_in_regular_phase(last_index) -> None:
    result = generate(school(3), [subject("mat", {"5": 10}, avoid_slots=["S1"])], [teacher("t1", ["mat"])], rng=last_index)
    assert all(si != 0 for _, si, _ in _cells(result, "5-A"))
    assert len(_cells(result, "5-A")) == 10


def test_max_hours_caps_load(last_index) -> None:
    result = generate(
        school(6, {"5": ["A", "B"]}),
        [subject("mat", {"5": 4})],
        [teacher("t1", ["mat"], max_hours=5)],
        rng=last_index,
    )
    assert result.ledger.load("t1") == 5
    assert result.timetable.filled_count() == 5


def test_manual_pin_is_honored(last_index) -> None:
    pins = AssignmentBook()
    pins.assign("5-A", "mat", "a")
    result = generate(
        school(6), [subject("mat", {"5": 6})], [teacher("a", ["mat"]), teacher("b", ["mat"])], pins, rng=last_index
    )
    assert {c.teacher_id for _, _, c in _cells(result, "5-A")} == {"a"}


def test_unavailable_pin_is_not_replaced(last_index) -> None:
    pins = AssignmentBook()
    pins.assign("5-A", "mat", "a")
    blocked = {day: ["S1"] for day in DAYS}
    result = generate(
        school(1),
        [subject("mat", {"5": 5})],
        [teacher("a", ["mat"], unavailable=blocked), teacher("b", ["mat"])],
        pins,
        rng=last_index,
    )
    assert result.timetable.filled_count() == 0


def test_one_teacher_per_class_subject_within_a_run() -> None:
    teachers = [teacher("a", ["mat"]), teacher("b", ["mat"]), teacher("c", ["mat"])]
    result = generate(school(6, {"5": ["A", "B"]}), [subject("mat", {"5": 5})], teachers, rng=SystemRandomSource(3))
    for key in ("5-A", "5-B"):
        assert len({c.teacher_id for _, _, c in _cells(result, key)}) == 1


def test_empty_inputs_degrade_gracefully(last_index) -> None:
    result = generate(school(6, {}), [], [], rng=last_index)
    assert result.timetable.grids == {}
    assert result.missing == 0

    result = generate(school(6), [], [], rng=last_index)
    assert result.timetable.filled_count() == 0

    result = generate(school(6), [subject("mat", {"5": 0}), subject("tur", {"5": -2})], [], rng=last_index)
    assert result.missing == 0


def test_each_run_starts_from_scratch(last_index) -> None:
    args = (school(1), [subject("mat", {"5": 5})], [teacher("t1", ["mat"], max_hours=5)])
    first = generate(*args, rng=last_index)
    second = generate(*args, rng=last_index)
    assert first.timetable.filled_count() == second.timetable.filled_count() == 5
    assert first.ledger is not second.ledger


def test_generate_best_stops_at_complete_schedule() -> None:
    result = generate_best(
        school(7),
        [subject("mat", {"5": 5})],
        [teacher("t1", ["mat"])],
        config=GeneratorConfig(attempts=5, seed=1),
    )
    assert result.missing == 0
    assert result.audit[-1] == "Best of 1 attempt(s): 0 lessons missing"


def test_generate_best_keeps_fewest_missing() -> None:
    result = generate_best(
        school(2, {"5": ["A", "B"]}),
        [subject("mat", {"5": 6})],
        [teacher("t1", ["mat"])],
        config=GeneratorConfig(attempts=3, seed=4),
    )
    # Ten teacher slots for twelve lessons: two always stay missing
    assert result.missing == 2
    assert result.audit[-1].startswith("Best of 3 attempt(s)")
