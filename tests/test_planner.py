import pytest

from catalog import normalize
from models import NoScheduleError, SessionKind
from planner import COLORS, LAB_COLOR, PS_COLOR, RandomPalette, RoundRobinPalette, Timetable

from conftest import raw


def test_add_lecture_brings_its_lab(timetable, by_code):
    added = timetable.add(by_code("CMPE 150.01"))

    assert [(m.day, m.start_hour, m.session_kind) for m in added] == [
        ("Monday", 10, SessionKind.LECTURE),
        ("Tuesday", 12, SessionKind.LAB),
    ]
    assert timetable.meetings == added
    assert all(m.code == "CMPE 150.01" for m in added)
    assert all(m.duration == 1 for m in added)
    assert [m.room for m in added] == ["BM A2", "BM B4"]


def test_add_assigns_colors_per_kind(timetable, by_code):
    lecture = timetable.add(by_code("MATH 101.01"))

    assert [m.color for m in lecture] == [COLORS[0], COLORS[0], PS_COLOR]

    lab_course = timetable.add(by_code("CMPE 150.01"))
    # next palette color for the lecture, fixed color for the lab
    assert [m.color for m in lab_course] == [COLORS[1], LAB_COLOR]


def test_instance_ids_are_unique(timetable, by_code):
    timetable.add(by_code("MATH 101.01"))
    timetable.add(by_code("MATH 101.01"))

    ids = [m.instance_id for m in timetable.meetings]
    assert len(ids) == 6
    assert len(set(ids)) == 6


def test_add_without_meetings_raises(timetable, by_code):
    timetable.add(by_code("PHYS 101.01"))
    meetings = timetable.meetings
    before = list(meetings)

    with pytest.raises(NoScheduleError) as exc:
        timetable.add(by_code("CMPE 492.01"))

    assert exc.value.course.code == "CMPE 492.01"
    assert timetable.meetings is meetings
    assert timetable.meetings == before


def test_adding_a_lab_directly_does_not_cascade(timetable, by_code):
    added = timetable.add(by_code("CMPE150.01 LAB 1"))

    assert len(added) == 1
    assert added[0].session_kind is SessionKind.LAB
    assert added[0].color == LAB_COLOR


def test_unknown_day_codes_are_skipped():
    catalog = normalize({"X 1.01": raw("X 1.01", days=["M", "??"], hours=[1, 2])})
    table = Timetable(catalog, palette=RoundRobinPalette())

    added = table.add(catalog[0])
    assert [(m.day, m.start_hour) for m in added] == [("Monday", 9)]


def test_remove_code_takes_dependents_sharing_the_code(timetable, by_code):
    timetable.add(by_code("CMPE 150.01"))
    timetable.add(by_code("PHYS 101.01"))

    timetable.remove_code("CMPE 150.01")

    assert [m.code for m in timetable.meetings] == ["PHYS 101.01"]
    assert not timetable.is_added("CMPE 150.01")
    assert timetable.is_added("PHYS 101.01")


def test_remove_code_unknown_is_noop(timetable, by_code):
    timetable.add(by_code("PHYS 101.01"))

    timetable.remove_code("NOPE 000.00")
    timetable.remove_code("")

    assert len(timetable.meetings) == 1


def test_remove_instance(timetable, by_code):
    added = timetable.add(by_code("MATH 101.01"))

    timetable.remove_instance(added[0].instance_id)
    assert [m.instance_id for m in timetable.meetings] == [m.instance_id for m in added[1:]]
    assert timetable.is_added("MATH 101.01")

    timetable.remove_instance("missing")
    assert len(timetable.meetings) == 2


def test_clear_and_codes(timetable, by_code):
    timetable.add(by_code("PHYS 101.01"))
    timetable.add(by_code("MATH 101.01"))
    assert timetable.codes() == ["PHYS 101.01", "MATH 101.01"]

    timetable.clear()
    assert timetable.meetings == []
    assert timetable.codes() == []


def test_external_schedule_list_is_updated_in_place(catalog, by_code):
    schedule = []
    table = Timetable(catalog, palette=RoundRobinPalette(), meetings=schedule)

    table.add(by_code("PHYS 101.01"))
    assert len(schedule) == 1

    table.remove_code("PHYS 101.01")
    assert schedule == []


def test_random_palette_is_repeatable_with_seed():
    a = RandomPalette(seed=42)
    b = RandomPalette(seed=42)

    picks = [a.choose(SessionKind.LECTURE) for _ in range(10)]
    assert picks == [b.choose(SessionKind.LECTURE) for _ in range(10)]
    assert set(picks) <= set(COLORS)
    assert a.choose(SessionKind.LAB) == LAB_COLOR
    assert a.choose(SessionKind.PS) == PS_COLOR


def test_round_robin_wraps():
    palette = RoundRobinPalette(colors=["#1", "#2"])
    assert [palette.choose(SessionKind.LECTURE) for _ in range(3)] == ["#1", "#2", "#1"]
