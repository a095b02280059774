import itertools

import pytest

from catalog import normalize
from models import RawSessionRecord
from planner import RoundRobinPalette, Timetable


def raw(key, code=None, name="", days=None, hours=None, rooms=None, instructor="", credits=3, ects=6):
    return RawSessionRecord(
        key=key,
        code=key if code is None else code,
        name=name,
        credits=credits,
        ects=ects,
        days=days,
        hours=hours,
        instructor=instructor,
        rooms=rooms,
    )


@pytest.fixture
def raw_catalog():
    records = [
        raw("CMPE 150.01", name="Introduction to Computing", days=["M"], hours=[2], rooms=["BM A2"]),
        raw("CMPE150.01 LAB 1", code="CMPE 150.01", name="Introduction to Computing",
            days=["T"], hours=[4], rooms=["BM B4"]),
        raw("MATH 101.01", name="Calculus I", days=["M", "W"], hours=[2, 3]),
        raw("MATH101.01 P.S. 1", code="MATH 101.01", name="Calculus I", days=["F"], hours=[5]),
        raw("PHYS 101.01", name="Physics I", days=["M"], hours=[2]),
        raw("PHYS 102.01", name="Physics II", days=["Th"], hours=[6]),
        raw("ENG 201.01", name="Technical Writing", days=["W"], hours=[7]),
        raw("TK 221.01", name="Turkish I", days=["T"], hours=[1]),
        raw("HTR 311.01", name="History of Turkish Republic I", days=["Th"], hours=[9]),
        raw("CMPE 492.01", name="Senior Project"),
    ]
    return {r.key: r for r in records}


@pytest.fixture
def catalog(raw_catalog):
    return normalize(raw_catalog)


@pytest.fixture
def by_code(catalog):
    def find(code):
        return next(c for c in catalog if c.grouping_key == code)
    return find


@pytest.fixture
def timetable(catalog):
    counter = itertools.count(1)
    return Timetable(catalog, palette=RoundRobinPalette(), id_factory=lambda: f"id{next(counter)}")
