# models.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


# ====== DAY / HOUR TABLES ======

DAYS_MAP: Dict[str, str] = {
    "M": "Monday",
    "T": "Tuesday",
    "W": "Wednesday",
    "Th": "Thursday",
    "F": "Friday",
    "St": "Saturday",
    "Su": "Sunday",
}

# Only these five days are shown on the grid
WEEK_DAYS: List[str] = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

GRID_HOURS: List[int] = list(range(9, 20))  # 9:00 .. 19:00

SLOT_OFFSET = 8


def slot_to_hour(slot: int) -> int:
    """Slot 1 -> 9:00, slot 2 -> 10:00, ..."""
    return slot + SLOT_OFFSET


class SessionKind(Enum):
    LECTURE = "lecture"
    LAB = "lab"
    PS = "ps"          # problem session


# (day_code, slot, room), e.g. ("M", 2, "BM A2")
Meeting = Tuple[str, int, str]


@dataclass
class RawSessionRecord:
    """
    One entry of the catalog file (allCourses.json), keyed by `key`.

    Lecture rows use the section code as key ("CMPE 150.01"),
    lab / P.S. rows carry a marker ("CMPE150.01 LAB 1").
    """
    key: str
    code: str
    name: str = ""
    credits: float = 0
    ects: float = 0
    days: Optional[List[str]] = None     # ["M", "W"] or None
    hours: Optional[List[int]] = None    # [2, 3], aligned with days
    instructor: str = ""
    rooms: Optional[List[str]] = None    # None => treated as empty strings

    @classmethod
    def from_dict(cls, key: str, data: dict) -> "RawSessionRecord":
        return cls(
            key=key,
            code=str(data.get("code") or ""),
            name=str(data.get("name") or ""),
            credits=data.get("credits") or 0,
            ects=data.get("ects") or 0,
            days=data.get("days"),
            hours=data.get("hours"),
            instructor=str(data.get("instructor") or ""),
            rooms=data.get("rooms"),
        )

    def as_dict(self) -> dict:
        d = {
            "code": self.code,
            "name": self.name,
            "credits": self.credits,
            "ects": self.ects,
            "days": self.days,
            "hours": self.hours,
            "instructor": self.instructor,
        }
        if self.rooms is not None:
            d["rooms"] = self.rooms
        return d


@dataclass
class LogicalCourse:
    """
    A normalized course: all lecture rows sharing a code merged together,
    or a single lab / P.S. row.
    """
    grouping_key: str
    code: str
    name: str
    credits: float
    ects: float
    instructor: str
    session_kind: SessionKind
    meetings: List[Meeting] = field(default_factory=list)


@dataclass
class ScheduledMeeting:
    """
    One block on the timetable (1 day + 1 hour).
    """
    instance_id: str
    code: str
    name: str
    day: str               # "Monday" .. "Sunday"
    start_hour: int        # 9 .. 19
    duration: int          # always 1
    color: str
    instructor: str
    room: str
    session_kind: SessionKind

    @property
    def end_hour(self) -> int:
        return self.start_hour + self.duration

    def covers(self, day: str, hour: int) -> bool:
        return self.day == day and self.start_hour <= hour < self.end_hour


@dataclass
class CourseResult:
    course: LogicalCourse
    conflict_count: int = 0

    @property
    def has_conflict(self) -> bool:
        return self.conflict_count > 0


class NoScheduleError(Exception):
    """The selected course has no meetings, nothing to put on the timetable."""

    def __init__(self, course: LogicalCourse):
        super().__init__(f"{course.code} has no defined schedule.")
        self.course = course
