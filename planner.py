# planner.py
import random
import uuid
from typing import Callable, List, Optional, Sequence

from catalog import find_dependents
from models import (
    DAYS_MAP,
    LogicalCourse,
    NoScheduleError,
    ScheduledMeeting,
    SessionKind,
    slot_to_hour,
)


# ====== COLORS ======

COLORS = ["#e3f2fd", "#f3e5f5", "#e8f5e9", "#fff3e0", "#ffebee", "#e0f7fa", "#fff8e1", "#fce4ec"]
LAB_COLOR = "#ffcdd2"   # light red
PS_COLOR = "#c8e6c9"    # light green


class RandomPalette:
    """Random lecture color per add; pass a seed to make it repeatable."""

    def __init__(self, seed=None, colors: Sequence[str] = COLORS):
        self.colors = list(colors)
        self._rng = random.Random(seed)

    def choose(self, kind: SessionKind) -> str:
        if kind is SessionKind.LAB:
            return LAB_COLOR
        if kind is SessionKind.PS:
            return PS_COLOR
        return self._rng.choice(self.colors)


class RoundRobinPalette:
    """Lecture colors in palette order, wrapping around."""

    def __init__(self, colors: Sequence[str] = COLORS):
        self.colors = list(colors)
        self._next = 0

    def choose(self, kind: SessionKind) -> str:
        if kind is SessionKind.LAB:
            return LAB_COLOR
        if kind is SessionKind.PS:
            return PS_COLOR
        color = self.colors[self._next % len(self.colors)]
        self._next += 1
        return color


def _short_id() -> str:
    return uuid.uuid4().hex[:9]


# ====== TIMETABLE ======

class Timetable:
    """
    The student's weekly plan: a flat list of ScheduledMeeting.
    Only this class writes to `meetings`; search / conflict code just reads it.
    """

    def __init__(
        self,
        catalog: List[LogicalCourse],
        palette=None,
        id_factory: Optional[Callable[[], str]] = None,
        meetings: Optional[List[ScheduledMeeting]] = None,
    ):
        self.catalog = catalog
        self.palette = palette or RandomPalette()
        self.id_factory = id_factory or _short_id
        self.meetings: List[ScheduledMeeting] = meetings if meetings is not None else []

    def _expand(self, course: LogicalCourse, color: str) -> List[ScheduledMeeting]:
        items: List[ScheduledMeeting] = []
        for day_code, slot, room in course.meetings:
            day = DAYS_MAP.get(day_code)
            if not day:
                continue
            items.append(ScheduledMeeting(
                instance_id=self.id_factory(),
                code=course.code,
                name=course.name,
                day=day,
                start_hour=slot_to_hour(slot),
                duration=1,
                color=color,
                instructor=course.instructor,
                room=room,
                session_kind=course.session_kind,
            ))
        return items

    def add(self, course: LogicalCourse) -> List[ScheduledMeeting]:
        """
        Put a course on the timetable. For a lecture, its LAB / P.S. sessions
        come along, each with its own color. Everything is appended in one go.

        Raises NoScheduleError if the course has no meetings (nothing changes).
        """
        if not course.meetings:
            raise NoScheduleError(course)

        new_items = self._expand(course, self.palette.choose(course.session_kind))

        if course.session_kind is SessionKind.LECTURE:
            for dep in find_dependents(course, self.catalog):
                if not dep.meetings:
                    continue
                new_items.extend(self._expand(dep, self.palette.choose(dep.session_kind)))

        self.meetings.extend(new_items)
        return new_items

    def remove_instance(self, instance_id: str) -> None:
        self.meetings[:] = [m for m in self.meetings if m.instance_id != instance_id]

    def remove_code(self, code: str) -> None:
        """Drop every block with exactly this code."""
        self.meetings[:] = [m for m in self.meetings if m.code != code]

    def clear(self) -> None:
        self.meetings.clear()

    def is_added(self, code: str) -> bool:
        return any(m.code == code for m in self.meetings)

    def codes(self) -> List[str]:
        seen: List[str] = []
        for m in self.meetings:
            if m.code not in seen:
                seen.append(m.code)
        return seen
