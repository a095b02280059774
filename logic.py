# logic.py
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from urllib.parse import quote

from models import (
    DAYS_MAP,
    CourseResult,
    LogicalCourse,
    ScheduledMeeting,
    SessionKind,
    slot_to_hour,
)


# Quick-filter buttons: sentinel query -> code prefix
QUICK_FILTERS: Dict[str, str] = {
    "QUICK_TK": "TK",
    "QUICK_HTR": "HTR",
}

MAX_RESULTS = 100

DESCRIPTION_URL = "https://registration.bogazici.edu.tr/scripts/schedule/coursedescription.asp"


# ====== CONFLICTS ======

def count_conflicts(course: LogicalCourse, schedule: Iterable[ScheduledMeeting]) -> int:
    """
    Number of the course's own meetings that land on an hour already taken
    by a *different* course. One count per meeting, however many blocks it hits.
    """
    schedule = list(schedule)
    conflicts = 0

    for day_code, slot, _room in course.meetings:
        day = DAYS_MAP.get(day_code)
        if not day:
            continue
        hour = slot_to_hour(slot)

        if any(item.code != course.code and item.covers(day, hour) for item in schedule):
            conflicts += 1

    return conflicts


def _day_index(day: str) -> int:
    days = list(DAYS_MAP.values())
    return days.index(day) if day in days else len(days)


def find_clashes(schedule: Sequence[ScheduledMeeting]) -> List[Tuple[ScheduledMeeting, ScheduledMeeting]]:
    """
    Pairs of scheduled blocks that overlap.
    Overlap: same day + start_j < end_i and end_j > start_i, different codes.
    """
    items = sorted(schedule, key=lambda m: (_day_index(m.day), m.start_hour, m.end_hour))

    clashes: List[Tuple[ScheduledMeeting, ScheduledMeeting]] = []
    n = len(items)

    for i in range(n):
        a = items[i]
        for j in range(i + 1, n):
            b = items[j]

            # sorted by day, nothing further can overlap a
            if b.day != a.day:
                break
            if b.start_hour >= a.end_hour:
                break

            if b.code != a.code:
                clashes.append((a, b))

    return clashes


def print_clashes(clashes: List[Tuple[ScheduledMeeting, ScheduledMeeting]]) -> None:
    if not clashes:
        print("✅ No clashes in the timetable.")
        return

    print("❌ These blocks overlap:")
    for a, b in clashes:
        print(
            f"- {a.day} {a.start_hour}:00  {a.code} ({a.room or '-'}) "
            f"<-> {b.code} ({b.room or '-'})"
        )


# ====== SEARCH ======

def _match(query: str, catalog: Sequence[LogicalCourse],
           quick_filters: Dict[str, str]) -> Tuple[List[LogicalCourse], str]:
    """Raw matches + the lowercased term used for ranking."""
    term = query.strip().lower()

    if query in quick_filters:
        prefix = quick_filters[query]
        return [c for c in catalog if c.code.startswith(prefix)], term

    if not term:
        return [], term

    if len(term) < 3:
        # short queries only look at the code
        return [c for c in catalog if term in c.code.lower()], term

    return [
        c for c in catalog
        if term in c.code.lower() or term in c.name.lower()
    ], term


def search(
    query: str,
    catalog: Sequence[LogicalCourse],
    schedule: Sequence[ScheduledMeeting],
    only_free: bool = False,
    quick_filters: Optional[Dict[str, str]] = None,
    limit: int = MAX_RESULTS,
) -> List[CourseResult]:
    """
    Lectures matching `query`, each with its live conflict count, ordered by:
      1. fewest conflicts,
      2. code starting with the query,
      3. code.
    LAB / P.S. entries never show up here; they come along when the lecture is added.
    """
    if quick_filters is None:
        quick_filters = QUICK_FILTERS

    matches, term = _match(query, catalog, quick_filters)

    results = [
        CourseResult(course=c, conflict_count=count_conflicts(c, schedule))
        for c in matches
        if c.session_kind is SessionKind.LECTURE
    ]

    if only_free:
        results = [r for r in results if r.conflict_count == 0]

    results.sort(key=lambda r: (
        r.conflict_count,
        not r.course.code.lower().startswith(term),
        r.course.code,
    ))
    return results[:limit]


# ====== DISPLAY HELPERS ======

def format_schedule(course: LogicalCourse) -> str:
    """
    "Monday (10:00) / Tuesday (12:00)"
    """
    parts = []
    for day_code, slot, _room in course.meetings:
        day = DAYS_MAP.get(day_code, day_code)
        parts.append(f"{day} ({slot_to_hour(slot)}:00)")
    return " / ".join(parts)


def course_description_url(code: str, term: str) -> Optional[str]:
    """
    "MIS 214.01" -> ...coursedescription.asp?course=MIS%20214&section=01&term=2025/2026-2
    None if the code has no section part.
    """
    code = code.strip()
    dot = code.rfind(".")
    if dot == -1:
        return None

    course = code[:dot]
    section = code[dot + 1:]
    return f"{DESCRIPTION_URL}?course={quote(course, safe='')}&section={section}&term={term}"
