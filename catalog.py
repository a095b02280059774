# catalog.py
import json
from typing import Dict, List, Mapping

from models import LogicalCourse, RawSessionRecord, SessionKind


# ====== SESSION KIND ======

def detect_session_kind(key: str) -> SessionKind:
    """
    Work out the kind of a catalog entry from its key.

    Example:
      "CMPE 150.01"         -> LECTURE
      "CMPE150.01 LAB 1"    -> LAB
      "MATH101.02 P.S. 3"   -> PS
    """
    if " LAB " in key or key.endswith(" LAB"):
        return SessionKind.LAB
    if " P.S. " in key or key.endswith(" P.S."):
        return SessionKind.PS
    return SessionKind.LECTURE


# ====== NORMALIZE ======

def _pair_meetings(record: RawSessionRecord) -> list:
    """
    days[i], hours[i], rooms[i] -> (day, slot, room).
    A missing or short `rooms` is padded with "".
    """
    days = record.days or []
    hours = record.hours or []
    rooms = list(record.rooms or [])

    meetings = []
    for i, (day, slot) in enumerate(zip(days, hours)):
        room = rooms[i] if i < len(rooms) else ""
        meetings.append((day, slot, room or ""))
    return meetings


def normalize(raw_records: Mapping[str, RawSessionRecord]) -> List[LogicalCourse]:
    """
    Turn the flat catalog into logical courses.

    - Lecture rows with the same (trimmed) code are merged into one course,
      their meetings appended in catalog order (multi-row lectures).
    - Every LAB / P.S. row stays its own course, keyed by its raw key.

    Never raises: missing days / hours / rooms just mean no meetings.
    """
    grouped: Dict[str, LogicalCourse] = {}

    for key, raw in raw_records.items():
        kind = detect_session_kind(key)
        code = raw.code.strip()

        if kind is not SessionKind.LECTURE:
            grouped[key] = LogicalCourse(
                grouping_key=key,
                code=code,
                name=raw.name,
                credits=raw.credits,
                ects=raw.ects,
                instructor=raw.instructor,
                session_kind=kind,
                meetings=_pair_meetings(raw),
            )
            continue

        course = grouped.get(code)
        if course is None:
            course = LogicalCourse(
                grouping_key=code,
                code=code,
                name=raw.name,
                credits=raw.credits,
                ects=raw.ects,
                instructor=raw.instructor,
                session_kind=SessionKind.LECTURE,
            )
            grouped[code] = course

        # Only rows that have both days and hours add meetings
        if raw.days and raw.hours:
            course.meetings.extend(_pair_meetings(raw))

    return list(grouped.values())


def find_dependents(course: LogicalCourse, catalog: List[LogicalCourse]) -> List[LogicalCourse]:
    """
    LAB / P.S. entries attached to a lecture.
    "CMPE150.01 LAB 1" is stored with code "CMPE 150.01", so a plain code match is enough.
    """
    code = course.code.strip()
    return [
        c for c in catalog
        if c.session_kind is not SessionKind.LECTURE and c.code.strip() == code
    ]


# ====== LOAD / SAVE ======

def load_catalog(path: str) -> Dict[str, RawSessionRecord]:
    """
    Read allCourses.json:
        { "<key>": {"code": ..., "name": ..., "days": [...], "hours": [...], ...}, ... }
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: catalog must be a JSON object keyed by session key")

    # non-object entries (lists, strings, ...) are skipped
    return {
        key: RawSessionRecord.from_dict(key, val or {})
        for key, val in data.items()
        if val is None or isinstance(val, dict)
    }


def save_catalog(records: Mapping[str, RawSessionRecord], path: str) -> None:
    data = {key: rec.as_dict() for key, rec in records.items()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2)
