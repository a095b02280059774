# parser_html.py
import os
import re
from typing import Dict, List, Optional

from bs4 import BeautifulSoup

from models import RawSessionRecord


DAY_TOKEN = re.compile(r"Th|St|Su|M|T|W|F")
SECTION_CODE = re.compile(r"^([A-Za-z]+)\s*(\d.*)$")
DEPENDENT_MARK = re.compile(r"\s+(LAB|P\.S\.)(\s+\d+)?\s*$")

# Header texts of the columns we read; the rest of the row is ignored
COLUMNS = {
    "code": "code.sec",
    "name": "name",
    "credits": "cr.",
    "ects": "ects",
    "instructor": "instr.",
    "days": "days",
    "hours": "hours",
    "rooms": "rooms",
}


def fresh(tag) -> str:
    # <br> -> space so the cell reads as one line
    return tag.get_text(" ", strip=True)


def normalize_code(text: str) -> str:
    """
    "CMPE150.01 LAB 1" -> "CMPE 150.01"
    "CMPE 150.01"      -> "CMPE 150.01"
    """
    text = DEPENDENT_MARK.sub("", text.strip())
    m = SECTION_CODE.match(text)
    if not m:
        return text
    return f"{m.group(1)} {m.group(2).strip()}"


def split_days(text: str) -> List[str]:
    """ "MWTh" -> ["M", "W", "Th"] """
    return DAY_TOKEN.findall(text.replace(" ", ""))


def split_hours(text: str, count: int) -> List[int]:
    """
    Slot digits aligned with the days.
      "234", 3  -> [2, 3, 4]
      "1011", 2 -> [10, 11]
      "910", 2  -> [9, 10]
    Slots above 9 take two digits; they are read only when there are more
    digits left than slots still needed.
    """
    digits = re.sub(r"\D", "", text)
    slots: List[int] = []
    i = 0
    while i < len(digits) and len(slots) < count:
        remaining_slots = count - len(slots)
        remaining_digits = len(digits) - i
        if digits[i] == "1" and remaining_digits > remaining_slots and i + 1 < len(digits):
            slots.append(int(digits[i:i + 2]))
            i += 2
        else:
            slots.append(int(digits[i]))
            i += 1
    return slots


def _number(text: str):
    try:
        value = float(text.replace(",", "."))
    except ValueError:
        return 0
    return int(value) if value.is_integer() else value


def _header_index(cells) -> Optional[Dict[str, int]]:
    names = [fresh(c).lower() for c in cells]
    if COLUMNS["code"] not in names:
        return None
    return {field: names.index(label) for field, label in COLUMNS.items() if label in names}


def parse_schedule_html(html: str) -> Dict[str, RawSessionRecord]:
    """
    Parse one department's schedule page into catalog records.

    Lecture rows are keyed by their section code. LAB / P.S. rows are keyed
    like "CMPE150.01 LAB 1" and carry the parent's code, either as written in
    the code cell or, when that cell is empty, from the lecture row above.
    """
    soup = BeautifulSoup(html, "html.parser")
    records: Dict[str, RawSessionRecord] = {}

    for table in soup.find_all("table"):
        index = None
        last_code = ""
        last_name = ""
        dep_counter: Dict[str, int] = {}

        for tr in table.find_all("tr"):
            cells = tr.find_all(["td", "th"])
            if not cells:
                continue

            if index is None:
                index = _header_index(cells)
                continue

            def cell(field: str) -> str:
                i = index.get(field)
                if i is None or i >= len(cells):
                    return ""
                return fresh(cells[i])

            raw_code = cell("code")
            name = cell("name")

            if not raw_code and name.upper() in ("LAB", "P.S."):
                # dependent row under its lecture
                if not last_code:
                    continue
                dep_counter[name.upper()] = dep_counter.get(name.upper(), 0) + 1
                key = f"{last_code.replace(' ', '')} {name.upper()} {dep_counter[name.upper()]}"
                code = last_code
                name = last_name or name
            elif not raw_code:
                continue
            else:
                key = raw_code
                code = normalize_code(raw_code)
                if not DEPENDENT_MARK.search(raw_code):
                    last_code = code
                    last_name = name
                    dep_counter = {}

            days_text = cell("days")
            days = split_days(days_text) if days_text.upper() != "TBA" else []
            hours = split_hours(cell("hours"), len(days)) if days else []

            rooms_tag = cells[index["rooms"]] if "rooms" in index and index["rooms"] < len(cells) else None
            rooms = None
            if rooms_tag is not None and days:
                rooms = [r.strip() for r in rooms_tag.get_text("|", strip=True).split("|") if r.strip()]
                rooms = (rooms + [""] * len(days))[:len(days)]

            # lectures split over several rows share a code; keep keys unique
            unique_key = key
            n = 2
            while unique_key in records:
                unique_key = f"{key} #{n}"
                n += 1

            records[unique_key] = RawSessionRecord(
                key=unique_key,
                code=code,
                name=name,
                credits=_number(cell("credits")),
                ects=_number(cell("ects")),
                days=days or None,
                hours=hours or None,
                instructor=cell("instructor"),
                rooms=rooms,
            )

    return records


def parse_html_file(path: str) -> Dict[str, RawSessionRecord]:
    with open(path, "r", encoding="utf-8") as f:
        html = f.read()
    return parse_schedule_html(html)


def load_all_records(html_dir: str) -> Dict[str, RawSessionRecord]:
    """
    Parse every .html file in html_dir (one file per department) into one catalog.
    """
    records: Dict[str, RawSessionRecord] = {}

    for filename in sorted(os.listdir(html_dir)):
        if not filename.lower().endswith(".html"):
            continue
        path = os.path.join(html_dir, filename)
        records.update(parse_html_file(path))

    return records
