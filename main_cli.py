# main_cli.py
import os
import sys
from typing import List, Optional

from catalog import load_catalog, normalize, save_catalog
from down_html import DEFAULT_BASE_URL, DEFAULT_TERM, download_department, load_config
from logic import (
    QUICK_FILTERS,
    course_description_url,
    find_clashes,
    format_schedule,
    print_clashes,
    search,
)
from models import GRID_HOURS, WEEK_DAYS, CourseResult, NoScheduleError, SessionKind
from parser_html import load_all_records
from planner import Timetable


HELP = """Commands:
  search <text>   search courses (1-2 chars: code only, 3+: code or name)
  tk | htr        quick filters
  free            toggle: only show courses without conflicts
  add <n>         add result #n (its LAB / P.S. come along)
  rm <code>       remove a course by code
  del <id>        remove a single block
  clear           empty the timetable
  list            show the timetable
  url <code>      course description link
  scrape          download + parse the departments in config.json
  quit"""


class PlannerCLI:
    def __init__(self, base_dir: Optional[str] = None):
        self.base_dir = base_dir or os.path.dirname(os.path.abspath(sys.argv[0]))
        self.config_path = os.path.join(self.base_dir, "config.json")

        # ====== STATE ======
        self.config: dict = {}
        self.catalog = []
        self.timetable = Timetable([])
        self.last_query = ""
        self.results: List[CourseResult] = []
        self.only_free = False

        self._load_config_and_bootstrap()

    # ===================== CONFIG / CATALOG =====================

    def _path(self, key: str, default: str) -> str:
        path = self.config.get(key, default)
        return path if os.path.isabs(path) else os.path.join(self.base_dir, path)

    @property
    def term(self) -> str:
        return self.config.get("term", DEFAULT_TERM)

    @property
    def quick_filters(self) -> dict:
        filters = self.config.get("quick_filters")
        return filters if isinstance(filters, dict) else QUICK_FILTERS

    def _load_config_and_bootstrap(self):
        self.config = load_config(self.config_path)
        self._reload_catalog()

    def _reload_catalog(self):
        path = self._path("catalog", "allCourses.json")
        print(f"Reading catalog: {path}")
        try:
            raw = load_catalog(path)
        except FileNotFoundError:
            print("⚠ Catalog not found. Use 'scrape' to build it.")
            raw = {}
        except ValueError as e:
            print(f"⛔ {e}")
            raw = {}

        self.catalog = normalize(raw)
        lectures = sum(1 for c in self.catalog if c.session_kind is SessionKind.LECTURE)
        print(f"Loaded {len(raw)} entries -> {lectures} lectures, "
              f"{len(self.catalog) - lectures} LAB / P.S.")

        # the timetable keeps its blocks, only the dependents lookup changes
        self.timetable.catalog = self.catalog
        self.results = []

    def _scrape(self):
        departments = self.config.get("departments", [])
        if not departments:
            print("⚠ config.json has no 'departments' list.")
            return

        html_dir = self._path("html_dir", "html_all_departments")
        os.makedirs(html_dir, exist_ok=True)
        base_url = self.config.get("base_url", DEFAULT_BASE_URL)
        for dept in departments:
            try:
                download_department(str(dept).strip().upper(), term=self.term,
                                    out_dir=html_dir, base_url=base_url)
            except Exception as e:
                print(f"⛔ Download failed for {dept}: {e}")

        records = load_all_records(html_dir)
        out = self._path("catalog", "allCourses.json")
        save_catalog(records, out)
        print(f"✅ Wrote {len(records)} entries to {out}")
        self._reload_catalog()

    # ===================== SEARCH =====================

    def _run_search(self, query: str):
        self.last_query = query
        self.results = search(
            query,
            self.catalog,
            self.timetable.meetings,
            only_free=self.only_free,
            quick_filters=self.quick_filters,
        )
        self._print_results()

    def _print_results(self):
        if not self.results:
            print("Type something to search...")
            return

        for i, r in enumerate(self.results, start=1):
            c = r.course
            mark = "Added" if self.timetable.is_added(c.code) else "Add"
            warn = "  ⚠️ Conflict" if r.has_conflict else ""
            print(f"{i:3}. [{mark}] {c.code}  Local {c.credits} - ECTS {c.ects}{warn}")
            print(f"       {c.name} - {c.instructor or 'Staff'}")
            print(f"       {format_schedule(c)}")

    # ===================== ADD / REMOVE =====================

    def _add(self, arg: str):
        try:
            idx = int(arg)
        except ValueError:
            print("Usage: add <n>")
            return
        if not 1 <= idx <= len(self.results):
            print("No such result.")
            return

        course = self.results[idx - 1].course
        try:
            added = self.timetable.add(course)
        except NoScheduleError as e:
            print(f"ℹ {e}")
            return

        print(f"✅ Added {course.code} ({len(added)} blocks).")
        self._after_change()

    def _after_change(self):
        print_clashes(find_clashes(self.timetable.meetings))
        if self.last_query:
            # conflict counts depend on the timetable; reprint so "add <n>" matches the screen
            self._run_search(self.last_query)

    def _list(self):
        meetings = self.timetable.meetings
        if not meetings:
            print("Timetable is empty.")
            return

        for code in self.timetable.codes():
            blocks = [m for m in meetings if m.code == code]
            print(f"* {code}  {blocks[0].name} ({len(blocks)} blocks)")

        shown = 0
        for day in WEEK_DAYS:
            for hour in GRID_HOURS:
                for m in meetings:
                    if m.day != day or m.start_hour != hour:
                        continue
                    kind = "" if m.session_kind is SessionKind.LECTURE else f" ({m.session_kind.value.upper()})"
                    print(f"  {m.instance_id}  {m.day:<9} {m.start_hour}:00  {m.code}{kind}  {m.room}")
                    shown += 1

        hidden = len(meetings) - shown
        if hidden:
            print(f"  ({hidden} blocks on the weekend or outside {GRID_HOURS[0]}:00-{GRID_HOURS[-1]}:00 not shown)")

    # ===================== LOOP =====================

    def handle(self, line: str) -> bool:
        """Run one command. False means quit."""
        cmd, _, arg = line.strip().partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()

        if cmd in ("quit", "exit", "q"):
            return False
        if cmd == "search":
            self._run_search(arg)
        elif cmd == "tk":
            self._run_search("QUICK_TK")
        elif cmd == "htr":
            self._run_search("QUICK_HTR")
        elif cmd == "free":
            self.only_free = not self.only_free
            print(f"Only conflict-free courses: {'on' if self.only_free else 'off'}")
            if self.last_query:
                self._run_search(self.last_query)
        elif cmd == "add":
            self._add(arg)
        elif cmd == "rm":
            self.timetable.remove_code(arg)
            self._after_change()
        elif cmd == "del":
            self.timetable.remove_instance(arg)
            self._after_change()
        elif cmd == "clear":
            self.timetable.clear()
            print("🧹 Timetable cleared.")
            self._after_change()
        elif cmd == "list":
            self._list()
        elif cmd == "url":
            url = course_description_url(arg, self.term)
            print(url or "No section in that code.")
        elif cmd == "scrape":
            self._scrape()
        elif cmd:
            print(HELP)
        return True


def main():
    app = PlannerCLI()
    print(HELP)
    while True:
        try:
            line = input("> ")
        except (EOFError, KeyboardInterrupt):
            break
        if not app.handle(line):
            break


if __name__ == "__main__":
    main()
