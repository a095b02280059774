import os
import json
from typing import Optional

import requests

# ===== READ CONFIG FROM FILE =====

DEFAULT_BASE_URL = "https://registration.bogazici.edu.tr/scripts/sch.asp"
DEFAULT_TERM = "2025/2026-2"


def load_config(path: str = "config.json") -> dict:
    """
    Read config.json and return a dict.
    Missing file or bad content -> {}.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
            if not isinstance(data, dict):
                print("⚠️ config.json is not a JSON object {}, ignoring it.")
                return {}
            return data
    except FileNotFoundError:
        print("⚠️ config.json not found, using built-in defaults.")
        return {}
    except Exception as e:
        print(f"⚠️ Could not read config.json: {e}")
        return {}


headers = {
    'accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    'accept-language': 'en-US,en;q=0.9,tr;q=0.8',
    'cache-control': 'no-cache',
    'user-agent': 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/142.0.0.0 Safari/537.36',
}


# ===== ONE REQUEST PER DEPARTMENT =====

def download_department(
    dept: str,
    term: str = DEFAULT_TERM,
    out_dir: str = "html_all_departments",
    base_url: str = DEFAULT_BASE_URL,
) -> Optional[str]:
    """
    GET the schedule page of one department (e.g. "CMPE") for a term
    and save it as <out_dir>/<dept>.html. Returns the saved path, or None
    if the server did not answer 200.
    """
    params = {
        'donem': term,
        'kisaadi': dept,
        'bolum': dept,
    }

    print(f"\n=== Downloading schedule for: {dept} ({term}) ===")
    resp = requests.get(
        base_url,
        params=params,
        headers=headers,
        timeout=30,
    )

    if resp.status_code != 200:
        print(f"⛔ Error {resp.status_code} for {dept}")
        print("----- RESPONSE (excerpt) -----")
        print(resp.text[:400])
        print("------------------------------")
        return None

    os.makedirs(out_dir, exist_ok=True)
    path = os.path.join(out_dir, f"{dept}.html")
    with open(path, "w", encoding="utf-8") as f:
        f.write(resp.text)
    print(f"✅ Saved: {path}")
    return path


def main():
    config = load_config()
    term = config.get("term", DEFAULT_TERM)
    out_dir = config.get("html_dir", "html_all_departments")
    base_url = config.get("base_url", DEFAULT_BASE_URL)

    print("Departments to download (comma separated), e.g.:")
    print("  CMPE,MATH,PHYS")
    raw = input("Departments: ").strip()
    dept_list = [d.strip().upper() for d in raw.split(",") if d.strip()]

    if not dept_list:
        print("⛔ No department given.")
        return

    for dept in dept_list:
        download_department(dept, term=term, out_dir=out_dir, base_url=base_url)


if __name__ == "__main__":
    main()
