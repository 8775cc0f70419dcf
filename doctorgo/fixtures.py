"""Static seed data shipped with the package.

Files are read once per process; every caller gets its own deep copy so a
repository can mutate what it was given without touching the cache.
"""
import copy
import json
from functools import lru_cache
from pathlib import Path

DATA_DIR = Path(__file__).parent / "data"

FIXTURE_FILES = {
    "providers": "providers.json",
    "bookings": "bookings.json",
    "payments": "payments.json",
    "users": "users.json",
    "queue": "queue.json",
    "symptom_profiles": "symptom_profiles.json",
}


@lru_cache(maxsize=None)
def _read(filename: str):
    with open(DATA_DIR / filename, encoding="utf-8") as fh:
        return json.load(fh)


def load_fixture(name: str):
    try:
        filename = FIXTURE_FILES[name]
    except KeyError:
        raise ValueError(f"Unknown fixture: {name}. Known: {sorted(FIXTURE_FILES)}")
    return copy.deepcopy(_read(filename))


def load_all() -> dict:
    return {name: load_fixture(name) for name in FIXTURE_FILES}
