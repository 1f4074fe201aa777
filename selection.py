# selection.py
# Auswahl des Zitats: zufaellig oder "quote of the day" (stabil ueber den Kalendertag).

import random
from datetime import date
from typing import Callable, Optional

from errors import EmptyCollection
from logic import today

POLICIES = ("random", "day_of_year", "date_hash")

def pick_random(count: int, rng: Callable[[], float] = random.random) -> int:
    return int(rng() * count)

def day_of_year_index(count: int, day: date) -> int:
    # 1-basierter Tag im Jahr, z. B. 14. Februar = 45
    return day.timetuple().tm_yday % count

def date_hash_index(count: int, day: date) -> int:
    """
    Summe der Codepoints von ``YYYY-MM-DD`` modulo ``count``.

    Bewusst schwach: Daten mit gleicher Ziffernsumme kollidieren
    (2024-01-02 und 2024-02-01 liefern dasselbe Zitat). Bleibt so, damit
    die Tagesauswahl reproduzierbar ist.
    """
    return sum(ord(c) for c in day.isoformat()) % count

def select_index(policy: str, count: int, day: Optional[date] = None,
                 rng: Callable[[], float] = random.random) -> int:
    if count <= 0:
        raise EmptyCollection("no quotes available")
    if policy == "random":
        return pick_random(count, rng)
    day = day or today()
    if policy == "day_of_year":
        return day_of_year_index(count, day)
    if policy == "date_hash":
        return date_hash_index(count, day)
    raise ValueError(f"unknown selection policy: {policy!r}")
