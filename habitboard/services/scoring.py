# habitboard/services/scoring.py
"""
Habit decoding + per-habit score accumulation.

Stored habit documents are loosely shaped (older clients wrote isCustom as
the string "true", values may be missing or non-numeric). decode_habit()
normalizes a document once; everything downstream works on HabitRecord.
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Iterable, Mapping, Sequence

from habitboard.utils.week import date_key

log = logging.getLogger(__name__)

Score = int | float


class HabitType(str, enum.Enum):
    BOOLEAN = "boolean"
    NUMBER = "number"

    @classmethod
    def parse(cls, raw: Any) -> "HabitType":
        # anything that is not "number" is tracked as a yes/no habit
        return cls.NUMBER if raw == cls.NUMBER.value else cls.BOOLEAN


@dataclass(frozen=True, slots=True)
class HabitRecord:
    id: str
    user_id: str
    type: HabitType = HabitType.BOOLEAN
    target: Score = 1
    is_custom: bool = False
    name: str = ""
    unit: str | None = None
    completed_dates: frozenset[str] = frozenset()
    completed_values: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_scoring(self) -> bool:
        return not self.is_custom


@dataclass(frozen=True, slots=True)
class Cell:
    completed: bool
    value: Score


def is_true_flag(raw: Any) -> bool:
    return raw is True or raw == "true"


def finite_number(raw: Any) -> Score | None:
    """
    Returns raw if it is a finite int/float, else None. bools are not numbers here.
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if not math.isfinite(raw):
        return None
    return raw


def _decode_target(raw: Any) -> Score:
    n = finite_number(raw)
    return n if n else 1


def _decode_dates(raw: Any) -> frozenset[str]:
    if not isinstance(raw, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(d for d in raw if isinstance(d, str))


def _decode_values(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        return {}
    return {k: v for k, v in raw.items() if isinstance(k, str)}


def decode_habit(doc: Mapping[str, Any]) -> HabitRecord:
    """
    Stored document (camelCase keys) -> HabitRecord.

    Never raises on malformed completion data; missing pieces decode to
    empty/absent. Only a document that is not a mapping at all is rejected.
    """
    if not isinstance(doc, Mapping):
        raise TypeError(f"Habit document must be a mapping, got {type(doc).__name__}")

    unit = doc.get("unit")
    return HabitRecord(
        id=str(doc.get("id") or ""),
        user_id=str(doc.get("userId") or ""),
        type=HabitType.parse(doc.get("type")),
        target=_decode_target(doc.get("target")),
        is_custom=is_true_flag(doc.get("isCustom")),
        name=str(doc.get("name") or ""),
        unit=unit if isinstance(unit, str) else None,
        completed_dates=_decode_dates(doc.get("completedDates")),
        completed_values=_decode_values(doc.get("completedValues")),
    )


def decode_habits(docs: Iterable[Mapping[str, Any]]) -> list[HabitRecord]:
    """Habits without an id get a positional one (`#0`, `#1`, ...) so grid keys stay distinct."""
    out: list[HabitRecord] = []
    for position, doc in enumerate(docs):
        try:
            habit = decode_habit(doc)
        except TypeError:
            log.warning("Dropping undecodable habit document: %r", doc)
            continue
        if not habit.id:
            habit = replace(habit, id=f"#{position}")
        out.append(habit)
    return out


def eligible_habits(habits: Iterable[HabitRecord]) -> list[HabitRecord]:
    return [h for h in habits if h.is_scoring]


# -------------------------------------------------
# Per-habit, per-day primitives
# -------------------------------------------------

def habit_day_value(habit: HabitRecord, day: date) -> Score:
    """Points a single habit earns on a single day."""
    key = date_key(day)
    if habit.type is HabitType.NUMBER:
        return finite_number(habit.completed_values.get(key)) or 0
    return 1 if key in habit.completed_dates else 0


def habit_day_cell(habit: HabitRecord, day: date) -> Cell:
    key = date_key(day)
    if habit.type is HabitType.NUMBER:
        value = finite_number(habit.completed_values.get(key)) or 0
        return Cell(completed=value >= habit.target, value=value)
    done = key in habit.completed_dates
    return Cell(completed=done, value=1 if done else 0)


def _habit_window_score(habit: HabitRecord, dates: Sequence[date]) -> Score:
    return sum((habit_day_value(habit, d) for d in dates), 0)


# -------------------------------------------------
# Aggregates
# -------------------------------------------------

def score_for_window(habits: Iterable[HabitRecord], dates: Sequence[date]) -> Score:
    """
    Sum of every eligible habit over every date of the window.
    A habit that fails to score contributes 0; the others still count.
    """
    total: Score = 0
    for habit in eligible_habits(habits):
        try:
            total += _habit_window_score(habit, dates)
        except Exception:
            log.warning("Habit %s could not be scored, counting 0", getattr(habit, "id", "?"), exc_info=True)
    return total


def daily_score(habits: Iterable[HabitRecord], day: date) -> Score:
    return score_for_window(habits, [day])


def daily_completion_grid(
    habits: Iterable[HabitRecord],
    dates: Sequence[date],
) -> dict[tuple[str, date], Cell]:
    grid: dict[tuple[str, date], Cell] = {}
    for habit in eligible_habits(habits):
        for d in dates:
            try:
                grid[(habit.id, d)] = habit_day_cell(habit, d)
            except Exception:
                log.warning("Habit %s has an unreadable entry for %s", habit.id, d, exc_info=True)
                grid[(habit.id, d)] = Cell(completed=False, value=0)
    return grid
