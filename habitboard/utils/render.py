# habitboard/utils/render.py
"""HTML message bodies for leaderboard and profile views."""
from __future__ import annotations

from datetime import date

from aiogram.utils.text_decorations import html_decoration as hd

from habitboard.services.leaderboard import (
    LeaderboardResult,
    rank_badge,
    standing_line,
    time_frame_label,
)
from habitboard.services.profile import ProfileView
from habitboard.services.scoring import HabitType, Score
from habitboard.utils.week import CUSTOM_WEEK_DAYS, is_today


def fmt_score(value: Score) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def member_since(joined_at) -> str:
    if joined_at is None:
        return "Recently"
    return joined_at.strftime("%b %d, %Y")


def format_leaderboard(result: LeaderboardResult, today: date, *, visible: bool | None = None) -> str:
    lines = [
        "🏆 <b>Community Leaderboard</b>",
        f"📅 <b>Showing:</b> {hd.quote(time_frame_label(result.time_frame, today))}",
        "",
    ]

    if visible is not None:
        lines.append(
            "👁 You're visible on the leaderboard" if visible else "🙈 You're hidden from the leaderboard"
        )
        lines.append("")

    if not result.entries:
        lines.append("ℹ️ No scores yet for this period.")
        return "\n".join(lines)

    for e in result.entries:
        you = " <b>(you)</b>" if e.is_current_user else ""
        habits = "habit" if e.total_habits == 1 else "habits"
        lines.append(
            f"{rank_badge(e.rank)} {hd.quote(e.avatar)} {hd.quote(e.display_name)}{you} — "
            f"<b>{fmt_score(e.score)}</b> pts · {e.total_habits} {habits}"
        )

    lines.append("")
    lines.append(
        f"📊 Total points: <b>{fmt_score(result.total_points)}</b> · "
        f"Average: <b>{result.average_score}</b> · Members: <b>{len(result.entries)}</b>"
    )
    lines.append(f"📍 {hd.quote(standing_line(result))}")
    return "\n".join(lines)


def format_profile(view: ProfileView, today: date) -> str:
    week = view.week
    current = " (this week)" if week.is_current_week else ""
    lines = [
        f"{hd.quote(view.avatar)} <b>{hd.quote(view.display_name)}'s Habits</b>",
        f"Member since {member_since(view.joined_at)}",
        f"📅 Week of {hd.quote(week.range_label)}{current}",
        "",
        f"📊 <b>Weekly score:</b> {fmt_score(week.weekly_score)}",
    ]

    day_cells = []
    for day, d, score in zip(CUSTOM_WEEK_DAYS, week.dates, week.daily_scores):
        marker = "•" if is_today(d, today) else ""
        day_cells.append(f"{marker}{day.short} {d.day}: {fmt_score(score)}")
    lines.append(" | ".join(day_cells))
    lines.append("")

    if not week.habits:
        lines.append("ℹ️ No scoring habits yet.")
        return "\n".join(lines)

    for h in week.habits:
        if h.type is HabitType.NUMBER:
            marks = " ".join(("✅" if c.completed else fmt_score(c.value)) for c in h.cells)
            unit = f" {hd.quote(h.unit)}" if h.unit else ""
            total = f"{fmt_score(h.weekly_total)}{unit} (target {fmt_score(h.target)}{unit})"
        else:
            marks = " ".join("✅" if c.completed else "▫️" for c in h.cells)
            total = f"{fmt_score(h.weekly_total)} days"
        lines.append(f"<b>{hd.quote(h.name or 'Habit')}</b> — {total}, {h.completion_percentage}% completed")
        lines.append(marks)

    return "\n".join(lines)
