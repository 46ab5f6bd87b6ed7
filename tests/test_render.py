from datetime import date, datetime

import pytest

from factories import boolean_habit, number_habit
from habitboard.keyboards.views import leaderboard_kb, parse_profile_callback, profile_callback, week_nav_kb
from habitboard.services.leaderboard import LeaderboardUser, TimeFrame, build_leaderboard
from habitboard.services.profile import ProfileView, weekly_view
from habitboard.utils.cards.leaderboard_card import CardRow, render_leaderboard_card
from habitboard.utils.render import fmt_score, format_leaderboard, format_profile, member_since

TODAY = date(2024, 1, 10)


def _result(current_user_id=None):
    users = [
        LeaderboardUser(user_id="1", display_name="<Ann>", avatar="🦊"),
        LeaderboardUser(user_id="2", display_name="Bo"),
    ]
    habits = {
        "1": [boolean_habit("a", "2024-01-06", "2024-01-07", user_id="1")],
        "2": [number_habit("b", {"2024-01-08": 1.5}, user_id="2")],
    }
    return build_leaderboard(users, habits, TimeFrame.CURRENT_WEEK, current_user_id, TODAY)


def test_format_leaderboard_lists_ranked_rows():
    text = format_leaderboard(_result("2"), TODAY, visible=True)

    assert "Current Week (Jan 6 - 12)" in text
    assert "🥇 🦊 &lt;Ann&gt; — <b>2</b> pts · 1 habit" in text
    assert "🥈 👤 Bo <b>(you)</b> — <b>1.5</b> pts" in text
    assert "You're visible on the leaderboard" in text
    assert "You're ranked #2!" in text
    assert "Total points: <b>3.5</b>" in text
    assert "Average: <b>2</b>" in text


def test_format_empty_leaderboard():
    empty = build_leaderboard([], {}, TimeFrame.LAST_WEEK, None, TODAY)
    text = format_leaderboard(empty, TODAY)
    assert "Last Week (Dec 30 - Jan 5)" in text
    assert "No scores yet" in text
    assert "visible" not in text


def test_format_profile():
    habits = [
        boolean_habit("read", "2024-01-06", "2024-01-10"),
        number_habit("water", {"2024-01-06": 8.0}, target=6),
    ]
    view = ProfileView(
        user_id="1",
        display_name="Ann",
        avatar="🦊",
        joined_at=datetime(2023, 5, 2, 10, 0),
        week=weekly_view(habits, TODAY, TODAY),
    )

    text = format_profile(view, TODAY)

    assert "Ann's Habits" in text
    assert "Member since May 02, 2023" in text
    assert "Week of Jan 6 - 12 (this week)" in text
    assert "<b>Weekly score:</b> 10" in text
    assert "Sat 6: 9" in text
    assert "•Wed 10: 1" in text
    assert "2 days, 29% completed" in text
    assert "8 (target 6)" in text


def test_fmt_score_and_member_since():
    assert fmt_score(4.0) == "4"
    assert fmt_score(2.5) == "2.5"
    assert member_since(None) == "Recently"


def test_profile_callback_roundtrip_with_colons_in_user_id():
    data = profile_callback("tg:42", date(2024, 1, 3))
    assert data == "pv:tg:42:2024-01-03"
    assert parse_profile_callback(data) == ("tg:42", date(2024, 1, 3))


@pytest.mark.parametrize("bad", ["lb:allTime", "pv:", "pv:42:notadate", "pv::2024-01-03"])
def test_parse_profile_callback_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_profile_callback(bad)


def test_leaderboard_keyboard_offers_time_frames_and_other_profiles():
    result = _result("1")
    kb = leaderboard_kb(selected=TimeFrame.LAST_WEEK, entries=result.entries, today=TODAY)

    first_row = [b.text for b in kb.inline_keyboard[0]]
    assert first_row == ["This Week", "• Last Week", "Last 4 Weeks"]
    assert [b.callback_data for b in kb.inline_keyboard[0]] == ["lb:currentWeek", "lb:lastWeek", "lb:allTime"]
    assert [row[0].callback_data for row in kb.inline_keyboard[1:]] == ["pv:2:2024-01-10"]


def test_week_nav_keyboard():
    kb = week_nav_kb(user_id="7", reference=date(2024, 1, 3), is_current_week=False, today=TODAY)
    data = [b.callback_data for row in kb.inline_keyboard for b in row]
    assert data == ["pv:7:2023-12-27", "pv:7:2024-01-10", "pv:7:2024-01-10"]

    kb = week_nav_kb(user_id="7", reference=TODAY, is_current_week=True, today=TODAY)
    assert len([b for row in kb.inline_keyboard for b in row]) == 2


def test_profile_callback_too_long_for_telegram():
    assert profile_callback("x" * 50, TODAY) == "pv:" + "x" * 50 + ":2024-01-10"
    assert profile_callback("x" * 51, TODAY) is None
    # multi-byte ids count in bytes
    assert profile_callback("é" * 26, TODAY) is None


def test_leaderboard_keyboard_skips_users_with_oversized_ids():
    long_id = "x" * 60
    users = [
        LeaderboardUser(user_id=long_id, display_name="Long"),
        LeaderboardUser(user_id="2", display_name="Bo"),
    ]
    habits = {
        long_id: [boolean_habit("a", "2024-01-06", "2024-01-07", user_id=long_id)],
        "2": [boolean_habit("b", "2024-01-08", user_id="2")],
    }
    result = build_leaderboard(users, habits, TimeFrame.CURRENT_WEEK, None, TODAY)

    kb = leaderboard_kb(selected=TimeFrame.CURRENT_WEEK, entries=result.entries, today=TODAY)

    assert [e.user_id for e in result.entries] == [long_id, "2"]
    assert [row[0].text for row in kb.inline_keyboard[1:]] == ["View Bo"]
    assert all(len(b.callback_data.encode()) <= 64 for row in kb.inline_keyboard for b in row)


def test_week_nav_keyboard_for_oversized_id_has_no_buttons():
    kb = week_nav_kb(user_id="x" * 60, reference=TODAY, is_current_week=True, today=TODAY)
    assert [b for row in kb.inline_keyboard for b in row] == []


def test_leaderboard_card_is_a_png():
    rows = [CardRow.from_entry(e) for e in _result().entries]
    png = render_leaderboard_card(rows=rows, subtitle="Current Week (Jan 6 - 12)")

    assert png.startswith(b"\x89PNG\r\n\x1a\n")
    assert rows[0] == CardRow(rank=1, name="<Ann>", score="2", habits=1)
    assert rows[1].score == "1.5"


def test_leaderboard_card_with_no_rows():
    assert render_leaderboard_card(rows=[], subtitle="Last 4 Weeks").startswith(b"\x89PNG")
