from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont

from habitboard.services.leaderboard import LeaderboardEntry


@dataclass(frozen=True, slots=True)
class CardRow:
    rank: int
    name: str
    score: str
    habits: int

    @classmethod
    def from_entry(cls, entry: LeaderboardEntry) -> "CardRow":
        score = entry.score
        if isinstance(score, float) and score.is_integer():
            score = int(score)
        return cls(rank=entry.rank, name=entry.display_name, score=str(score), habits=entry.total_habits)


def _try_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """
    Tries common fonts. Falls back to PIL default if truetype not available.
    """
    candidates = [
        "C:\\Windows\\Fonts\\segoeui.ttf",
        "C:\\Windows\\Fonts\\arial.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
    ]
    for path in candidates:
        try:
            return ImageFont.truetype(path, size=size)
        except OSError:
            continue
    return ImageFont.load_default()


def _text(draw: ImageDraw.ImageDraw, xy: tuple[int, int], s: str, font, fill=(20, 20, 20)) -> None:
    draw.text(xy, s, font=font, fill=fill)


def _truncate(name: str, limit: int = 26) -> str:
    return name if len(name) <= limit else name[: limit - 1] + "…"


def render_leaderboard_card(
    *,
    rows: Iterable[CardRow],
    subtitle: str,
    title: str = "Habit Leaderboard",
    slots: int = 3,
) -> bytes:
    """
    PNG bytes with the top `slots` rows. Empty slots are drawn greyed out.
    Text only, no emoji (fonts rarely carry them).
    """
    top = list(rows)[:slots]

    W = 1200
    pad = 48
    header_h = 170
    row_h = 120
    H = pad + header_h + 26 + 72 + slots * row_h + 70 + pad

    img = Image.new("RGB", (W, H), (248, 249, 251))
    draw = ImageDraw.Draw(img)

    font_title = _try_font(52)
    font_sub = _try_font(28)
    font_row = _try_font(34)
    font_small = _try_font(22)

    # header
    draw.rounded_rectangle(
        (pad, pad, W - pad, pad + header_h),
        radius=28,
        fill=(255, 255, 255),
        outline=(235, 236, 240),
        width=2,
    )
    _text(draw, (pad + 32, pad + 28), title, font_title, fill=(15, 23, 42))
    _text(draw, (pad + 32, pad + 100), subtitle, font_sub, fill=(55, 65, 81))

    # body
    body_top = pad + header_h + 26
    draw.rounded_rectangle(
        (pad, body_top, W - pad, H - pad),
        radius=28,
        fill=(255, 255, 255),
        outline=(235, 236, 240),
        width=2,
    )

    col_rank, col_user = pad + 36, pad + 190
    col_habits, col_score = W - pad - 400, W - pad - 200

    _text(draw, (col_rank, body_top + 28), "Rank", font_small, fill=(107, 114, 128))
    _text(draw, (col_user, body_top + 28), "User", font_small, fill=(107, 114, 128))
    _text(draw, (col_habits, body_top + 28), "Habits", font_small, fill=(107, 114, 128))
    _text(draw, (col_score, body_top + 28), "Score", font_small, fill=(107, 114, 128))

    row_y = body_top + 72
    ordinals = {1: "1st", 2: "2nd", 3: "3rd"}

    for i in range(slots):
        y1 = row_y + i * row_h
        y2 = y1 + row_h - 12

        if i % 2 == 0:
            draw.rounded_rectangle((pad + 20, y1, W - pad - 20, y2), radius=22, fill=(249, 250, 251))

        if i < len(top):
            r = top[i]
            _text(draw, (col_rank + 4, y1 + 34), ordinals.get(r.rank, f"#{r.rank}"), font_row, fill=(15, 23, 42))
            _text(draw, (col_user, y1 + 34), _truncate(r.name), font_row, fill=(15, 23, 42))
            _text(draw, (col_habits, y1 + 34), str(r.habits), font_row, fill=(15, 23, 42))
            _text(draw, (col_score, y1 + 34), r.score, font_row, fill=(15, 23, 42))
        else:
            _text(draw, (col_rank + 4, y1 + 34), "-", font_row, fill=(156, 163, 175))
            _text(draw, (col_user, y1 + 34), "—", font_row, fill=(156, 163, 175))
            _text(draw, (col_score, y1 + 34), "0", font_row, fill=(156, 163, 175))

    buf = io.BytesIO()
    img.save(buf, format="PNG", optimize=True)
    return buf.getvalue()
