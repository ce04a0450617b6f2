"""Draw identifier parsing and latest-draw estimation."""

from __future__ import annotations

from datetime import date
from typing import Literal, Union

from lotto_api.errors import ValidationError

# Draw 1 took place on Saturday 2002-12-07; one draw per week since.
FIRST_DRAW_DATE = date(2002, 12, 7)
LATEST = "latest"

DrawId = Union[int, Literal["latest"]]


def parse_draw_id(raw: object) -> DrawId:
    """Accept a positive int, a digit string, or ``"latest"``."""

    if isinstance(raw, bool):
        raise ValidationError("drwNo must be a positive integer or 'latest'")

    if isinstance(raw, int):
        draw_no = raw
    else:
        text = str(raw).strip()
        if text.lower() == LATEST:
            return LATEST
        if not (text.isascii() and text.isdigit()):
            raise ValidationError("drwNo must be a positive integer or 'latest'", details={"drwNo": text})
        draw_no = int(text)

    if draw_no < 1:
        raise ValidationError("drwNo must be positive", details={"drwNo": draw_no})
    return draw_no


def estimate_latest_draw(today: date | None = None) -> int:
    """Estimate the most recent draw number from the weekly schedule.

    The estimate can be one ahead of what upstream has published on draw day.
    """

    today = today or date.today()
    if today < FIRST_DRAW_DATE:
        return 1
    return (today - FIRST_DRAW_DATE).days // 7 + 1
