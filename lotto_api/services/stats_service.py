"""Number frequency statistics over recent draws fetched from upstream."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import date
from itertools import combinations
from typing import Any, Callable

from marshmallow import ValidationError as MarshmallowValidationError

from lotto_api.errors import UpstreamUnavailableError
from lotto_api.repositories.dhlottery_repository import DhLotteryRepository
from lotto_api.schemas.lotto_result import DrawBasicResultSchema
from lotto_api.services.result_service import is_success
from lotto_api.services.round_service import estimate_latest_draw

logger = logging.getLogger(__name__)

NUMBER_MIN = 1
NUMBER_MAX = 45
TOP_K = 6
TOP_PAIRS = 20

_basic_schema = DrawBasicResultSchema()


@dataclass(frozen=True)
class DrawNumbers:
    draw_no: int
    numbers: tuple[int, ...]


@dataclass(frozen=True)
class StatsResult:
    rounds_used: int
    first_round: int | None
    last_round: int | None
    numbers: list[dict[str, Any]]
    top_numbers: list[dict[str, Any]]
    bottom_numbers: list[dict[str, Any]]
    top_pairs: list[dict[str, Any]]


def compute_stats(draws: list[DrawNumbers]) -> StatsResult:
    """Frequency, top/bottom numbers and most frequent pairs."""

    counts: dict[int, int] = {n: 0 for n in range(NUMBER_MIN, NUMBER_MAX + 1)}
    pairs: Counter[tuple[int, int]] = Counter()

    for d in draws:
        for n in d.numbers:
            counts[n] += 1
        for pair in combinations(sorted(d.numbers), 2):
            pairs[pair] += 1

    rounds = len(draws)
    stats = [
        {
            "number": n,
            "count": c,
            "percentage": (c / rounds * 100.0) if rounds else 0.0,
        }
        for n, c in counts.items()
    ]

    # sorted() is stable, so ties keep ascending number order.
    by_count = sorted(stats, key=lambda s: -s["count"])
    ranked_pairs = sorted(pairs.items(), key=lambda kv: (-kv[1], kv[0]))[:TOP_PAIRS]

    draw_nos = [d.draw_no for d in draws]
    return StatsResult(
        rounds_used=rounds,
        first_round=min(draw_nos) if draw_nos else None,
        last_round=max(draw_nos) if draw_nos else None,
        numbers=stats,
        top_numbers=by_count[:TOP_K],
        bottom_numbers=by_count[-TOP_K:][::-1],
        top_pairs=[{"pair": list(p), "count": c} for p, c in ranked_pairs],
    )


class StatsService:
    """Fetch the last N draws concurrently and aggregate them."""

    def __init__(
        self,
        repository: DhLotteryRepository | None = None,
        *,
        max_workers: int = 10,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repo = repository or DhLotteryRepository()
        self._max_workers = max(1, int(max_workers))
        self._today = today

    def _fetch_numbers(self, draw_no: int) -> DrawNumbers | None:
        try:
            payload = self._repo.fetch_basic_result(draw_no)
        except UpstreamUnavailableError as e:
            logger.info("Skipping draw %s: %s", draw_no, e.message)
            return None
        if not is_success(payload):
            return None

        try:
            basic = _basic_schema.load(payload)
        except MarshmallowValidationError as e:
            logger.info("Skipping draw %s: invalid payload %s", draw_no, e.messages)
            return None

        numbers = tuple(int(basic.get(f"drwtNo{i}") or 0) for i in range(1, 7))
        if not all(NUMBER_MIN <= n <= NUMBER_MAX for n in numbers):
            logger.info("Skipping draw %s: numbers out of range %s", draw_no, numbers)
            return None
        return DrawNumbers(draw_no=int(basic.get("drwNo") or draw_no), numbers=numbers)

    def analyze(self, recent_n: int = 100, *, latest: int | None = None) -> StatsResult:
        if recent_n <= 0:
            raise ValueError("recent_n must be positive")

        last = latest if latest is not None else estimate_latest_draw(self._today())
        first = max(1, last - recent_n + 1)
        draw_nos = list(range(first, last + 1))

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            fetched = list(pool.map(self._fetch_numbers, draw_nos))

        unique: dict[int, DrawNumbers] = {}
        for d in fetched:
            if d is not None:
                unique[d.draw_no] = d

        draws = [unique[k] for k in sorted(unique)]
        logger.info("Stats over %s of %s requested draws (%s..%s)", len(draws), len(draw_nos), first, last)
        return compute_stats(draws)
