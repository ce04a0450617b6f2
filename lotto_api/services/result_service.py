"""Business logic for enriching a draw result with its prize-tier breakdown."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from lotto_api.errors import ScrapeError, UpstreamUnavailableError
from lotto_api.repositories.dhlottery_repository import DhLotteryRepository
from lotto_api.schemas.lotto_result import DrawBasicResultSchema, PrizeTierSchema
from lotto_api.services.prize_tiers import PrizeTierEntry, ScrapeResult, run_strategies
from lotto_api.services.round_service import LATEST, DrawId, estimate_latest_draw

logger = logging.getLogger(__name__)

SUCCESS = "success"
FAILURE_RESPONSE = {"returnValue": "fail", "error": "Failed to fetch lottery data"}

_basic_schema = DrawBasicResultSchema()
_prizes_schema = PrizeTierSchema(many=True)


def is_success(payload: dict[str, Any]) -> bool:
    return payload.get("returnValue") == SUCCESS


def fallback_prizes(basic: dict[str, Any]) -> list[PrizeTierEntry]:
    """Single rank-1 entry built from the summary's first-tier fields."""

    return [
        PrizeTierEntry(
            rank=1,
            total_prize=int(basic.get("firstAccumamnt") or 0),
            winner_count=int(basic.get("firstPrzwnerCo") or 0),
            prize_per_winner=int(basic.get("firstWinamnt") or 0),
        )
    ]


class ResultEnrichmentService:
    """Combine the upstream draw summary with scraped prize tiers."""

    def __init__(
        self,
        repository: DhLotteryRepository | None = None,
        *,
        latest_lookback: int = 2,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._repo = repository or DhLotteryRepository()
        self._latest_lookback = max(0, int(latest_lookback))
        self._today = today

    def fetch_basic(self, draw_id: DrawId) -> tuple[dict[str, Any], int]:
        """Fetch the summary, resolving ``latest`` to the newest published draw.

        Returns the payload and the draw number it was requested for.
        Raises UpstreamUnavailableError.
        """

        if draw_id != LATEST:
            draw_no = int(draw_id)
            return self._repo.fetch_basic_result(draw_no), draw_no

        draw_no = estimate_latest_draw(self._today())
        payload: dict[str, Any] = {}
        for attempt in range(self._latest_lookback + 1):
            payload = self._repo.fetch_basic_result(draw_no)
            if is_success(payload) or draw_no <= 1 or attempt == self._latest_lookback:
                break
            # Not drawn or not published yet.
            logger.info("Draw %s not available yet, trying %s", draw_no, draw_no - 1)
            draw_no -= 1
        return payload, draw_no

    def scrape_prize_tiers(self, draw_no: int) -> ScrapeResult:
        """Fetch and parse the result page. Never raises."""

        try:
            html = self._repo.fetch_result_page(draw_no)
        except UpstreamUnavailableError as e:
            return ScrapeResult.failure(ScrapeError(message=e.message, details=e.details))

        try:
            strategy, prizes = run_strategies(html)
        except (TypeError, ValueError) as e:
            return ScrapeResult.failure(ScrapeError(details={"drwNo": draw_no, "reason": str(e)}))

        if strategy is None:
            logger.info("No prize rows matched for draw %s", draw_no)
        else:
            logger.debug("Draw %s: %s prize rows via %s", draw_no, len(prizes), strategy)
        return ScrapeResult.success(prizes, strategy)

    def enrich(self, payload: dict[str, Any], draw_no: int) -> dict[str, Any]:
        """Attach ``prizes`` to a successful summary payload."""

        basic = _basic_schema.load(payload)

        try:
            prizes = self.scrape_prize_tiers(draw_no).prizes_or_empty()
        except Exception:
            logger.exception("Unexpected failure scraping draw %s", draw_no)
            prizes = []

        if not prizes:
            prizes = fallback_prizes(basic)

        return {**basic, "prizes": _prizes_schema.dump(prizes)}

    def get_enriched_result(self, draw_id: DrawId) -> dict[str, Any]:
        """Return the enriched record, the upstream pass-through, or the failure object."""

        try:
            payload, draw_no = self.fetch_basic(draw_id)
            if not is_success(payload):
                return payload

            scrape_no = payload.get("drwNo") or draw_no
            return self.enrich(payload, int(scrape_no))
        except Exception:
            logger.exception("Failed to fetch lottery data for drwNo=%s", draw_id)
            return dict(FAILURE_RESPONSE)
