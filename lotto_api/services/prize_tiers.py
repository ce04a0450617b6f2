"""Prize-tier extraction from the upstream result page.

The page has no schema guarantee, so parsing is an ordered chain of
pattern-matching strategies. The first strategy that yields any rows wins.
Callers only depend on ``extract_prize_tiers(html)``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from bs4 import BeautifulSoup
from bs4.element import Tag

from lotto_api.errors import ScrapeError
from lotto_api.utils.numbers import first_grouped_int, parse_grouped_int

logger = logging.getLogger(__name__)

MIN_RANK = 1
MAX_RANK = 5


@dataclass(frozen=True)
class PrizeTierEntry:
    """One row of the prize table."""

    rank: int
    total_prize: int
    winner_count: int
    prize_per_winner: int


Strategy = Callable[[str], list[PrizeTierEntry]]


# <tr class="..."> ... <td>1등</td> ... <td>20,000원</td> ... <td>12</td> ... <td>1,666원</td>
_ROW_PATTERN = re.compile(
    r'<tr[^>]*class="[^"]*"[^>]*>[\s\S]*?'
    r"<td[^>]*>(\d)등</td>[\s\S]*?"
    r"<td[^>]*>([\d,]+)원</td>[\s\S]*?"
    r"<td[^>]*>([\d,]+)</td>[\s\S]*?"
    r"<td[^>]*>([\d,]+)원</td>",
    re.IGNORECASE | re.ASCII,
)

_RANK = re.compile(r"(\d)등", re.ASCII)


def _cell_text(cell: Tag) -> str:
    return cell.get_text(strip=True)


def extract_by_row_pattern(html: str) -> list[PrizeTierEntry]:
    """Match class-annotated rows whose four cells appear in a fixed order."""

    out: list[PrizeTierEntry] = []
    for m in _ROW_PATTERN.finditer(html):
        rank = int(m.group(1))
        if not MIN_RANK <= rank <= MAX_RANK:
            continue
        out.append(
            PrizeTierEntry(
                rank=rank,
                total_prize=parse_grouped_int(m.group(2)),
                winner_count=parse_grouped_int(m.group(3)),
                prize_per_winner=parse_grouped_int(m.group(4)),
            )
        )
    return out


def extract_by_tbody_cells(html: str) -> list[PrizeTierEntry]:
    """Walk the rows of the first <tbody> and read the first four cells."""

    soup = BeautifulSoup(html, "html.parser")
    body = soup.find("tbody")
    if body is None:
        return []

    out: list[PrizeTierEntry] = []
    for row in body.find_all("tr"):
        cells = row.find_all("td", recursive=False)
        if len(cells) < 4:
            continue

        rank_match = _RANK.search(_cell_text(cells[0]))
        if rank_match is None:
            continue
        rank = int(rank_match.group(1))
        if not MIN_RANK <= rank <= MAX_RANK:
            continue

        out.append(
            PrizeTierEntry(
                rank=rank,
                total_prize=first_grouped_int(_cell_text(cells[1])),
                winner_count=first_grouped_int(_cell_text(cells[2])),
                prize_per_winner=first_grouped_int(_cell_text(cells[3])),
            )
        )
    return out


STRATEGIES: tuple[tuple[str, Strategy], ...] = (
    ("row_pattern", extract_by_row_pattern),
    ("tbody_cells", extract_by_tbody_cells),
)


def run_strategies(
    html: str, strategies: Sequence[tuple[str, Strategy]] = STRATEGIES
) -> tuple[str | None, list[PrizeTierEntry]]:
    """Run ``strategies`` in order; return the winning name and its sorted rows.

    Returns ``(None, [])`` when no strategy matched anything.
    """

    for name, strategy in strategies:
        entries = strategy(html)
        if entries:
            return name, sorted(entries, key=lambda e: e.rank)
    return None, []


def extract_prize_tiers(html: str) -> list[PrizeTierEntry]:
    """Extract prize tiers from a result page, ascending by rank."""

    _, entries = run_strategies(html)
    return entries


@dataclass(frozen=True)
class ScrapeResult:
    """Outcome of the detail scrape: rows, or the error that prevented them."""

    prizes: list[PrizeTierEntry] = field(default_factory=list)
    strategy: str | None = None
    error: ScrapeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, prizes: list[PrizeTierEntry], strategy: str | None) -> ScrapeResult:
        return cls(prizes=list(prizes), strategy=strategy)

    @classmethod
    def failure(cls, error: ScrapeError) -> ScrapeResult:
        return cls(error=error)

    def prizes_or_empty(self) -> list[PrizeTierEntry]:
        """The one place a scrape failure turns into an empty list."""

        if self.error is not None:
            logger.warning("Prize-tier scrape failed: %s (%s)", self.error.message, self.error.details)
            return []
        return list(self.prizes)
