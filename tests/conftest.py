from __future__ import annotations

from typing import Any

import pytest

from lotto_api import create_app
from lotto_api.config import TestingConfig
from lotto_api.errors import UpstreamUnavailableError
from lotto_api.services.result_service import ResultEnrichmentService
from lotto_api.services.stats_service import StatsService


SAMPLE_BASIC = {
    "returnValue": "success",
    "drwNo": 1000,
    "drwNoDate": "2022-01-29",
    "drwtNo1": 2,
    "drwtNo2": 8,
    "drwtNo3": 19,
    "drwtNo4": 22,
    "drwtNo5": 32,
    "drwtNo6": 42,
    "bnusNo": 39,
    "totSellamnt": 118628811000,
    "firstWinamnt": 1246819620,
    "firstPrzwnerCo": 22,
    "firstAccumamnt": 27430031640,
}

SAMPLE_HTML = """
<table class="tbl_data">
  <tbody>
    <tr class="odd"><td>2등</td><td>4,571,671,938원</td><td>71</td><td>64,389,746원</td></tr>
    <tr class="even"><td>1등</td><td>27,430,031,640원</td><td>22</td><td>1,246,819,620원</td></tr>
  </tbody>
</table>
"""


class FakeRepository:
    """In-memory stand-in for DhLotteryRepository."""

    def __init__(
        self,
        basic: dict[int, Any] | None = None,
        pages: dict[int, Any] | None = None,
    ) -> None:
        self.basic = basic or {}
        self.pages = pages or {}
        self.basic_calls: list[int] = []
        self.page_calls: list[int] = []

    def fetch_basic_result(self, draw_no):
        self.basic_calls.append(int(draw_no))
        value = self.basic.get(int(draw_no), {"returnValue": "fail"})
        if isinstance(value, Exception):
            raise value
        return dict(value)

    def fetch_result_page(self, draw_no):
        self.page_calls.append(int(draw_no))
        value = self.pages.get(int(draw_no), "")
        if isinstance(value, Exception):
            raise value
        return value


@pytest.fixture
def fake_repo_cls():
    return FakeRepository


@pytest.fixture
def sample_basic():
    return dict(SAMPLE_BASIC)


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def upstream_error():
    return UpstreamUnavailableError(message="GET failed", details={"reason": "boom"})


@pytest.fixture
def repo(sample_basic, sample_html):
    return FakeRepository(basic={1000: sample_basic}, pages={1000: sample_html})


@pytest.fixture
def app(repo):
    return create_app(
        TestingConfig,
        result_service=ResultEnrichmentService(repo),
        stats_service=StatsService(repo, max_workers=2),
    )


@pytest.fixture
def client(app):
    return app.test_client()
