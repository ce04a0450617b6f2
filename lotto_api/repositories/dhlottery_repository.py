"""Repository layer for the upstream lottery site (dhlottery.co.kr)."""

from __future__ import annotations

import logging
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from lotto_api.errors import UpstreamUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_BASIC_URL = "https://www.dhlottery.co.kr/common.do"
DEFAULT_DETAIL_URL = "https://www.dhlottery.co.kr/gameResult.do"

# The upstream blocks requests that do not look like a browser.
BASIC_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "ko-KR,ko;q=0.9,en-US;q=0.8,en;q=0.7",
    "Referer": "https://www.dhlottery.co.kr/",
    "Origin": "https://www.dhlottery.co.kr",
}

DETAIL_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "ko-KR,ko;q=0.9",
}


def build_http_session(retries: int = 0, backoff_factor: float = 0.3) -> requests.Session:
    """Create a requests session with retry/backoff for transient network errors."""

    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        status=retries,
        backoff_factor=backoff_factor,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry, pool_connections=20, pool_maxsize=20)

    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


class DhLotteryRepository:
    """Read draw data from the two upstream endpoints."""

    def __init__(
        self,
        http: requests.Session | None = None,
        *,
        basic_url: str = DEFAULT_BASIC_URL,
        detail_url: str = DEFAULT_DETAIL_URL,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._http = http or build_http_session()
        self._basic_url = basic_url
        self._detail_url = detail_url
        self._timeout = timeout_seconds

    def _get(self, url: str, params: dict[str, Any], headers: dict[str, str]) -> requests.Response:
        try:
            resp = self._http.get(url, params=params, headers=headers, timeout=self._timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise UpstreamUnavailableError(
                message=f"GET {url} failed",
                details={"params": params, "reason": str(e)},
            ) from e
        return resp

    def fetch_basic_result(self, draw_no: int | str) -> dict[str, Any]:
        """Fetch the JSON draw summary, returned unmodified."""

        params = {"method": "getLottoNumber", "drwNo": str(draw_no)}
        resp = self._get(self._basic_url, params, BASIC_HEADERS)
        try:
            payload = resp.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                message="Upstream returned a non-JSON body",
                details={"params": params, "content_type": resp.headers.get("Content-Type")},
            ) from e

        if not isinstance(payload, dict):
            raise UpstreamUnavailableError(
                message="Upstream returned an unexpected JSON shape",
                details={"params": params, "type": type(payload).__name__},
            )
        return payload

    def fetch_result_page(self, draw_no: int | str) -> str:
        """Fetch the HTML result page holding the prize table."""

        params = {"method": "byWin", "drwNo": str(draw_no)}
        resp = self._get(self._detail_url, params, DETAIL_HEADERS)
        logger.debug("Fetched result page for draw %s (%s bytes)", draw_no, len(resp.content))
        return _decode_html(resp)


def _decode_html(resp: requests.Response) -> str:
    """Decode the page body, defaulting to UTF-8 when the header names no charset.

    Without a charset requests assumes ISO-8859-1 for text/*, which garbles Korean.
    """

    content_type = resp.headers.get("Content-Type", "")
    if "charset=" in content_type.lower():
        return resp.text

    try:
        return resp.content.decode("utf-8")
    except UnicodeDecodeError:
        resp.encoding = resp.apparent_encoding
        return resp.text
