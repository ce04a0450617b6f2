"""Custom exceptions for centralized error handling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error."""

    code: str
    message: str
    status_code: int
    details: Any | None = None


class ValidationError(AppError):
    """Input validation error."""

    def __init__(self, message: str = "Validation error", details: Any | None = None) -> None:
        super().__init__(code="validation_error", message=message, status_code=400, details=details)


class UpstreamUnavailableError(AppError):
    """Upstream lottery site unreachable, non-OK, or returned an undecodable body."""

    def __init__(self, message: str = "Upstream unavailable", details: Any | None = None) -> None:
        super().__init__(code="upstream_unavailable", message=message, status_code=502, details=details)


class ScrapeError(AppError):
    """Prize-tier scraping failed. Never leaves the scrape path."""

    def __init__(self, message: str = "Scrape failed", details: Any | None = None) -> None:
        super().__init__(code="scrape_error", message=message, status_code=502, details=details)
