"""Flask application package."""

from __future__ import annotations

from typing import Any

from flask import Flask

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]


def create_app(config: type | None = None, **services: Any) -> Flask:
    """Application factory.

    Args:
        config: Config class to load; resolved from APP_ENV when omitted.
        services: Optional ``result_service`` / ``stats_service`` overrides.

    Returns:
        Configured Flask application.
    """
    if load_dotenv is not None:
        load_dotenv()

    from lotto_api.config import get_config
    from lotto_api.error_handlers import register_error_handlers
    from lotto_api.logging_config import configure_logging
    from lotto_api.repositories.dhlottery_repository import DhLotteryRepository, build_http_session
    from lotto_api.routes.health import health_bp
    from lotto_api.routes.lotto import lotto_bp
    from lotto_api.routes.stats import stats_bp
    from lotto_api.services.result_service import ResultEnrichmentService
    from lotto_api.services.stats_service import StatsService

    app = Flask(__name__)
    app.config.from_object(config or get_config())

    configure_logging(app)
    register_error_handlers(app)

    repository = DhLotteryRepository(
        build_http_session(
            retries=int(app.config["LOTTO_HTTP_RETRIES"]),
            backoff_factor=float(app.config["LOTTO_HTTP_BACKOFF"]),
        ),
        basic_url=str(app.config["LOTTO_BASIC_URL"]),
        detail_url=str(app.config["LOTTO_DETAIL_URL"]),
        timeout_seconds=float(app.config["LOTTO_HTTP_TIMEOUT"]),
    )
    app.extensions["result_service"] = services.get("result_service") or ResultEnrichmentService(
        repository,
        latest_lookback=int(app.config["LOTTO_LATEST_LOOKBACK"]),
    )
    app.extensions["stats_service"] = services.get("stats_service") or StatsService(
        repository,
        max_workers=int(app.config["LOTTO_STATS_WORKERS"]),
    )

    app.register_blueprint(health_bp)
    app.register_blueprint(lotto_bp)
    app.register_blueprint(stats_bp)

    return app
