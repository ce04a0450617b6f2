"""Statistics routes (controllers). No business logic here."""

from __future__ import annotations

from dataclasses import asdict

from flask import Blueprint, current_app, request

from lotto_api.schemas.stats import StatsQuerySchema, StatsResponseSchema
from lotto_api.services.stats_service import StatsService
from lotto_api.utils.responses import ok

stats_bp = Blueprint("stats", __name__)

_query_schema = StatsQuerySchema()
_response_schema = StatsResponseSchema()


@stats_bp.get("/api/stats")
def get_stats():
    """Number frequency over the most recent draws.

    Query params:
    - n: number of recent draws (1..200, default 100)
    """

    args = _query_schema.load(request.args)
    service: StatsService = current_app.extensions["stats_service"]
    result = service.analyze(recent_n=int(args["n"]))
    return ok(_response_schema.dump(asdict(result)))
