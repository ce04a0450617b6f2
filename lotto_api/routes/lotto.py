"""Lotto result routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lotto_api.errors import ValidationError
from lotto_api.services.result_service import ResultEnrichmentService
from lotto_api.services.round_service import parse_draw_id
from lotto_api.utils.responses import passthrough

lotto_bp = Blueprint("lotto", __name__)


def _service() -> ResultEnrichmentService:
    return current_app.extensions["result_service"]


@lotto_bp.after_request
def _allow_cors(response):
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET"
    return response


@lotto_bp.get("/api/lotto")
def get_lotto_result():
    """Enriched draw result.

    Query params:
    - drwNo: draw number, or "latest"

    Upstream failures still answer 200; callers check ``returnValue``.
    """

    raw = (request.args.get("drwNo") or "").strip()
    if not raw:
        return passthrough({"error": "drwNo is required"}, 400)

    try:
        draw_id = parse_draw_id(raw)
    except ValidationError as e:
        return passthrough({"error": e.message}, e.status_code)

    return passthrough(_service().get_enriched_result(draw_id))
