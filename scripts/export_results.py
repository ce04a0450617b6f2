"""Export enriched draw results as JSON lines.

Usage:
  python scripts/export_results.py --min 1100 --max 1150 --output results.jsonl

Options:
  --max         default: latest published draw
  --retries 3   --backoff 0.3   --timeout 10
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from typing import TextIO

from tqdm import tqdm

try:
    from dotenv import load_dotenv
except Exception:  # pragma: no cover
    load_dotenv = None  # type: ignore[assignment]

from lotto_api.errors import UpstreamUnavailableError
from lotto_api.repositories.dhlottery_repository import (
    DEFAULT_BASIC_URL,
    DEFAULT_DETAIL_URL,
    DhLotteryRepository,
    build_http_session,
)
from lotto_api.services.result_service import ResultEnrichmentService, is_success
from lotto_api.services.round_service import LATEST


logger = logging.getLogger(__name__)


def export_range(
    service: ResultEnrichmentService,
    min_draw_no: int,
    max_draw_no: int,
    out: TextIO,
    *,
    progress: bool = True,
) -> int:
    """Write one JSON object per draw; return how many were successful."""

    exported = 0
    draws = range(min_draw_no, max_draw_no + 1)
    for draw_no in tqdm(draws, desc="Exporting", disable=not progress):
        result = service.get_enriched_result(draw_no)
        out.write(json.dumps(result, ensure_ascii=False) + "\n")
        if is_success(result):
            exported += 1
        else:
            logger.warning("Draw %s: returnValue=%s", draw_no, result.get("returnValue"))
    return exported


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch enriched lotto results and write JSON lines")
    parser.add_argument("--min", dest="min_draw_no", type=int, default=1)
    parser.add_argument(
        "--max",
        dest="max_draw_no",
        type=int,
        default=None,
        help="Max draw number (default: latest published draw)",
    )
    parser.add_argument("--output", dest="output", type=str, default=None, help="Output file (default: stdout)")
    parser.add_argument("--timeout", dest="timeout_seconds", type=float, default=10.0)
    parser.add_argument("--retries", dest="retries", type=int, default=3)
    parser.add_argument("--backoff", dest="backoff", type=float, default=0.3)
    parser.add_argument("--basic-url", dest="basic_url", type=str, default=DEFAULT_BASIC_URL)
    parser.add_argument("--detail-url", dest="detail_url", type=str, default=DEFAULT_DETAIL_URL)
    parser.add_argument("--no-progress", action="store_true")
    args = parser.parse_args(argv)

    if load_dotenv is not None:
        load_dotenv()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")

    http = build_http_session(retries=args.retries, backoff_factor=args.backoff)
    repo = DhLotteryRepository(
        http,
        basic_url=args.basic_url,
        detail_url=args.detail_url,
        timeout_seconds=float(args.timeout_seconds),
    )
    service = ResultEnrichmentService(repo)

    if args.max_draw_no is not None:
        max_draw_no = int(args.max_draw_no)
    else:
        try:
            payload, max_draw_no = service.fetch_basic(LATEST)
        except UpstreamUnavailableError as e:
            raise SystemExit(f"Could not determine the latest published draw: {e.message}") from e
        if not is_success(payload):
            raise SystemExit("Could not determine the latest published draw")

    if args.min_draw_no < 1:
        raise SystemExit("--min must be >= 1")
    if max_draw_no < args.min_draw_no:
        raise SystemExit(f"--max ({max_draw_no}) must be >= --min ({args.min_draw_no})")
    logger.info("Export range: %s..%s", args.min_draw_no, max_draw_no)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            exported = export_range(service, args.min_draw_no, max_draw_no, fh, progress=not args.no_progress)
    else:
        exported = export_range(service, args.min_draw_no, max_draw_no, sys.stdout, progress=not args.no_progress)

    logger.info("Exported %s draws", exported)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
