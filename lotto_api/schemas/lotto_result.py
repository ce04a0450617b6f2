"""Marshmallow schemas for upstream draw payloads and enriched results."""

from __future__ import annotations

from marshmallow import INCLUDE, Schema, fields, validate


class DrawBasicResultSchema(Schema):
    """Upstream ``getLottoNumber`` payload.

    Every field is optional upstream; numeric fields default to 0 and unknown
    keys are kept so the enriched record carries everything upstream sent.
    """

    class Meta:
        unknown = INCLUDE

    returnValue = fields.String(load_default="fail")
    drwNo = fields.Integer(load_default=None, allow_none=True, validate=validate.Range(min=1))
    drwNoDate = fields.String(load_default=None, allow_none=True)

    drwtNo1 = fields.Integer(load_default=0, allow_none=True)
    drwtNo2 = fields.Integer(load_default=0, allow_none=True)
    drwtNo3 = fields.Integer(load_default=0, allow_none=True)
    drwtNo4 = fields.Integer(load_default=0, allow_none=True)
    drwtNo5 = fields.Integer(load_default=0, allow_none=True)
    drwtNo6 = fields.Integer(load_default=0, allow_none=True)
    bnusNo = fields.Integer(load_default=0, allow_none=True)

    totSellamnt = fields.Integer(load_default=0, allow_none=True)
    firstWinamnt = fields.Integer(load_default=0, allow_none=True)
    firstPrzwnerCo = fields.Integer(load_default=0, allow_none=True)
    firstAccumamnt = fields.Integer(load_default=0, allow_none=True)


class PrizeTierSchema(Schema):
    """Serialize a PrizeTierEntry with the client's camelCase keys."""

    rank = fields.Integer(required=True)
    total_prize = fields.Integer(required=True, data_key="totalPrize")
    winner_count = fields.Integer(required=True, data_key="winnerCount")
    prize_per_winner = fields.Integer(required=True, data_key="prizePerWinner")
