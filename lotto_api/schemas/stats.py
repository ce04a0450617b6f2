"""Schemas for the frequency statistics API."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class StatsQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    n = fields.Integer(required=False, load_default=100, validate=validate.Range(min=1, max=200))


class NumberStatSchema(Schema):
    number = fields.Integer(required=True)
    count = fields.Integer(required=True)
    percentage = fields.Float(required=True)


class PairStatSchema(Schema):
    pair = fields.List(fields.Integer(), required=True)
    count = fields.Integer(required=True)


class StatsResponseSchema(Schema):
    rounds_used = fields.Integer(required=True)
    first_round = fields.Integer(allow_none=True)
    last_round = fields.Integer(allow_none=True)
    numbers = fields.List(fields.Nested(NumberStatSchema), required=True)
    top_numbers = fields.List(fields.Nested(NumberStatSchema), required=True)
    bottom_numbers = fields.List(fields.Nested(NumberStatSchema), required=True)
    top_pairs = fields.List(fields.Nested(PairStatSchema), required=True)
