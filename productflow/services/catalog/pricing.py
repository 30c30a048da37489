"""Price adjustment rule: margin first, then currency conversion."""

from __future__ import annotations

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from .models import PricingPreview

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
# Longest numeric prefix, so "1.2.3" reads as 1.2 and "12-5" as 12.
_NUMBER_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_CENTS = Decimal("0.01")


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


class PricingParameters(BaseModel):
    """Session pricing inputs.

    Blank or NaN inputs fall back to the defaults here, upstream of
    :func:`adjust_price`. A conversion rate of 0 also falls back to 1.
    """

    model_config = ConfigDict(validate_assignment=True)

    margin_percent: float = 0.0
    conversion_rate: float = 1.0

    @field_validator("margin_percent", mode="before")
    @classmethod
    def _default_margin(cls, value: object) -> object:
        return 0.0 if _is_blank(value) else value

    @field_validator("conversion_rate", mode="before")
    @classmethod
    def _default_rate(cls, value: object) -> object:
        if _is_blank(value):
            return 1.0
        return value

    @field_validator("conversion_rate")
    @classmethod
    def _zero_rate(cls, value: float) -> float:
        return 1.0 if value == 0 else value


def parse_price(raw_value: object) -> Optional[float]:
    """Strip everything but digits, ``.`` and ``-`` and parse the rest.

    Returns None when no number can be read.
    """

    text = _NON_NUMERIC.sub("", "" if raw_value is None else str(raw_value))
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        return None
    return float(match.group(0))


def format_amount(value: float) -> str:
    """Fixed two-decimal text, ties rounded away from zero."""

    if value == 0:
        value = 0.0  # no "-0.00"
    return format(Decimal(value).quantize(_CENTS, rounding=ROUND_HALF_UP), "f")


def adjust_price(raw_value: object, margin_percent: float, conversion_rate: float) -> str:
    """Return ``parsed * (1 + margin/100) * rate`` as two-decimal text.

    Returns ``""`` when the raw value holds no number. Negative results are
    passed through. No defaulting is applied to the numeric inputs.
    """

    parsed = parse_price(raw_value)
    if parsed is None:
        return ""
    adjusted = parsed * (1 + margin_percent / 100) * conversion_rate
    if not math.isfinite(adjusted):
        return ""
    return format_amount(adjusted)


def pricing_preview(params: PricingParameters, sample: float = 100.0) -> PricingPreview:
    margin_amount = sample * params.margin_percent / 100
    result = sample * (1 + params.margin_percent / 100) * params.conversion_rate
    return PricingPreview(
        sample=sample,
        margin_amount=float(format_amount(margin_amount)),
        conversion_rate=params.conversion_rate,
        result=float(format_amount(result)),
    )
