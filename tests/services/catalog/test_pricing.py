"""Price adjustment rule."""

from __future__ import annotations

import math

import pytest

from productflow.services.catalog.pricing import (
    PricingParameters,
    adjust_price,
    parse_price,
    pricing_preview,
)


@pytest.mark.parametrize(
    ("raw", "margin", "rate", "expected"),
    [
        ("$19.99", 10, 1, "21.99"),
        ("abc", 10, 1, ""),
        ("100", 0, 2, "200.00"),
        ("-5", 0, 1, "-5.00"),
        ("", 0, 1, ""),
        ("1,234.5", 0, 1, "1234.50"),
        ("USD 7", 50, 0.5, "5.25"),
        ("1.2.3", 0, 1, "1.20"),
        ("0.125", 0, 1, "0.13"),
    ],
)
def test_adjust_price(raw: str, margin: float, rate: float, expected: str) -> None:
    assert adjust_price(raw, margin, rate) == expected


def test_adjust_price_identity_normalizes_to_two_decimals() -> None:
    assert adjust_price("19.9", 0, 1) == "19.90"
    assert adjust_price("42", 0, 1) == "42.00"


def test_adjust_price_does_not_default_inputs() -> None:
    assert adjust_price("10", 0, 0) == "0.00"


@pytest.mark.parametrize(("raw", "expected"), [("$-3.50", -3.5), ("--", None), (".", None), (None, None)])
def test_parse_price(raw: object, expected: float | None) -> None:
    assert parse_price(raw) == expected


def test_pricing_parameters_default_blank_inputs() -> None:
    params = PricingParameters(margin_percent=None, conversion_rate="")

    assert params.margin_percent == 0
    assert params.conversion_rate == 1


def test_pricing_parameters_zero_or_nan_rate_falls_back() -> None:
    assert PricingParameters(conversion_rate=0).conversion_rate == 1
    assert PricingParameters(conversion_rate=math.nan).conversion_rate == 1
    assert PricingParameters(margin_percent=math.nan).margin_percent == 0


def test_pricing_preview_for_hundred() -> None:
    preview = pricing_preview(PricingParameters(margin_percent=20, conversion_rate=1.5))

    assert preview.sample == 100
    assert preview.margin_amount == 20
    assert preview.result == 180
