"""Tests for the MCP tool functions (called directly, without a transport)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from swecalc.mcp import server  # noqa: E402
from swecalc.sdk.config import DEFAULT_PLAN  # noqa: E402


def test_plan_dividends():
    result = asyncio.run(server.plan_dividends(plan=DEFAULT_PLAN))
    assert "error" not in result
    assert len(result["years"]) == 3
    assert result["totals"]["years"] == 3


def test_plan_dividends_invalid_plan():
    result = asyncio.run(server.plan_dividends(plan={"settings": {}, "years": []}))
    assert "Invalid plan" in result["error"]
    assert result["years"] == []


def test_tax_rules():
    result = asyncio.run(server.tax_rules(year=2025))
    assert result["rules"]["ibb"] == 80600


def test_tax_rules_unknown_year():
    result = asyncio.run(server.tax_rules(year=1990))
    assert result["rules"] is None
    assert "error" in result


def test_benefit_value():
    result = asyncio.run(server.benefit_value(
        new_car_price=400000, vehicle_tax=360, extra_equipment=0, mileage_reduction=False,
    ))
    assert result == {"benefit_value": 3030}
