"""Swe Calc MCP Server - FastMCP implementation for the calculators."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from swecalc.sdk import (
    HourlyRateInput,
    calculate_all_years,
    calculate_occupational_pension,
    estimate_benefit_value,
    get_available_years,
    hourly_rate_scenarios,
    load_plan,
    load_tax_rules,
    parse_plan,
    solve_hourly_rate,
    summarize_plan,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("swe-calc")


# --- Tools ---

@mcp.tool()
async def plan_dividends(
    plan: dict[str, Any] | None = Field(
        default=None,
        description=(
            "Plan with 'settings' (municipal_tax, marginal_tax_rate, employer_contribution, "
            "corporate_tax, ibb, share_acquisition_value, opening_free_equity, number_of_years, ...) "
            "and 'years' (list of hourly_rate, hours_per_month, gross_salary_monthly, "
            "other_costs_monthly, buffer_percent, dividend_percent). Omit to use the saved plan."
        ),
    ),
) -> dict[str, Any]:
    """Calculate a multi-year salary and dividend plan for a Swedish close company (3:12 rules).

    Returns per-year company result, free equity, dividend allowance
    (gränsbelopp), gross and net dividend, plus totals over all years.
    """
    try:
        plan_data = parse_plan(plan) if plan is not None else load_plan()
        years = calculate_all_years(plan_data.resolved_years(), plan_data.settings)
        return {
            "years": [y.model_dump() for y in years],
            "totals": summarize_plan(years).model_dump(),
        }

    except Exception as e:
        logger.error(f"Error calculating plan: {e}")
        return {"error": str(e), "years": []}


@mcp.tool()
async def hourly_rate(
    desired_net_salary: float = Field(description="Desired monthly net salary (SEK)"),
    tax_rate: float = Field(default=32.0, description="Total salary tax %"),
    employer_contribution: float = Field(default=31.42, description="Employer contribution %"),
    regional_support: bool = Field(default=False, description="Apply regional support reduction"),
    business_costs: float = Field(default=0, description="Monthly business costs (SEK)"),
    billable_hours: float = Field(default=140, description="Billable hours per month"),
    buffer_percentage: float = Field(default=20, description="Safety buffer %"),
    savings_goal: float = Field(default=0, description="Monthly savings goal (SEK)"),
    scenarios: bool = Field(default=False, description="Also solve for 120/140/160/180 hours"),
) -> dict[str, Any]:
    """Hourly rate a consultant must charge to pay themselves a monthly net salary."""
    try:
        rate_input = HourlyRateInput(
            desired_net_salary=desired_net_salary,
            municipal_tax=tax_rate,
            employer_contribution=employer_contribution,
            regional_support=regional_support,
            business_costs=business_costs,
            billable_hours=billable_hours,
            buffer_percentage=buffer_percentage,
            savings_goal=savings_goal,
        )
        result = {"result": solve_hourly_rate(rate_input).model_dump()}
        if scenarios:
            result["scenarios"] = {
                str(h): r.model_dump() for h, r in hourly_rate_scenarios(rate_input).items()
            }
        return result

    except Exception as e:
        logger.error(f"Error calculating hourly rate: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def occupational_pension(
    monthly_salary: float = Field(description="Monthly gross salary (SEK)"),
    year: int | None = Field(default=None, description="Income year for IBB and ITP rates (default: latest)"),
) -> dict[str, Any]:
    """ITP 1 occupational pension premium for a monthly salary."""
    try:
        rules = load_tax_rules(year or get_available_years()[0])
        result = calculate_occupational_pension(
            monthly_salary,
            rules.ibb,
            lower_rate=rules.itp.lower_rate,
            higher_rate=rules.itp.higher_rate,
            threshold_ibb=rules.itp.threshold_ibb,
        )
        return {"year": rules.year, "pension": result.model_dump()}

    except Exception as e:
        logger.error(f"Error calculating pension: {e}")
        return {"error": str(e), "pension": None}


@mcp.tool()
async def benefit_value(
    new_car_price: float = Field(description="New car price excl. VAT (SEK)"),
    vehicle_tax: float = Field(default=0, description="Vehicle tax per year (SEK)"),
    extra_equipment: float = Field(default=0, description="Extra equipment (SEK)"),
    mileage_reduction: bool = Field(default=False, description="3 000+ mil of business driving"),
) -> dict[str, Any]:
    """Estimate a company car's monthly taxable benefit value (förmånsvärde)."""
    try:
        value = estimate_benefit_value(
            new_car_price, vehicle_tax,
            extra_equipment=extra_equipment,
            mileage_reduction=mileage_reduction,
        )
        return {"benefit_value": value}

    except Exception as e:
        logger.error(f"Error estimating benefit value: {e}")
        return {"error": str(e), "benefit_value": None}


@mcp.tool()
async def tax_rules(
    year: int = Field(description="Income year (e.g., 2025)"),
) -> dict[str, Any]:
    """Reference amounts for an income year: IBB, K10 dividend figures, ITP 1 rates."""
    try:
        return {"rules": load_tax_rules(year).model_dump()}

    except Exception as e:
        logger.error(f"Error loading tax rules for {year}: {e}")
        return {"error": str(e), "rules": None}


# --- Resources (optional, for browsing) ---

@mcp.resource("swecalc://rules/years")
async def list_years_resource() -> str:
    """List income years with published reference amounts."""
    try:
        return json.dumps({"years": get_available_years()}, indent=2)
    except Exception as e:
        return json.dumps({"error": str(e)})


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
