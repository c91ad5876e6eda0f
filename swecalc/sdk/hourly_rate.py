"""Hourly rate needed to pay yourself a target net salary.

Works backwards from monthly net salary: gross it up with a flat tax rate,
add employer contributions, business costs and savings, apply a safety
buffer and spread the total over the billable hours.
"""

from typing import Dict, Iterable

from .dividends import employer_contribution_rate, gross_up, regional_support_deduction
from .schemas import HourlyRateInput, HourlyRateResult

VAT_FACTOR = 1.25

SCENARIO_HOURS = (120, 140, 160, 180)


def solve_hourly_rate(rate_input: HourlyRateInput) -> HourlyRateResult:
    """Solve for the break-even hourly rate.

    Degenerate input (tax >= 100%, zero hours, negative costs) is clamped
    rather than rejected, so a result is always returned.
    """
    gross_salary = gross_up(rate_input.desired_net_salary, rate_input.municipal_tax)

    base_rate = max(0.0, rate_input.employer_contribution)
    effective_rate = employer_contribution_rate(base_rate, rate_input.regional_support)
    employer_contributions = gross_salary * (effective_rate / 100)
    if rate_input.regional_support:
        employer_contributions = max(0.0, employer_contributions - regional_support_deduction(gross_salary))

    base_cost = (
        gross_salary
        + employer_contributions
        + max(0.0, rate_input.business_costs)
        + max(0.0, rate_input.savings_goal)
    )
    total_monthly_cost = base_cost * (1 + max(0.0, rate_input.buffer_percentage) / 100)

    hours = max(1.0, rate_input.billable_hours)
    hourly_rate = total_monthly_cost / hours
    monthly_revenue = hourly_rate * hours

    return HourlyRateResult(
        gross_salary=gross_salary,
        employer_contributions=employer_contributions,
        total_monthly_cost=total_monthly_cost,
        hourly_rate=hourly_rate,
        hourly_rate_with_vat=hourly_rate * VAT_FACTOR,
        monthly_revenue=monthly_revenue,
        annual_gross_salary=gross_salary * 12,
        annual_cost=total_monthly_cost * 12,
        annual_revenue=monthly_revenue * 12,
    )


def hourly_rate_scenarios(
    rate_input: HourlyRateInput,
    hours: Iterable[float] = SCENARIO_HOURS,
) -> Dict[float, HourlyRateResult]:
    """Solve the same input for several billable-hour levels."""
    return {
        h: solve_hourly_rate(rate_input.model_copy(update={"billable_hours": h}))
        for h in hours
    }
