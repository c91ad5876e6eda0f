"""Multi-year salary and dividend planning for a close company (3:12 rules).

Each year is computed from its own inputs, the shared settings and the
previous year's result. Two values carry forward: closing free equity
becomes next year's opening equity, and unused dividend allowance
(sparat utdelningsutrymme) is carried with an annual uplift.

All amounts are SEK per year unless the field name says monthly. Money
is clamped at zero; only the pre-buffer surplus may go negative.

The allowance constants below are the income-year 2025 figures for every
planned year. The per-year uplift and interest in tax_rules/*.yaml are
reference data for `swe-calc rules` and are not read here.
"""

import logging
from typing import List, Optional

from .schemas import GlobalSettings, PlanTotals, YearCalculation, YearInput

logger = logging.getLogger(__name__)

# Regional support: employer contribution cut and monthly deduction cap
REGIONAL_SUPPORT_CUT = 10.0
REGIONAL_SUPPORT_DEDUCTION_RATE = 0.10
REGIONAL_SUPPORT_MONTHLY_CAP = 7100.0

# 3:12 dividend allowance (income year 2025)
SIMPLIFIED_RULE_IBB = 2.75
MAIN_RULE_PAYROLL_SHARE = 0.5
MAIN_RULE_INTEREST = 0.1096
ALLOWANCE_UPLIFT = 1.0496
WAGE_FLOOR_BASE_IBB = 6.0
WAGE_FLOOR_PAYROLL_SHARE = 0.05
WAGE_FLOOR_MIN_IBB = 9.6

LOW_DIVIDEND_TAX = 0.20

# Largest tax rate used as a divisor, keeps 1 - rate away from zero
MAX_DIVISOR_TAX = 0.9999


def employer_contribution_rate(base_rate: float, regional_support: bool) -> float:
    """Employer contribution % after the regional-support cut."""
    if regional_support:
        return max(0.0, base_rate - REGIONAL_SUPPORT_CUT)
    return base_rate


def regional_support_deduction(gross_salary_monthly: float) -> float:
    """Monthly regional-support deduction: 10% of salary, capped."""
    return min(max(0.0, gross_salary_monthly) * REGIONAL_SUPPORT_DEDUCTION_RATE,
               REGIONAL_SUPPORT_MONTHLY_CAP)


def gross_up(net: float, tax_rate_pct: float) -> float:
    """Gross amount that leaves ``net`` after a flat tax.

    Returns 0 when the tax factor is not positive.
    """
    factor = 1 - min(MAX_DIVISOR_TAX, max(0.0, tax_rate_pct) / 100)
    return net / factor if factor > 0 else 0.0


def calculate_year(
    year_input: YearInput,
    settings: GlobalSettings,
    previous_year: Optional[YearCalculation],
    year_number: int,
) -> YearCalculation:
    """Calculate salary, company result and dividend for one year.

    Args:
        year_input: The year's billing, salary, cost and payout choices
        settings: Session settings (tax rates, IBB, opening equity, ...)
        previous_year: Result for year_number - 1, or None for the first year
        year_number: 1-based position of the year in the plan

    Returns:
        Frozen YearCalculation. Never raises for numeric input.
    """
    # Salary and employer contributions
    gross_salary_yearly = max(0.0, year_input.gross_salary_monthly * 12)

    effective_rate = employer_contribution_rate(settings.employer_contribution, settings.regional_support)
    employer_contribution_yearly = gross_salary_yearly * (effective_rate / 100)
    if settings.regional_support:
        monthly_deduction = regional_support_deduction(year_input.gross_salary_monthly)
        employer_contribution_yearly = max(0.0, employer_contribution_yearly - monthly_deduction * 12)

    # Personal tax on salary
    tax_rate = max(0.0, settings.salary_tax_rate)
    tax_amount = gross_salary_yearly * (tax_rate / 100)
    net_salary_yearly = max(0.0, gross_salary_yearly - tax_amount)

    # Company result
    costs_yearly = max(0.0, year_input.other_costs_monthly * 12)
    billed_yearly = max(0.0, year_input.hourly_rate * year_input.hours_per_month * 12)

    surplus_before_buffer = billed_yearly - gross_salary_yearly - employer_contribution_yearly - costs_yearly
    buffer_yearly = max(0.0, surplus_before_buffer * (max(0.0, year_input.buffer_percent) / 100))
    surplus_yearly = surplus_before_buffer - buffer_yearly

    corporate_tax_amount = max(0.0, surplus_yearly * (max(0.0, settings.corporate_tax) / 100))
    net_profit_yearly = surplus_yearly - corporate_tax_amount

    # Free equity available for distribution
    if year_number == 1:
        opening_equity = max(0.0, settings.opening_free_equity)
    elif previous_year is not None:
        opening_equity = max(0.0, previous_year.closing_equity)
    else:
        opening_equity = 0.0
    max_dividend_by_equity = max(0.0, opening_equity + net_profit_yearly)

    # Dividend allowance (gränsbelopp): higher of simplified and main rule
    ibb = max(0.0, settings.ibb)
    total_cash_salaries = (
        settings.total_cash_salaries_yearly
        if settings.total_cash_salaries_yearly is not None
        else gross_salary_yearly
    )
    total_cash_salaries = max(0.0, total_cash_salaries)

    wage_floor = max(WAGE_FLOOR_BASE_IBB * ibb + WAGE_FLOOR_PAYROLL_SHARE * total_cash_salaries,
                     WAGE_FLOOR_MIN_IBB * ibb)
    eligible_for_main_rule = gross_salary_yearly >= wage_floor

    simplified_rule_allowance = SIMPLIFIED_RULE_IBB * ibb
    if eligible_for_main_rule:
        main_rule_allowance = (total_cash_salaries * MAIN_RULE_PAYROLL_SHARE
                               + max(0.0, settings.share_acquisition_value) * MAIN_RULE_INTEREST)
    else:
        main_rule_allowance = 0.0
    current_year_allowance = max(simplified_rule_allowance, main_rule_allowance)

    saved = previous_year.saved_dividend_allowance if previous_year is not None else 0.0
    carried_forward_allowance = max(0.0, saved) * ALLOWANCE_UPLIFT

    dividend_allowance_sek = current_year_allowance + carried_forward_allowance
    if max_dividend_by_equity > 0:
        dividend_allowance_pct = dividend_allowance_sek / max_dividend_by_equity * 100
    else:
        dividend_allowance_pct = 0.0

    # Dividend: low-taxed up to the allowance, the rest at marginal rate
    gross_dividend = max(0.0, max_dividend_by_equity * (max(0.0, year_input.dividend_percent) / 100))
    low_tax_dividend = min(gross_dividend, dividend_allowance_sek)
    high_tax_dividend = gross_dividend - low_tax_dividend

    marginal_tax_rate = max(0.0, settings.marginal_tax_rate)
    net_dividend = max(0.0, low_tax_dividend * (1 - LOW_DIVIDEND_TAX)
                       + high_tax_dividend * (1 - marginal_tax_rate / 100))

    # Owner's total and salary equivalent
    total_net_monthly = (net_salary_yearly + net_dividend) / 12
    equivalent_gross_salary_monthly = gross_up(total_net_monthly, tax_rate)

    closing_equity = max(0.0, max_dividend_by_equity - gross_dividend)
    saved_dividend_allowance = max(0.0, dividend_allowance_sek - low_tax_dividend)

    return YearCalculation(
        **year_input.model_dump(include=set(YearInput.model_fields)),
        year=year_number,
        gross_salary_yearly=gross_salary_yearly,
        employer_contribution_yearly=employer_contribution_yearly,
        tax_amount=tax_amount,
        net_salary_yearly=net_salary_yearly,
        costs_yearly=costs_yearly,
        billed_yearly=billed_yearly,
        surplus_before_buffer=surplus_before_buffer,
        buffer_yearly=buffer_yearly,
        surplus_yearly=surplus_yearly,
        corporate_tax_amount=corporate_tax_amount,
        net_profit_yearly=net_profit_yearly,
        opening_equity=opening_equity,
        max_dividend_by_equity=max_dividend_by_equity,
        wage_floor=wage_floor,
        eligible_for_main_rule=eligible_for_main_rule,
        simplified_rule_allowance=simplified_rule_allowance,
        main_rule_allowance=main_rule_allowance,
        carried_forward_allowance=carried_forward_allowance,
        dividend_allowance_sek=dividend_allowance_sek,
        dividend_allowance_pct=dividend_allowance_pct,
        gross_dividend=gross_dividend,
        low_tax_dividend=low_tax_dividend,
        high_tax_dividend=high_tax_dividend,
        net_dividend=net_dividend,
        total_net_monthly=total_net_monthly,
        equivalent_gross_salary_monthly=equivalent_gross_salary_monthly,
        closing_equity=closing_equity,
        saved_dividend_allowance=saved_dividend_allowance,
    )


def calculate_all_years(
    year_inputs: List[YearInput],
    settings: GlobalSettings,
) -> List[YearCalculation]:
    """Calculate every year in order, carrying equity and allowance forward.

    Year i+1 depends on year i, so the years are folded strictly in sequence.
    """
    results: List[YearCalculation] = []
    previous: Optional[YearCalculation] = None
    for year_number, year_input in enumerate(year_inputs, start=1):
        previous = calculate_year(year_input, settings, previous, year_number)
        results.append(previous)

    if results:
        logger.debug(
            f"Planned {len(results)} year(s): closing equity {results[-1].closing_equity:.0f}, "
            f"saved allowance {results[-1].saved_dividend_allowance:.0f}"
        )
    return results


def summarize_plan(years: List[YearCalculation]) -> PlanTotals:
    """Total net salary and net dividend over a plan."""
    total_net_salary = sum(y.net_salary_yearly for y in years)
    total_net_dividend = sum(y.net_dividend for y in years)
    return PlanTotals(
        years=len(years),
        total_net_salary=total_net_salary,
        total_net_dividend=total_net_dividend,
        total_net_to_owner=total_net_salary + total_net_dividend,
    )
