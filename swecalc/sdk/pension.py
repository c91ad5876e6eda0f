"""Occupational pension (ITP 1) premium estimate."""

from .schemas import PensionResult

THRESHOLD_IBB = 7.5
LOWER_RATE = 4.5
HIGHER_RATE = 30.0


def calculate_occupational_pension(
    monthly_salary: float,
    ibb: float,
    lower_rate: float = LOWER_RATE,
    higher_rate: float = HIGHER_RATE,
    threshold_ibb: float = THRESHOLD_IBB,
) -> PensionResult:
    """Monthly ITP 1 premium for a salary.

    The lower rate applies to salary up to 7.5 income base amounts per year
    (computed per month), the higher rate to the part above.

    Args:
        monthly_salary: Gross monthly salary, SEK
        ibb: Income base amount for the year, SEK
        lower_rate: % below the threshold
        higher_rate: % above the threshold
        threshold_ibb: Yearly threshold expressed in IBB
    """
    salary = max(0.0, monthly_salary)
    ibb_threshold = max(0.0, ibb) * threshold_ibb / 12
    up_to = min(salary, ibb_threshold)
    above = max(0.0, salary - ibb_threshold)

    lower_part = up_to * lower_rate / 100
    higher_part = above * higher_rate / 100
    total_monthly = lower_part + higher_part

    return PensionResult(
        monthly_salary=salary,
        ibb=ibb,
        ibb_threshold=ibb_threshold,
        salary_up_to_threshold=up_to,
        salary_above_threshold=above,
        lower_part=lower_part,
        higher_part=higher_part,
        total_monthly=total_monthly,
        total_yearly=total_monthly * 12,
        percentage_of_salary=(total_monthly / salary) * 100 if salary > 0 else 0.0,
    )
