"""Pydantic schemas for swe-calc data validation.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in plan files cause clear errors rather than silent ignoring.

Input models accept both snake_case and the camelCase spelling used by
the web calculators (e.g. ``grossSalaryMonthly``), so plans exported from
there load unchanged. Validation is the one normalization boundary: the
calculators never look up alternate keys or fill in defaults themselves.
"""

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# =============================================================================
# Dividend planning (3:12)
# =============================================================================


class GlobalSettings(BaseModel):
    """Settings shared by every year of a planning session."""

    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    municipality: Optional[str] = Field(default=None, description="Municipality name (informational)")
    municipal_tax: float = Field(..., ge=0, description="Municipal tax % (or total local rate)")
    county_tax: float = Field(default=0, ge=0, description="County/region tax %")
    church_member: bool = Field(default=False, description="Add church tax to the salary tax rate")
    church_tax: float = Field(default=0, ge=0, description="Church fee %")
    total_tax_rate: Optional[float] = Field(
        default=None, ge=0,
        description="Explicit salary tax %; replaces municipal + county + church when set",
    )
    marginal_tax_rate: float = Field(..., ge=0, description="Marginal tax % for high-taxed dividend")
    employer_contribution: float = Field(..., ge=0, description="Employer contribution %")
    regional_support: bool = Field(
        default=False,
        description="Regional support: -10 pp and up to 7 100 SEK/month deduction",
    )
    ibb: float = Field(..., ge=0, description="Income base amount (inkomstbasbelopp), SEK")
    corporate_tax: float = Field(..., ge=0, description="Corporate tax %")
    share_acquisition_value: float = Field(default=0, ge=0, description="Cost basis of shares, SEK")
    opening_free_equity: float = Field(default=0, ge=0, description="Free equity at start of year 1, SEK")
    number_of_years: int = Field(default=3, ge=1, le=10, description="Years to plan")
    total_cash_salaries_yearly: Optional[float] = Field(
        default=None, ge=0,
        description="Payroll base for the main rule; defaults to each year's gross salary",
    )

    @property
    def salary_tax_rate(self) -> float:
        """Effective salary tax %: explicit override or sum of the parts."""
        if self.total_tax_rate is not None:
            return self.total_tax_rate
        church = self.church_tax if self.church_member else 0
        return self.municipal_tax + self.county_tax + church


class YearInput(BaseModel):
    """User-editable inputs for one planned fiscal year.

    Values are not range-checked here; the planning engine clamps them.
    """

    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    hourly_rate: float = Field(default=0, description="Billed hourly rate, SEK")
    hours_per_month: float = Field(default=0, description="Billed hours per month")
    gross_salary_monthly: float = Field(default=0, description="Owner's monthly gross salary, SEK")
    other_costs_monthly: float = Field(default=0, description="Company overhead per month, SEK")
    buffer_percent: float = Field(default=0, description="% of surplus retained as buffer")
    dividend_percent: float = Field(default=0, description="% of distributable equity paid out")


class YearCalculation(YearInput):
    """Derived figures for one year. Immutable once returned."""

    model_config = ConfigDict(frozen=True)

    year: int = Field(..., ge=1, description="1-based position in the plan")
    gross_salary_yearly: float
    employer_contribution_yearly: float
    tax_amount: float
    net_salary_yearly: float
    costs_yearly: float
    billed_yearly: float
    surplus_before_buffer: float = Field(..., description="May be negative")
    buffer_yearly: float
    surplus_yearly: float
    corporate_tax_amount: float
    net_profit_yearly: float
    opening_equity: float
    max_dividend_by_equity: float
    wage_floor: float
    eligible_for_main_rule: bool
    simplified_rule_allowance: float
    main_rule_allowance: float
    carried_forward_allowance: float
    dividend_allowance_sek: float
    dividend_allowance_pct: float
    gross_dividend: float
    low_tax_dividend: float
    high_tax_dividend: float
    net_dividend: float
    total_net_monthly: float
    equivalent_gross_salary_monthly: float
    closing_equity: float
    saved_dividend_allowance: float


class PlanTotals(BaseModel):
    """Sums across all planned years."""

    model_config = ConfigDict(extra="forbid")

    years: int
    total_net_salary: float
    total_net_dividend: float
    total_net_to_owner: float


class PlanFile(BaseModel):
    """A saved planning session: settings plus one input per year."""

    model_config = ConfigDict(extra="forbid")

    settings: GlobalSettings
    years: List[YearInput] = Field(..., min_length=1)

    def resolved_years(self) -> List[YearInput]:
        """Inputs sized to settings.number_of_years.

        Extra inputs are dropped; missing ones repeat the last input.
        """
        count = self.settings.number_of_years
        years = list(self.years[:count])
        while len(years) < count:
            years.append(years[-1].model_copy())
        return years


# =============================================================================
# Reference data (parsed once at the collaborator boundary)
# =============================================================================


class TaxTableEntry(BaseModel):
    """One row of a Skatteverket withholding table (skattetabell)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    income_from: float = Field(..., description="Lower bound of monthly income, inclusive")
    income_to: float = Field(..., description="Upper bound of monthly income, inclusive")
    columns: Tuple[float, float, float, float, float, float, float] = Field(
        ..., description="Withholding per column 1..7"
    )
    table_number: str = Field(default="", description="Table number (tabellnr)")
    day_count: str = Field(default="", description="Period type (antal dgr)")
    year: Optional[int] = None

    def withholding(self, column: int) -> float:
        return self.columns[column - 1]


class MunicipalRate(BaseModel):
    """Local tax rates for one municipality."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    municipal_tax: float = Field(default=0, ge=0)
    county_tax: float = Field(default=0, ge=0)
    church_tax: float = Field(default=0, ge=0)
    burial_fee: float = Field(default=0, ge=0)
    year: Optional[int] = None

    def total_rate(self, church_member: bool = False) -> float:
        church = self.church_tax if church_member else 0
        return self.municipal_tax + self.county_tax + church


class NetSalaryResult(BaseModel):
    """Monthly salary after table withholding."""

    model_config = ConfigDict(extra="forbid")

    gross_salary: float
    tax_deduction: float
    net_salary: float
    tax_rate: float = Field(..., description="Withholding as % of gross")
    municipal_tax: Optional[float] = None
    county_tax: Optional[float] = None
    church_tax: Optional[float] = None
    total_tax_rate: Optional[float] = None


# =============================================================================
# Hourly rate
# =============================================================================


class HourlyRateInput(BaseModel):
    """Inputs for pricing work from a desired monthly net salary."""

    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    desired_net_salary: float = Field(..., description="Monthly net salary target, SEK")
    municipal_tax: float = Field(default=0, description="Flat salary tax % (may include county/church)")
    employer_contribution: float = Field(default=0, description="Employer contribution %")
    regional_support: bool = False
    business_costs: float = Field(default=0, description="Monthly business costs, SEK")
    billable_hours: float = Field(default=1, description="Billable hours per month")
    buffer_percentage: float = Field(default=0, description="Safety margin % on total cost")
    savings_goal: float = Field(default=0, description="Monthly savings into the company, SEK")


class HourlyRateResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    gross_salary: float
    employer_contributions: float
    total_monthly_cost: float
    hourly_rate: float
    hourly_rate_with_vat: float
    monthly_revenue: float
    annual_gross_salary: float
    annual_cost: float
    annual_revenue: float


# =============================================================================
# Company car (förmånsbil)
# =============================================================================


DeductionModel = Literal["brutto", "netto"]


class CarBenefitInput(BaseModel):
    """Monthly salary and car-benefit figures for the with/without comparison."""

    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    gross_salary: float = Field(..., description="Monthly gross salary, SEK")
    benefit_value: float = Field(..., ge=0, description="Monthly förmånsvärde, SEK")
    deduction_model: DeductionModel = "netto"
    brutto_deduction: float = Field(default=0, description="Gross-salary deduction per month")
    netto_deduction: float = Field(default=0, description="Net-salary deduction per month")
    private_leasing: float = Field(default=0, description="Comparable private leasing cost")
    business_leasing: float = Field(default=0, description="Comparable business leasing cost")
    employer_contribution: float = Field(default=31.42, ge=0)


class CarBenefitResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Without car
    net_salary_without_car: float
    tax_without_car: float

    # With car
    net_salary_with_car: float
    tax_with_car: float
    effective_benefit_value: float

    # Comparison
    monthly_difference: float
    compared_to_private_leasing: float
    compared_to_business_leasing: float

    # Employer costs
    employer_cost_benefit: float
    employer_cost_total: float

    # Details
    adjusted_gross_salary: float
    taxable_benefit: float
    private_payment: float


class CarRecord(BaseModel):
    """Vehicle price and tax figures used to estimate a benefit value."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    brand: str
    model: str
    model_year: int
    new_car_price: float = Field(..., ge=0, description="Nybilspris excl. VAT")
    vehicle_tax: float = Field(default=0, ge=0, description="Fordonsskatt per year")
    co2: float = 0
    fuel: str = ""


# =============================================================================
# Occupational pension (ITP 1)
# =============================================================================


class PensionResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    monthly_salary: float
    ibb: float
    ibb_threshold: float = Field(..., description="7.5 IBB per month")
    salary_up_to_threshold: float
    salary_above_threshold: float
    lower_part: float
    higher_part: float
    total_monthly: float
    total_yearly: float
    percentage_of_salary: float

    @model_validator(mode="after")
    def check_parts(self) -> "PensionResult":
        if abs(self.lower_part + self.higher_part - self.total_monthly) > 0.01:
            raise ValueError("lower_part + higher_part != total_monthly")
        return self
