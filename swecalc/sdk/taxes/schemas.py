"""Pydantic schemas for tax rules validation.

These schemas validate the tax_rules/*.yaml files and provide typed access
to yearly reference amounts like the income base amount, K10 allowance
figures and ITP 1 pension rates.
"""

from pydantic import BaseModel, ConfigDict, Field


class SalaryRequirement(BaseModel):
    """Minimum owner salary for the K10 main rule."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    fixed: float = Field(..., ge=0, description="9.6 x IBB")
    alternative: float = Field(..., ge=0, description="6 x IBB, plus 5% of total payroll")


class K10Rules(BaseModel):
    """Close-company (3:12) dividend figures from blankett K10."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    ibb: float = Field(..., gt=0, description="Prior-year IBB the 3:12 rules are based on")
    simplified_allowance: float = Field(..., ge=0, description="Gränsbelopp under the simplified rule")
    uplift_percent: float = Field(..., ge=100, description="Uplift on saved allowance, e.g. 104.96")
    main_rule_interest: float = Field(..., ge=0, description="% of acquisition value under the main rule")
    dividend_ceiling: float = Field(..., ge=0)
    capital_gain_ceiling: float = Field(..., ge=0)
    salary_requirement: SalaryRequirement


class ItpRules(BaseModel):
    """ITP 1 occupational pension contribution rates."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    threshold_ibb: float = Field(default=7.5, gt=0, description="Yearly threshold in IBB")
    lower_rate: float = Field(..., ge=0, le=100, description="% below the threshold")
    higher_rate: float = Field(..., ge=0, le=100, description="% above the threshold")


class TaxRules(BaseModel):
    """Complete reference amounts for an income year."""
    model_config = ConfigDict(extra="ignore", frozen=True)  # Allow unknown fields for forward compat

    year: int
    ibb: float = Field(..., gt=0)
    employer_contribution: float = Field(..., ge=0)
    corporate_tax: float = Field(..., ge=0)
    vat: float = Field(default=25, ge=0)
    k10: K10Rules
    itp: ItpRules
