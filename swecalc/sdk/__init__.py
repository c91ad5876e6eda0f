"""Swe Calc SDK - Swedish salary, dividend and company-car calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    get_plan_path,
    parse_plan,
    load_plan,
    save_plan,
    normalize_settings,
    PlanNotFoundError,
    PlanValidationError,
    DEFAULT_PLAN,
)

from .schemas import (
    GlobalSettings,
    YearInput,
    YearCalculation,
    PlanFile,
    PlanTotals,
    TaxTableEntry,
    MunicipalRate,
    NetSalaryResult,
    HourlyRateInput,
    HourlyRateResult,
    CarBenefitInput,
    CarBenefitResult,
    CarRecord,
    PensionResult,
)

from .taxes import (
    TAX_COLUMNS,
    EmptyTaxTableError,
    InvalidTaxTableError,
    parse_tax_table,
    load_tax_table,
    lookup_withholding,
    calculate_net_salary,
    table_number_for,
    TaxRules,
    TaxRulesNotFoundError,
    load_tax_rules,
    get_available_years,
)

from .dividends import (
    calculate_year,
    calculate_all_years,
    summarize_plan,
)

from .hourly_rate import (
    solve_hourly_rate,
    hourly_rate_scenarios,
)

from .company_car import (
    calculate_car_benefit,
    get_best_deduction_model,
    estimate_benefit_value,
    parse_car_records,
    find_car_record,
)

from .pension import calculate_occupational_pension

from .municipalities import (
    parse_municipalities,
    find_municipality,
)

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "get_plan_path",
    "parse_plan",
    "load_plan",
    "save_plan",
    "normalize_settings",
    "PlanNotFoundError",
    "PlanValidationError",
    "DEFAULT_PLAN",
    # Data model
    "GlobalSettings",
    "YearInput",
    "YearCalculation",
    "PlanFile",
    "PlanTotals",
    "TaxTableEntry",
    "MunicipalRate",
    "NetSalaryResult",
    "HourlyRateInput",
    "HourlyRateResult",
    "CarBenefitInput",
    "CarBenefitResult",
    "CarRecord",
    "PensionResult",
    # Tax tables and rules
    "TAX_COLUMNS",
    "EmptyTaxTableError",
    "InvalidTaxTableError",
    "parse_tax_table",
    "load_tax_table",
    "lookup_withholding",
    "calculate_net_salary",
    "table_number_for",
    "TaxRules",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "get_available_years",
    # Dividend planning
    "calculate_year",
    "calculate_all_years",
    "summarize_plan",
    # Hourly rate
    "solve_hourly_rate",
    "hourly_rate_scenarios",
    # Company car
    "calculate_car_benefit",
    "get_best_deduction_model",
    "estimate_benefit_value",
    "parse_car_records",
    "find_car_record",
    # Pension
    "calculate_occupational_pension",
    # Municipalities
    "parse_municipalities",
    "find_municipality",
]
