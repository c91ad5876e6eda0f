"""Company car benefit (förmånsbil) comparison.

Compares monthly net salary with and without a company car. The car's
benefit value (förmånsvärde) is taxable income; the employee can offset
it either by a gross-salary deduction (bruttolöneavdrag), which lowers
taxable salary, or by a net-salary deduction (nettolöneavdrag), which
lowers the taxable benefit but is paid from after-tax income.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

from .schemas import CarBenefitInput, CarBenefitResult, CarRecord, DeductionModel, TaxTableEntry
from .taxes.withholding import lookup_withholding

logger = logging.getLogger(__name__)

# Simplified benefit value: 9% of price per year plus vehicle tax
PRICE_SHARE = 0.09
MILEAGE_REDUCTION_FACTOR = 0.75  # 3 000 mil or more of business driving


def calculate_car_benefit(
    car_input: CarBenefitInput,
    table: List[TaxTableEntry],
    column: int,
) -> CarBenefitResult:
    """Compare net salary with and without the car under one deduction model.

    Raises:
        EmptyTaxTableError: If table is empty
    """
    gross_salary = car_input.gross_salary
    benefit_value = car_input.benefit_value
    contribution = car_input.employer_contribution / 100

    # Without car
    tax_without_car = lookup_withholding(gross_salary, table, column)
    net_salary_without_car = gross_salary - tax_without_car

    # With car
    if car_input.deduction_model == "brutto":
        adjusted_gross_salary = max(0.0, gross_salary - car_input.brutto_deduction)
        effective_benefit_value = benefit_value
        private_payment = 0.0
    else:
        adjusted_gross_salary = gross_salary
        netto_deduction = max(0.0, car_input.netto_deduction)
        effective_benefit_value = max(0.0, benefit_value - netto_deduction)
        private_payment = min(netto_deduction, benefit_value)
    taxable_benefit = effective_benefit_value

    tax_with_car = lookup_withholding(max(0.0, adjusted_gross_salary + taxable_benefit), table, column)
    net_salary_with_car = adjusted_gross_salary - tax_with_car - private_payment

    employer_cost_benefit = effective_benefit_value * contribution
    employer_cost_total = adjusted_gross_salary * contribution + employer_cost_benefit

    monthly_difference = net_salary_with_car - net_salary_without_car
    compared_to_private = monthly_difference + car_input.private_leasing if car_input.private_leasing > 0 else 0.0
    compared_to_business = monthly_difference + car_input.business_leasing if car_input.business_leasing > 0 else 0.0

    return CarBenefitResult(
        net_salary_without_car=net_salary_without_car,
        tax_without_car=tax_without_car,
        net_salary_with_car=net_salary_with_car,
        tax_with_car=tax_with_car,
        effective_benefit_value=effective_benefit_value,
        monthly_difference=monthly_difference,
        compared_to_private_leasing=compared_to_private,
        compared_to_business_leasing=compared_to_business,
        employer_cost_benefit=employer_cost_benefit,
        employer_cost_total=employer_cost_total,
        adjusted_gross_salary=adjusted_gross_salary,
        taxable_benefit=taxable_benefit,
        private_payment=private_payment,
    )


def get_best_deduction_model(
    car_input: CarBenefitInput,
    table: List[TaxTableEntry],
    column: int,
) -> DeductionModel:
    """Deduction model giving the higher net salary with car (netto on ties)."""
    brutto = calculate_car_benefit(car_input.model_copy(update={"deduction_model": "brutto"}), table, column)
    netto = calculate_car_benefit(car_input.model_copy(update={"deduction_model": "netto"}), table, column)
    return "brutto" if brutto.net_salary_with_car > netto.net_salary_with_car else "netto"


def estimate_benefit_value(
    new_car_price: float,
    vehicle_tax: float,
    extra_equipment: float = 0,
    mileage_reduction: bool = False,
) -> int:
    """Estimate the monthly benefit value, rounded to whole SEK.

    Simplified: (price + extra equipment) * 9% / 12 + vehicle tax / 12,
    reduced by 25% with at least 3 000 mil of business driving. The
    official rule also adds a share of the government interest rate and
    a prisbasbelopp term; use the published value when it is known.
    """
    monthly = (new_car_price + extra_equipment) * PRICE_SHARE / 12 + vehicle_tax / 12
    if mileage_reduction:
        monthly *= MILEAGE_REDUCTION_FACTOR
    return int(Decimal(str(monthly)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


# =============================================================================
# Vehicle records
# =============================================================================


_NON_NUMERIC = re.compile(r"[^\d.-]")


def _to_number(value: Any) -> float:
    cleaned = _NON_NUMERIC.sub("", str(value if value is not None else ""))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def parse_car_record(row: Dict[str, Any]) -> Optional[CarRecord]:
    """Parse a raw vehicle row (Fabrikat, Modell, Modellår, ...).

    Returns None for rows missing brand, model, year or price.
    """
    brand = str(row.get("Fabrikat") or "").strip()
    model = str(row.get("Modell") or "").strip()
    model_year = int(_to_number(row.get("Modellår")))
    price = _to_number(row.get("Nybilspris exkl moms"))

    if not brand or not model or model_year <= 0 or price <= 0:
        return None

    return CarRecord(
        brand=brand,
        model=model,
        model_year=model_year,
        new_car_price=price,
        vehicle_tax=max(0.0, _to_number(row.get("Fordonsskatt"))),
        co2=_to_number(row.get("CO2-utsläpp")),
        fuel=str(row.get("Drivmedel") or "").strip(),
    )


def parse_car_records(rows: Iterable[Dict[str, Any]]) -> List[CarRecord]:
    """Parse vehicle rows, skipping incomplete ones."""
    records = []
    skipped = 0
    for row in rows:
        record = parse_car_record(row)
        if record is None:
            skipped += 1
            continue
        records.append(record)
    if skipped:
        logger.debug(f"Skipped {skipped} incomplete vehicle row(s)")
    return records


def find_car_record(
    records: Iterable[CarRecord],
    brand: str,
    model: str,
    model_year: int,
) -> Optional[CarRecord]:
    """Find a vehicle by brand and model (case-insensitive) and year."""
    brand_lower = brand.strip().lower()
    model_lower = model.strip().lower()
    for record in records:
        if (record.brand.lower() == brand_lower
                and record.model.lower() == model_lower
                and record.model_year == model_year):
            return record
    return None
