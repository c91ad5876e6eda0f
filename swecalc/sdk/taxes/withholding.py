"""Monthly tax withholding from Skatteverket tax tables.

The national withholding tables (skattetabeller) list, per monthly income
bracket, the tax to withhold in each of seven columns (column 1: salary
for people under 66, column 2: pension for 66+, ...). Raw rows arrive with
every value as a string; parse_tax_table converts them once so the lookup
works on numbers only.
"""

import json
import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Iterable, List, Optional

from ..schemas import MunicipalRate, NetSalaryResult, TaxTableEntry

logger = logging.getLogger(__name__)

TAX_COLUMNS = {
    1: "Salary (under 66)",
    2: "Pension (66 and over)",
    3: "Salary (66 and over)",
    4: "Sickness/activity compensation (under 66)",
    5: "Unemployment benefit and similar",
    6: "Pension (under 66)",
    7: "Other",
}

# Raw column names in the Skatteverket dataset
_FROM_KEY = "inkomst fr.o.m."
_TO_KEY = "inkomst t.o.m."
_TABLE_KEY = "tabellnr"
_DAYS_KEY = "antal dgr"
_YEAR_KEY = "år"

_NON_NUMERIC = re.compile(r"[^\d-]")


class EmptyTaxTableError(ValueError):
    """Raised when a withholding lookup is attempted on an empty table."""
    pass


class InvalidTaxTableError(ValueError):
    """Raised when a saved tax table file cannot be read as JSON."""
    pass


def _to_amount(value: Any) -> float:
    """Parse a whole-SEK amount, dropping spaces and other separators.

    Unparseable values become 0, matching how the dataset is cleaned.
    """
    if isinstance(value, (int, float)):
        return float(value)
    cleaned = _NON_NUMERIC.sub("", str(value if value is not None else ""))
    try:
        return float(int(cleaned))
    except ValueError:
        return 0.0


def parse_tax_table(rows: Iterable[Dict[str, Any]]) -> List[TaxTableEntry]:
    """Convert raw withholding-table rows into typed entries.

    Args:
        rows: Dicts as returned by the Skatteverket row store, e.g.
              {"inkomst fr.o.m.": "20001", "inkomst t.o.m.": "20200",
               "kolumn 1": "3468", ..., "tabellnr": "32", "år": "2025"}

    Returns:
        Entries sorted by ascending income_from
    """
    entries = []
    for row in rows:
        if _FROM_KEY not in row or _TO_KEY not in row:
            logger.warning(f"Skipping tax table row without income bounds: {row}")
            continue
        year = _to_amount(row.get(_YEAR_KEY)) if row.get(_YEAR_KEY) else None
        entries.append(TaxTableEntry(
            income_from=_to_amount(row[_FROM_KEY]),
            income_to=_to_amount(row[_TO_KEY]),
            columns=tuple(_to_amount(row.get(f"kolumn {n}", 0)) for n in range(1, 8)),
            table_number=str(row.get(_TABLE_KEY, "")).strip(),
            day_count=str(row.get(_DAYS_KEY, "")).strip(),
            year=int(year) if year else None,
        ))

    entries.sort(key=lambda e: e.income_from)
    logger.debug(f"Parsed {len(entries)} tax table rows")
    return entries


def lookup_withholding(
    gross_income: float,
    table: List[TaxTableEntry],
    column: int,
) -> float:
    """Look up the monthly withholding for an income in a tax table.

    Args:
        gross_income: Monthly taxable income, SEK
        table: Parsed tax table, sorted by ascending income
        column: Table column 1..7

    Returns:
        Withholding amount. 0 below the first bracket; the last row's
        amount above the last bracket.

    Raises:
        EmptyTaxTableError: If table is empty
        ValueError: If column is outside 1..7
    """
    if not table:
        raise EmptyTaxTableError("Tax table is empty; load a table before calculating tax")
    if column not in TAX_COLUMNS:
        raise ValueError(f"Invalid tax table column {column}. Must be 1-7.")

    for entry in table:
        if entry.income_from <= gross_income <= entry.income_to:
            return entry.withholding(column)

    if gross_income < table[0].income_from:
        return 0.0
    return table[-1].withholding(column)


def calculate_net_salary(
    gross_salary: float,
    table: List[TaxTableEntry],
    column: int = 1,
    municipality: Optional[MunicipalRate] = None,
    church_member: bool = False,
) -> NetSalaryResult:
    """Calculate monthly net salary after table withholding.

    When a municipality is given, its rate components are included in the
    result for display next to the table-based withholding.
    """
    tax_deduction = lookup_withholding(gross_salary, table, column)
    tax_rate = (tax_deduction / gross_salary) * 100 if gross_salary > 0 else 0.0

    result = {
        "gross_salary": gross_salary,
        "tax_deduction": tax_deduction,
        "net_salary": gross_salary - tax_deduction,
        "tax_rate": tax_rate,
    }
    if municipality is not None:
        church = municipality.church_tax if church_member else 0.0
        result.update(
            municipal_tax=municipality.municipal_tax,
            county_tax=municipality.county_tax,
            church_tax=church,
            total_tax_rate=municipality.total_rate(church_member),
        )
    return NetSalaryResult(**result)


def table_number_for(total_rate: float) -> str:
    """Tax table number for a total local tax rate.

    Tables are numbered by whole percent; 32.5 % uses table 33.
    """
    if math.isnan(total_rate) or total_rate < 0:
        raise ValueError(f"Invalid tax rate: {total_rate}")
    rounded = Decimal(str(total_rate)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return str(int(rounded))


def load_tax_table(path) -> List[TaxTableEntry]:
    """Load and parse a withholding table saved as JSON.

    Accepts either a list of rows or the row-store response shape
    {"results": [...]}.

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidTaxTableError: If the file is not valid JSON
        EmptyTaxTableError: If the file holds no rows
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidTaxTableError(f"Invalid JSON in tax table {path}: {e}") from e

    rows = data.get("results", []) if isinstance(data, dict) else data
    table = parse_tax_table(rows)
    if not table:
        raise EmptyTaxTableError(f"No tax table rows in {path}")
    return table
