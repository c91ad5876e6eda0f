"""taxes - Withholding tables and yearly reference amounts.

Scope:
- Monthly withholding lookup in Skatteverket tax tables (skattetabeller)
- Parsing raw tax-table rows into typed entries
- Net salary after withholding
- Yearly reference amounts (IBB, K10, ITP 1) from tax_rules/{year}.yaml

Constraints:
- Pure calculation - tables are passed in, never fetched here
- Raw rows are parsed once by parse_tax_table; lookups see numbers only

Usage:
    from swecalc.sdk.taxes import parse_tax_table, lookup_withholding

    table = parse_tax_table(rows)
    tax = lookup_withholding(45000, table, column=1)
    rules = load_tax_rules(2025)
"""

# Withholding table lookups
from .withholding import (
    TAX_COLUMNS,
    EmptyTaxTableError,
    InvalidTaxTableError,
    parse_tax_table,
    load_tax_table,
    lookup_withholding,
    calculate_net_salary,
    table_number_for,
)

# Tax rules schemas
from .schemas import TaxRules

# Tax rules loading
from .rules import (
    TaxRulesNotFoundError,
    load_tax_rules,
    get_available_years,
)

__all__ = [
    # Withholding
    "TAX_COLUMNS",
    "EmptyTaxTableError",
    "InvalidTaxTableError",
    "parse_tax_table",
    "load_tax_table",
    "lookup_withholding",
    "calculate_net_salary",
    "table_number_for",
    # Rules
    "TaxRules",
    "TaxRulesNotFoundError",
    "load_tax_rules",
    "get_available_years",
]
