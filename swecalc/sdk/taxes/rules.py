"""Yearly reference amounts loaded from tax_rules/YYYY.yaml."""

import logging
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from .schemas import TaxRules

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(FileNotFoundError):
    """Raised when no rules file covers the requested year."""
    pass


def get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> swecalc


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=None)
def load_tax_rules(year: int) -> TaxRules:
    """Load reference amounts for an income year.

    Falls back to the nearest earlier year when the requested year has no
    file (amounts from the latest published year are the best estimate).

    Raises:
        TaxRulesNotFoundError: If no file exists for the year or any earlier year
        ValueError: If the file fails schema validation
    """
    target = int(year)
    candidates = [y for y in get_available_years() if y <= target]
    if not candidates:
        raise TaxRulesNotFoundError(
            f"Tax rules not found for year {target} or earlier in {get_tax_rules_dir()}"
        )

    source_year = candidates[0]
    if source_year != target:
        logger.info(f"No tax rules for {target}, using {source_year}")

    rules_file = get_tax_rules_dir() / f"{source_year}.yaml"
    with open(rules_file, "r") as f:
        data = yaml.safe_load(f)

    try:
        rules = TaxRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid tax rules in {rules_file}: {e}") from e

    logger.debug(f"Loaded tax rules for {target} from {rules_file.name}")
    return rules
