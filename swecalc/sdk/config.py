"""Configuration management for Swe Calc.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - plan: path to a plan file (optional, if not colocated)
   - default_output_format: "text" or "json"

2. plan.yaml - The user's dividend planning session
   - settings: tax rates, IBB, opening equity, number of years
   - years: one input block per planned year

Config directory resolution:
1. SWE_CALC_CONFIG_PATH environment variable (if set)
2. ~/.config/swe-calc/ (XDG_CONFIG_HOME fallback)

Plan resolution:
1. Explicit path argument
2. settings.json "plan" key (if set via CLI)
3. plan.yaml in the config directory
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from .schemas import GlobalSettings, MunicipalRate, PlanFile

logger = logging.getLogger(__name__)

APP_NAME = "swe-calc"
SETTINGS_FILENAME = "settings.json"
PLAN_FILENAME = "plan.yaml"

DEFAULT_PLAN = {
    "settings": {
        "municipal_tax": 32.0,
        "church_member": False,
        "church_tax": 1.0,
        "marginal_tax_rate": 50.0,
        "employer_contribution": 31.42,
        "regional_support": False,
        "ibb": 80600,
        "corporate_tax": 20.6,
        "share_acquisition_value": 25000,
        "opening_free_equity": 0,
        "number_of_years": 3,
    },
    "years": [
        {"hourly_rate": 750, "hours_per_month": 133, "gross_salary_monthly": 50000,
         "other_costs_monthly": 15000, "buffer_percent": 10, "dividend_percent": 5},
        {"hourly_rate": 800, "hours_per_month": 133, "gross_salary_monthly": 50000,
         "other_costs_monthly": 15000, "buffer_percent": 10, "dividend_percent": 10},
        {"hourly_rate": 850, "hours_per_month": 133, "gross_salary_monthly": 50000,
         "other_costs_monthly": 15000, "buffer_percent": 10, "dividend_percent": 15},
    ],
}


class PlanNotFoundError(FileNotFoundError):
    """Raised when no plan file is found."""
    pass


class PlanValidationError(ValueError):
    """Raised when a plan cannot be parsed or does not match the plan schema."""
    pass


def get_config_dir() -> Path:
    """Directory holding settings.json and the default plan.

    SWE_CALC_CONFIG_PATH wins; otherwise swe-calc/ under XDG_CONFIG_HOME
    (~/.config when unset).
    """
    override = os.environ.get("SWE_CALC_CONFIG_PATH")
    if override:
        return Path(override)
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / APP_NAME


def get_settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Current settings.json contents; {} before anything has been saved."""
    path = get_settings_path()
    if not path.exists():
        return {}
    with open(path, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Replace settings.json, creating the config directory on first use."""
    path = get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings, f, indent=2)
    return path


def get_setting(key: str, default: Any = None) -> Any:
    return load_settings().get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Update one key, keeping the others."""
    return save_settings({**load_settings(), key: value})


def get_plan_path(require_exists: bool = False) -> Path:
    """Get the path to the default plan file.

    Resolution order:
    1. settings.json "plan" key (if set)
    2. plan.yaml in config directory

    Args:
        require_exists: If True, raises PlanNotFoundError if not found

    Raises:
        PlanNotFoundError: If require_exists=True and no plan found
    """
    custom_plan = get_setting("plan")
    if custom_plan:
        plan_path = Path(custom_plan)
        if require_exists and not plan_path.exists():
            raise PlanNotFoundError(
                f"Plan not found at configured path: {plan_path}\n\n"
                f"Update with: swe-calc settings plan /path/to/plan.yaml"
            )
        return plan_path

    plan_path = get_config_dir() / PLAN_FILENAME
    if require_exists and not plan_path.exists():
        raise PlanNotFoundError(
            f"No plan found. Checked:\n"
            f"  1. settings.json 'plan' key (not set)\n"
            f"  2. {plan_path} (not found)\n\n"
            f"Create one with: swe-calc plan --init\n"
            f"Or set a custom path: swe-calc settings plan /path/to/plan.yaml"
        )
    return plan_path


def parse_plan(data: dict) -> PlanFile:
    """Validate raw plan data (from YAML or JSON).

    Raises:
        PlanValidationError: If the data does not match the plan schema
    """
    try:
        return PlanFile.model_validate(data or {})
    except ValidationError as e:
        raise PlanValidationError(f"Invalid plan: {e}") from e


def load_plan(path: Optional[Path] = None) -> PlanFile:
    """Load and validate a plan file.

    Args:
        path: Plan file; defaults to the configured plan

    Raises:
        PlanNotFoundError: If the file does not exist
        PlanValidationError: If the file is not valid YAML or does not match the plan schema
    """
    if path is None:
        path = get_plan_path(require_exists=True)
    path = Path(path)
    if not path.exists():
        raise PlanNotFoundError(f"Plan file not found: {path}")

    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PlanValidationError(f"Invalid plan: {path} is not valid YAML: {e}") from e

    plan = parse_plan(data)
    logger.debug(f"Loaded plan {path} ({len(plan.years)} year input(s))")
    return plan


def save_plan(plan: dict, path: Optional[Path] = None) -> Path:
    """Validate and save a plan to YAML.

    Returns:
        Path to the saved plan file
    """
    parse_plan(plan)
    if path is None:
        path = get_plan_path(require_exists=False)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(plan, f, default_flow_style=False, sort_keys=False)

    return path


def normalize_settings(
    raw: dict,
    municipality: Optional[MunicipalRate] = None,
) -> GlobalSettings:
    """Build GlobalSettings from raw values, optionally taking local rates
    from a municipality.

    Municipality rates fill municipal_tax, county_tax and church_tax unless
    the raw values set them explicitly.

    Raises:
        PlanValidationError: If the values do not match the settings schema
    """
    values = dict(raw)
    if municipality is not None:
        local = {
            "municipality": municipality.name,
            "municipal_tax": municipality.municipal_tax,
            "county_tax": municipality.county_tax,
            "church_tax": municipality.church_tax,
        }
        for key, value in local.items():
            if key not in values and to_camel(key) not in values:
                values[key] = value
    try:
        return GlobalSettings.model_validate(values)
    except ValidationError as e:
        raise PlanValidationError(f"Invalid settings: {e}") from e
