"""Tests for settings.json and plan file handling."""

import json

import pytest
import yaml

from swecalc.sdk import config
from swecalc.sdk.config import (
    DEFAULT_PLAN,
    PlanNotFoundError,
    PlanValidationError,
    get_config_dir,
    get_plan_path,
    get_setting,
    load_plan,
    normalize_settings,
    parse_plan,
    save_plan,
    set_setting,
)
from swecalc.sdk.schemas import MunicipalRate


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Point the config directory at a temp dir."""
    path = tmp_path / "config"
    monkeypatch.setenv("SWE_CALC_CONFIG_PATH", str(path))
    return path


class TestConfigDir:

    def test_env_override(self, config_dir):
        assert get_config_dir() == config_dir

    def test_xdg_fallback(self, tmp_path, monkeypatch):
        monkeypatch.delenv("SWE_CALC_CONFIG_PATH", raising=False)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_dir() == tmp_path / config.APP_NAME


class TestSettings:

    def test_missing_file(self, config_dir):
        assert get_setting("plan") is None
        assert get_setting("default_output_format", "text") == "text"

    def test_set_and_get(self, config_dir):
        saved = set_setting("default_output_format", "json")
        assert json.loads(saved.read_text()) == {"default_output_format": "json"}
        assert get_setting("default_output_format") == "json"


class TestPlanFiles:

    def test_default_plan_path(self, config_dir):
        assert get_plan_path() == config_dir / "plan.yaml"

    def test_custom_plan_path(self, config_dir, tmp_path):
        custom = tmp_path / "elsewhere.yaml"
        set_setting("plan", str(custom))
        assert get_plan_path() == custom

    def test_missing_plan(self, config_dir):
        with pytest.raises(PlanNotFoundError, match="swe-calc plan --init"):
            load_plan()

    def test_save_and_load(self, config_dir):
        path = save_plan(DEFAULT_PLAN)
        assert path == config_dir / "plan.yaml"

        plan = load_plan()
        assert plan.settings.ibb == 80600
        assert len(plan.years) == 3
        assert plan.years[0].hourly_rate == 750

    def test_load_explicit_path(self, tmp_path):
        path = tmp_path / "plan.yaml"
        path.write_text(yaml.dump(DEFAULT_PLAN))
        assert load_plan(path).settings.number_of_years == 3

    def test_load_missing_explicit_path(self, tmp_path):
        with pytest.raises(PlanNotFoundError):
            load_plan(tmp_path / "nope.yaml")

    def test_camel_case_plan(self, tmp_path):
        path = tmp_path / "plan.yaml"
        path.write_text(yaml.dump({
            "settings": {"municipalTax": 32, "marginalTaxRate": 50, "employerContribution": 31.42,
                         "ibb": 80600, "corporateTax": 20.6, "numberOfYears": 1},
            "years": [{"hourlyRate": 900, "hoursPerMonth": 120, "grossSalaryMonthly": 45000}],
        }))
        plan = load_plan(path)
        assert plan.years[0].gross_salary_monthly == 45000

    def test_load_rejects_malformed_yaml(self, tmp_path):
        path = tmp_path / "plan.yaml"
        path.write_text("settings: [unclosed\n")
        with pytest.raises(PlanValidationError, match="not valid YAML"):
            load_plan(path)

    def test_save_rejects_invalid_plan(self, config_dir):
        with pytest.raises(PlanValidationError):
            save_plan({"settings": DEFAULT_PLAN["settings"], "years": []})
        assert not (config_dir / "plan.yaml").exists()


class TestParsePlan:

    def test_unknown_key(self):
        data = {**DEFAULT_PLAN, "notes": "hello"}
        with pytest.raises(PlanValidationError):
            parse_plan(data)

    def test_unknown_year_key(self):
        data = {"settings": DEFAULT_PLAN["settings"], "years": [{"hourly_rte": 700}]}
        with pytest.raises(PlanValidationError):
            parse_plan(data)

    def test_number_of_years_bounds(self):
        settings = {**DEFAULT_PLAN["settings"], "number_of_years": 11}
        with pytest.raises(PlanValidationError):
            parse_plan({"settings": settings, "years": DEFAULT_PLAN["years"]})

    def test_empty(self):
        with pytest.raises(PlanValidationError):
            parse_plan(None)


class TestResolvedYears:

    def test_truncates(self):
        settings = {**DEFAULT_PLAN["settings"], "number_of_years": 2}
        plan = parse_plan({"settings": settings, "years": DEFAULT_PLAN["years"]})
        assert [y.hourly_rate for y in plan.resolved_years()] == [750, 800]

    def test_pads_with_last_input(self):
        settings = {**DEFAULT_PLAN["settings"], "number_of_years": 5}
        plan = parse_plan({"settings": settings, "years": DEFAULT_PLAN["years"]})
        assert [y.hourly_rate for y in plan.resolved_years()] == [750, 800, 850, 850, 850]

    def test_stored_years_unchanged(self):
        settings = {**DEFAULT_PLAN["settings"], "number_of_years": 5}
        plan = parse_plan({"settings": settings, "years": DEFAULT_PLAN["years"]})
        plan.resolved_years()
        assert len(plan.years) == 3


class TestNormalizeSettings:

    RAW = {"marginal_tax_rate": 50, "employer_contribution": 31.42, "ibb": 80600, "corporate_tax": 20.6}

    def test_municipality_fills_rates(self):
        rate = MunicipalRate(name="UPPSALA", municipal_tax=21.14, county_tax=11.71, church_tax=1.24)
        settings = normalize_settings(self.RAW, municipality=rate)
        assert settings.municipality == "UPPSALA"
        assert settings.salary_tax_rate == pytest.approx(32.85)

    def test_explicit_values_win(self):
        rate = MunicipalRate(name="UPPSALA", municipal_tax=21.14, county_tax=11.71)
        settings = normalize_settings({**self.RAW, "municipalTax": 30}, municipality=rate)
        assert settings.municipal_tax == 30
        assert settings.county_tax == pytest.approx(11.71)

    def test_invalid(self):
        with pytest.raises(PlanValidationError):
            normalize_settings({**self.RAW, "municipal_tax": -1})
