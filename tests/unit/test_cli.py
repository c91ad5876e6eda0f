"""Tests for the swe-calc CLI commands."""

import json

import pytest
from click.testing import CliRunner

from swecalc.cli.__main__ import cli


def make_row(income_from, income_to, tax):
    row = {"inkomst fr.o.m.": str(income_from), "inkomst t.o.m.": str(income_to), "tabellnr": "32"}
    for n in range(1, 8):
        row[f"kolumn {n}"] = str(tax)
    return row


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Set up an isolated config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("SWE_CALC_CONFIG_PATH", str(config_dir))
    return config_dir


@pytest.fixture
def tax_table_file(tmp_path):
    path = tmp_path / "tax_table.json"
    rows = [make_row(20001, 30000, 4500), make_row(30001, 40000, 7500)]
    path.write_text(json.dumps({"results": rows}))
    return path


@pytest.fixture
def runner():
    return CliRunner()


class TestPlanCommand:

    def test_init_writes_plan(self, runner, isolated_config):
        result = runner.invoke(cli, ["plan", "--init"])
        assert result.exit_code == 0, result.output
        assert (isolated_config / "plan.yaml").exists()

    def test_init_refuses_overwrite(self, runner, isolated_config):
        runner.invoke(cli, ["plan", "--init"])
        result = runner.invoke(cli, ["plan", "--init"])
        assert result.exit_code != 0
        assert "--force" in result.output

    def test_json_output(self, runner, isolated_config):
        runner.invoke(cli, ["plan", "--init"])
        result = runner.invoke(cli, ["plan", "--format", "json"])
        assert result.exit_code == 0, result.output

        data = json.loads(result.output)
        years = data["years"]
        assert len(years) == 3
        assert years[1]["opening_equity"] == pytest.approx(years[0]["closing_equity"])
        assert data["totals"]["years"] == 3

    def test_text_output(self, runner, isolated_config):
        runner.invoke(cli, ["plan", "--init"])
        result = runner.invoke(cli, ["plan"])
        assert result.exit_code == 0, result.output
        assert "Dividend plan (3 years)" in result.output
        assert "Totals over 3 years" in result.output

    def test_default_format_setting(self, runner, isolated_config):
        runner.invoke(cli, ["plan", "--init"])
        runner.invoke(cli, ["settings", "output-format", "json"])
        result = runner.invoke(cli, ["plan"])
        assert json.loads(result.output)["totals"]["years"] == 3

    def test_missing_plan(self, runner, isolated_config):
        result = runner.invoke(cli, ["plan"])
        assert result.exit_code != 0
        assert "No plan found" in result.output

    def test_invalid_plan(self, runner, isolated_config, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("settings:\n  municipal_tax: 32\nyears: []\n")
        result = runner.invoke(cli, ["plan", str(path)])
        assert result.exit_code != 0
        assert "Invalid plan" in result.output


class TestSalaryCommands:

    def test_hourly_rate_json(self, runner, isolated_config):
        result = runner.invoke(cli, ["hourly-rate", "--net", "30000", "--hours", "133",
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)["result"]
        assert data["gross_salary"] == pytest.approx(30000 / 0.68)
        assert data["hourly_rate_with_vat"] == pytest.approx(data["hourly_rate"] * 1.25)

    def test_hourly_rate_scenarios(self, runner, isolated_config):
        result = runner.invoke(cli, ["hourly-rate", "--net", "30000", "--scenarios", "--format", "json"])
        assert set(json.loads(result.output)["scenarios"]) == {"120", "140", "160", "180"}

    def test_net_salary(self, runner, isolated_config, tax_table_file):
        result = runner.invoke(cli, ["net-salary", "35000", "--tax-table", str(tax_table_file),
                                     "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["net_salary"] == 27500

    def test_net_salary_municipality_needs_rates(self, runner, isolated_config, tax_table_file):
        result = runner.invoke(cli, ["net-salary", "35000", "--tax-table", str(tax_table_file),
                                     "--municipality", "Uppsala"])
        assert result.exit_code != 0

    def test_pension(self, runner, isolated_config):
        result = runner.invoke(cli, ["pension", "60000", "--year", "2025", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["total_monthly"] == pytest.approx(5154.375)


class TestCarCommands:

    def test_benefit_value(self, runner, isolated_config):
        result = runner.invoke(cli, ["car", "benefit-value", "--price", "400000", "--vehicle-tax", "360"])
        assert result.exit_code == 0, result.output
        assert "3 030 kr" in result.output

    def test_benefit_value_needs_price(self, runner, isolated_config):
        result = runner.invoke(cli, ["car", "benefit-value"])
        assert result.exit_code != 0

    def test_compare_picks_best_model(self, runner, isolated_config, tax_table_file):
        result = runner.invoke(cli, [
            "car", "compare", "--tax-table", str(tax_table_file), "--gross", "35000",
            "--benefit-value", "5000", "--brutto-deduction", "1000", "--netto-deduction", "3000",
            "--format", "json",
        ])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["deduction_model"] == "brutto"
        assert data["result"]["adjusted_gross_salary"] == 34000


class TestRulesCommand:

    def test_json(self, runner, isolated_config):
        result = runner.invoke(cli, ["rules", "2025", "--format", "json"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["k10"]["simplified_allowance"] == 209550

    def test_fallback_note(self, runner, isolated_config):
        result = runner.invoke(cli, ["rules", "2031"])
        assert result.exit_code == 0, result.output
        assert "showing 2025" in result.output

    def test_text_notes_planner_constants(self, runner, isolated_config):
        result = runner.invoke(cli, ["rules", "2023"])
        assert result.exit_code == 0, result.output
        assert "104.94%" in result.output
        assert "plan uses the 2025 uplift and interest" in result.output

    def test_unknown_year(self, runner, isolated_config):
        result = runner.invoke(cli, ["rules", "1990"])
        assert result.exit_code != 0


class TestBadInput:
    """Invalid files and values end in a click error, not a traceback."""

    def test_negative_benefit_value(self, runner, isolated_config, tax_table_file):
        result = runner.invoke(cli, [
            "car", "compare", "--tax-table", str(tax_table_file), "--gross", "35000",
            "--benefit-value", "-1",
        ])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid input" in result.output

    def test_plan_not_yaml(self, runner, isolated_config, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("settings: [unclosed\n")
        result = runner.invoke(cli, ["plan", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "not valid YAML" in result.output

    @pytest.mark.parametrize("command", [
        ["net-salary", "35000"],
        ["car", "compare", "--gross", "35000", "--benefit-value", "5000"],
    ])
    def test_tax_table_not_json(self, runner, isolated_config, tmp_path, command):
        path = tmp_path / "table.json"
        path.write_text("{not json")
        result = runner.invoke(cli, command + ["--tax-table", str(path)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid JSON in tax table" in result.output


class TestSettingsCommands:

    def test_show_before_any_settings(self, runner, isolated_config):
        result = runner.invoke(cli, ["settings", "show"])
        assert result.exit_code == 0, result.output
        assert "not created yet" in result.output
        assert str(isolated_config / "plan.yaml") in result.output

    def test_set_and_clear_plan(self, runner, isolated_config, tmp_path):
        custom = tmp_path / "consulting.yaml"
        result = runner.invoke(cli, ["settings", "plan", str(custom)])
        assert result.exit_code == 0, result.output
        assert "does not exist yet" in result.output

        shown = runner.invoke(cli, ["settings", "show"])
        assert f"plan = {custom.resolve()}" in shown.output

        cleared = runner.invoke(cli, ["settings", "plan", "--clear"])
        assert "cleared" in cleared.output
        again = runner.invoke(cli, ["settings", "plan", "--clear"])
        assert "No custom plan path was set" in again.output

    def test_plan_path_is_directory(self, runner, isolated_config, tmp_path):
        result = runner.invoke(cli, ["settings", "plan", str(tmp_path)])
        assert result.exit_code != 0
        assert "is a directory" in result.output

    def test_init_at_custom_plan(self, runner, isolated_config, tmp_path):
        custom = tmp_path / "consulting.yaml"
        runner.invoke(cli, ["settings", "plan", str(custom)])
        runner.invoke(cli, ["plan", "--init"])
        assert custom.exists()
        result = runner.invoke(cli, ["plan", "--format", "json"])
        assert json.loads(result.output)["totals"]["years"] == 3
