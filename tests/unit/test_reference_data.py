"""Tests for reference data: tax rules per year, municipal rates and ITP 1."""

import pytest
from pydantic import ValidationError

from swecalc.sdk.municipalities import find_municipality, normalize_municipality, parse_municipalities
from swecalc.sdk.pension import calculate_occupational_pension
from swecalc.sdk.taxes import TaxRulesNotFoundError, get_available_years, load_tax_rules


class TestTaxRules:

    def test_available_years(self):
        years = get_available_years()
        assert years[0] == 2025
        assert years == sorted(years, reverse=True)
        assert 2021 in years

    def test_load_2025(self):
        rules = load_tax_rules(2025)
        assert rules.year == 2025
        assert rules.ibb == 80600
        assert rules.k10.ibb == 76200
        assert rules.k10.uplift_percent == pytest.approx(104.96)
        assert rules.k10.main_rule_interest == pytest.approx(10.96)

    def test_simplified_allowance_is_275_ibb(self):
        for year in get_available_years():
            k10 = load_tax_rules(year).k10
            assert k10.simplified_allowance == pytest.approx(2.75 * k10.ibb)

    def test_salary_requirement(self):
        k10 = load_tax_rules(2025).k10
        assert k10.salary_requirement.fixed == pytest.approx(9.6 * k10.ibb)
        assert k10.salary_requirement.alternative == pytest.approx(6 * k10.ibb)

    def test_itp_rates(self):
        itp = load_tax_rules(2025).itp
        assert itp.threshold_ibb == 7.5
        assert itp.lower_rate == 4.5
        assert itp.higher_rate == 30

    def test_cached_rules_are_read_only(self):
        rules = load_tax_rules(2025)
        with pytest.raises(ValidationError):
            rules.ibb = 1
        with pytest.raises(ValidationError):
            rules.k10.uplift_percent = 200
        with pytest.raises(ValidationError):
            rules.itp.lower_rate = 0
        assert load_tax_rules(2025).ibb == 80600

    def test_later_year_falls_back(self):
        assert load_tax_rules(2030).year == 2025

    def test_earlier_year_not_found(self):
        with pytest.raises(TaxRulesNotFoundError):
            load_tax_rules(1999)

    def test_not_found_is_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_tax_rules(1999)


class TestMunicipalities:

    def test_normalize_skatteverket_keys(self):
        rate = normalize_municipality({
            "Kommun": "Uppsala", "Kommunalskatt": "21,14", "Landstingsskatt": "11,71",
            "Kyrkoavgift": "1,24", "Begravningsavgift": "0,292", "År": "2025",
        })
        assert rate.name == "UPPSALA"
        assert rate.municipal_tax == pytest.approx(21.14)
        assert rate.county_tax == pytest.approx(11.71)
        assert rate.church_tax == pytest.approx(1.24)
        assert rate.burial_fee == pytest.approx(0.292)
        assert rate.year == 2025

    def test_normalize_alternate_spellings(self):
        rate = normalize_municipality({"kommun": "Kiruna", "Kommnskatt": 22.8, "Regionskatt": 12.15})
        assert rate.municipal_tax == pytest.approx(22.8)
        assert rate.county_tax == pytest.approx(12.15)
        assert rate.church_tax == 0
        assert rate.year is None

    def test_row_without_name(self):
        assert normalize_municipality({"Kommunalskatt": "21"}) is None

    def test_parse_dedupes_and_sorts(self):
        rows = [
            {"Kommun": "Uppsala", "Kommunalskatt": "21,14"},
            {"Kommun": "Ale", "Kommunalskatt": "22,52"},
            {"Kommun": "UPPSALA", "Kommunalskatt": "99"},
            {"Kommunalskatt": "10"},
        ]
        rates = parse_municipalities(rows)
        assert [r.name for r in rates] == ["ALE", "UPPSALA"]
        assert rates[1].municipal_tax == pytest.approx(21.14)

    def test_find(self):
        rates = parse_municipalities([{"Kommun": "Ale", "Kommunalskatt": "22,52"}])
        assert find_municipality(rates, " ale ").name == "ALE"
        assert find_municipality(rates, "Borås") is None

    def test_total_rate(self):
        rate = normalize_municipality({"Kommun": "Ale", "Kommunalskatt": "22", "Regionskatt": "11",
                                       "Kyrkoavgift": "1"})
        assert rate.total_rate() == pytest.approx(33)
        assert rate.total_rate(church_member=True) == pytest.approx(34)

    def test_rates_frozen(self):
        rate = normalize_municipality({"Kommun": "Ale"})
        with pytest.raises(ValidationError):
            rate.municipal_tax = 30


class TestOccupationalPension:

    def test_below_threshold(self):
        result = calculate_occupational_pension(40000, 80600)
        assert result.ibb_threshold == pytest.approx(50375)
        assert result.lower_part == pytest.approx(1800)
        assert result.higher_part == 0
        assert result.total_monthly == pytest.approx(1800)
        assert result.percentage_of_salary == pytest.approx(4.5)

    def test_above_threshold(self):
        result = calculate_occupational_pension(60000, 80600)
        assert result.salary_up_to_threshold == pytest.approx(50375)
        assert result.salary_above_threshold == pytest.approx(9625)
        assert result.lower_part == pytest.approx(2266.875)
        assert result.higher_part == pytest.approx(2887.5)
        assert result.total_yearly == pytest.approx(5154.375 * 12)

    def test_zero_salary(self):
        result = calculate_occupational_pension(0, 80600)
        assert result.total_monthly == 0
        assert result.percentage_of_salary == 0

    def test_custom_rates(self):
        result = calculate_occupational_pension(60000, 80600, lower_rate=5, higher_rate=25)
        assert result.lower_part == pytest.approx(50375 * 0.05)
        assert result.higher_part == pytest.approx(9625 * 0.25)
