"""Swe Calc - Swedish salary, dividend and company-car calculators."""

__version__ = "0.3.0"
