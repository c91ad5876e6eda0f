"""Municipal tax rate normalization.

Municipal rate rows come from more than one Skatteverket dataset and the
column names differ between them (and between years). normalize_municipality
resolves every known spelling once, so the rest of the code sees a single
MunicipalRate shape.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional

from .schemas import MunicipalRate

logger = logging.getLogger(__name__)

# Accepted source keys per field, in priority order
FIELD_KEYS = {
    "name": ("Kommun", "kommun", "name"),
    "municipal_tax": ("Kommunalskatt", "Kommunskatt", "Kommnskatt", "kommunal-skatt", "municipal_tax"),
    "county_tax": ("Landstingsskatt", "Regionskatt", "landstings-skatt", "county_tax"),
    "church_tax": ("Kyrkoskatt", "Kyrkoavgift", "kyrkoavgift", "church_tax"),
    "burial_fee": ("Begravningsavgift", "begravnings-avgift", "burial_fee"),
    "year": ("År", "år", "year"),
}


def _first_present(row: Dict[str, Any], keys: Iterable[str]) -> Any:
    for key in keys:
        value = row.get(key)
        if value is not None and value != "":
            return value
    return None


def _to_rate(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(str(value).replace(",", ".").strip())
    except ValueError:
        return 0.0


def normalize_municipality(row: Dict[str, Any]) -> Optional[MunicipalRate]:
    """Build a MunicipalRate from a raw row, or None if it has no name."""
    name = _first_present(row, FIELD_KEYS["name"])
    if not name or not str(name).strip():
        return None

    year = _first_present(row, FIELD_KEYS["year"])
    return MunicipalRate(
        name=str(name).strip().upper(),
        municipal_tax=_to_rate(_first_present(row, FIELD_KEYS["municipal_tax"])),
        county_tax=_to_rate(_first_present(row, FIELD_KEYS["county_tax"])),
        church_tax=_to_rate(_first_present(row, FIELD_KEYS["church_tax"])),
        burial_fee=_to_rate(_first_present(row, FIELD_KEYS["burial_fee"])),
        year=int(_to_rate(year)) if year is not None else None,
    )


def parse_municipalities(rows: Iterable[Dict[str, Any]]) -> List[MunicipalRate]:
    """Normalize rows, keeping the first row per municipality, sorted by name.

    The parish-level dataset repeats a municipality once per parish; the
    municipal and county rates are the same in every repeat.
    """
    by_name: Dict[str, MunicipalRate] = {}
    for row in rows:
        rate = normalize_municipality(row)
        if rate is None:
            logger.warning(f"Skipping municipality row without a name: {row}")
            continue
        by_name.setdefault(rate.name, rate)
    return sorted(by_name.values(), key=lambda r: r.name)


def find_municipality(rates: Iterable[MunicipalRate], name: str) -> Optional[MunicipalRate]:
    """Find a municipality by name (case-insensitive)."""
    target = name.strip().upper()
    for rate in rates:
        if rate.name == target:
            return rate
    return None
