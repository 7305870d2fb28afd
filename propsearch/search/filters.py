"""
Criteria matching over Property records.

Checks run in a fixed order (city, unit type, price, status, locality) and
stop at the first failure. Text comparisons are trimmed and case-insensitive.
"""
from __future__ import annotations

from typing import Iterable

from propsearch.config import DEBUG_FILTER
from propsearch.data.schemas import FilterCriteria, Property


def _check(trace: bool, label: str, ok: bool, detail: str) -> bool:
    if trace:
        print(f"  {label} check: {ok} ({detail})")
    return ok


def matches(prop: Property, criteria: FilterCriteria, trace: bool = False) -> bool:
    """True if the property satisfies every present criterion."""
    address = prop.full_address.strip().casefold()

    if trace:
        print(f"\n--- Checking property {prop.id}: {prop.project_name} ---")

    if criteria.city is not None:
        if not _check(trace, "City", criteria.city in address,
                      f"looking for '{criteria.city}' in '{address}'"):
            return False

    if criteria.unit_type is not None:
        # Prefix match: "3" accepts "3BHK" and "3 BHK" (and "30BHK"), not "23BHK"
        unit_type = prop.unit_type.strip().casefold()
        if not _check(trace, "Unit type", unit_type.startswith(criteria.unit_type),
                      f"does '{unit_type}' start with '{criteria.unit_type}'"):
            return False

    if criteria.max_price is not None:
        if not _check(trace, "Budget", prop.price <= criteria.max_price,
                      f"{prop.price} <= {criteria.max_price}"):
            return False

    if criteria.possession_status is not None:
        status = prop.status.strip().casefold()
        if not _check(trace, "Status", status == criteria.possession_status,
                      f"'{status}' == '{criteria.possession_status}'"):
            return False

    if criteria.locality is not None:
        if not _check(trace, "Locality", criteria.locality in address,
                      f"looking for '{criteria.locality}' in '{address}'"):
            return False

    if trace:
        print("  >>> MATCH <<<")
    return True


def filter_properties(
    properties: Iterable[Property],
    criteria: FilterCriteria | None = None,
    trace: bool = DEBUG_FILTER,
) -> list[Property]:
    """Properties matching all present criteria, in input order."""
    if criteria is None or criteria.is_empty:
        return list(properties)
    return [p for p in properties if matches(p, criteria, trace)]
