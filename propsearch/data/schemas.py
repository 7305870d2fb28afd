"""
Property record, search criteria, and merge report schemas.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class Property:
    """One sellable unit: a configuration variant joined with its project and address."""
    id: str
    project_id: str
    project_name: str
    status: str
    possession_date: str
    full_address: str
    pincode: str
    unit_type: str                  # e.g. "3BHK"
    price: int                      # whole rupees, never negative
    bathrooms: int
    carpet_area: str
    about_property: str
    floor_plan_image: str
    property_images: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["property_images"] = list(self.property_images)
        return data


# Field names the query parser may emit, mapped to FilterCriteria fields
_CRITERIA_ALIASES = {
    "city": "city",
    "bhk": "unit_type",
    "unitType": "unit_type",
    "unit_type": "unit_type",
    "budget": "max_price",
    "maxBudget": "max_price",
    "max_price": "max_price",
    "possessionStatus": "possession_status",
    "possession_status": "possession_status",
    "status": "possession_status",
    "locality": "locality",
}


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list)):
        return None
    text = str(value).strip().casefold()
    return text or None


def _clean_unit_type(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, int):
        return str(value) if value else None
    text = _clean_text(value)
    # "0" / "00" mean no bedroom count, same as the integer 0
    if text is not None and text.isdecimal() and int(text) == 0:
        return None
    return text


def _clean_price(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = int(float(str(value).replace(",", "").strip()))
    except (TypeError, ValueError, OverflowError):
        return None
    # A zero budget is treated as "not mentioned"
    return price if price > 0 else None


@dataclass(frozen=True)
class FilterCriteria:
    """Sparse search criteria. None means unconstrained, never "match empty"."""
    city: Optional[str] = None
    unit_type: Optional[str] = None
    max_price: Optional[int] = None
    possession_status: Optional[str] = None
    locality: Optional[str] = None

    def __post_init__(self) -> None:
        # Normalize on construction so every caller compares trimmed case-folded text
        object.__setattr__(self, "city", _clean_text(self.city))
        object.__setattr__(self, "unit_type", _clean_unit_type(self.unit_type))
        object.__setattr__(self, "max_price", _clean_price(self.max_price))
        object.__setattr__(self, "possession_status", _clean_text(self.possession_status))
        object.__setattr__(self, "locality", _clean_text(self.locality))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "FilterCriteria":
        """Build criteria from a parser payload, ignoring unknown keys."""
        if not data:
            return cls()
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = _CRITERIA_ALIASES.get(key)
            if name is not None and value is not None:
                kwargs[name] = value
        return cls(**kwargs)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def as_dict(self) -> dict[str, Any]:
        """Only the criteria that are present."""
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass
class MergeReport:
    """Counts of what the join kept, dropped, and coerced."""
    variants: int = 0
    merged: int = 0
    missing_configuration: int = 0
    missing_project: int = 0
    missing_address: int = 0
    bad_price: int = 0
    bad_bathrooms: int = 0
    bad_images: int = 0

    @property
    def skipped(self) -> int:
        return self.missing_configuration + self.missing_project + self.missing_address

    def to_dict(self) -> dict[str, int]:
        data = asdict(self)
        data["skipped"] = self.skipped
        return data
