from typing import Any, Iterable

import pandas as pd

from .exceptions import ValidationError

# MHT-CET regional offices; the leading digit of an institute code
# identifies the region it belongs to
REGION_PREFIXES = {
    "Amravati": "1",
    "Aurangabad": "2",
    "Mumbai": "3",
    "Nagpur": "4",
    "Nashik": "5",
    "Pune": "6",
}

REGIONS = list(REGION_PREFIXES)

_LOOKUP = {name.casefold(): prefix for name, prefix in REGION_PREFIXES.items()}


def region_prefix(region: str) -> str:
    """Return the institute-code prefix for a region name."""
    try:
        return _LOOKUP[str(region).strip().casefold()]
    except KeyError:
        raise ValidationError(f"Unknown region: {region}") from None


def matches_region(institute_code: Any, regions: Iterable[str]) -> bool:
    """
    Check whether an institute code belongs to any of the given regions.

    Args:
        institute_code: Institute code, coerced to string
        regions: Region names; empty means no restriction

    Returns:
        bool: True if the code starts with one of the region prefixes
    """
    prefixes = [region_prefix(r) for r in regions]
    if not prefixes:
        return True
    if institute_code is None or pd.isna(institute_code):
        return False
    code = str(institute_code).strip()
    return any(code.startswith(p) for p in prefixes)
