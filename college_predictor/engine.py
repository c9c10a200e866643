import logging
import math
from typing import Iterable, Optional, Set

import numpy as np
import pandas as pd

from .classifier import classify
from .exceptions import ValidationError
from .models import Criteria, PredictionMode
from .regions import matches_region, region_prefix

logger = logging.getLogger(__name__)

ALL_OPTION = "All"
SEARCH_COLUMNS = ['Institute', 'Branch', 'Seat Type']


def _selected(values: Iterable[str]) -> Set[str]:
    """Selected values, or an empty set when the "All" option is chosen."""
    selected = set(values)
    if ALL_OPTION in selected:
        return set()
    return selected


def validate_criteria(criteria: Criteria) -> None:
    """
    Check criteria before any filtering starts

    Raises:
        ValidationError: Threshold missing, not finite or out of range,
            limit not positive, or an unknown region
    """
    threshold = criteria.threshold
    if threshold is None or isinstance(threshold, bool):
        raise ValidationError("Please enter a valid percentile or rank")
    try:
        threshold = float(threshold)
    except (TypeError, ValueError):
        raise ValidationError("Please enter a valid percentile or rank") from None
    if not math.isfinite(threshold):
        raise ValidationError("Please enter a valid percentile or rank")

    if criteria.mode == PredictionMode.PERCENTILE and not 0 <= threshold <= 100:
        raise ValidationError("Percentile must be between 0 and 100")

    limit = criteria.limit
    if limit != "all" and (isinstance(limit, bool) or not isinstance(limit, int) or limit < 1):
        raise ValidationError("Number of colleges must be a positive number or 'all'")

    for region in _selected(criteria.regions):
        region_prefix(region)


def filter_records(records: pd.DataFrame, criteria: Criteria) -> pd.DataFrame:
    """
    Apply the prediction criteria to the raw record set

    Args:
        records (pd.DataFrame): Raw cutoff records
        criteria (Criteria): Eligibility criteria

    Returns:
        pd.DataFrame: Matching records sorted by cutoff percentile, highest
            first. Ties keep their dataset order. May be empty.

    Raises:
        ValidationError: If the criteria are invalid; nothing is filtered
    """
    validate_criteria(criteria)
    threshold = float(criteria.threshold)

    df = records
    seat_types = _selected(criteria.seat_types)
    branches = _selected(criteria.branches)
    college_types = _selected(criteria.college_types)
    regions = _selected(criteria.regions)

    if seat_types:
        df = df[df['Seat Type'].isin(seat_types)]

    if branches:
        df = df[df['Branch'].isin(branches)]

    if college_types:
        types = df['Institute'].map(lambda name: classify(name).value)
        df = df[types.isin(college_types)]

    if criteria.mode == PredictionMode.RANK:
        rank = pd.to_numeric(df['Rank'], errors='coerce')
        df = df[rank.notna() & (threshold <= rank)]
    else:
        percentile = pd.to_numeric(df['Percentile'], errors='coerce')
        df = df[percentile.notna() & (threshold >= percentile)]

    if regions:
        in_region = df['Institute Code'].map(lambda code: matches_region(code, regions))
        df = df[in_region.astype(bool)]

    # Stable sort with no secondary key: equal percentiles keep dataset order
    df = df.sort_values(
        'Percentile',
        ascending=False,
        kind='stable',
        key=lambda s: pd.to_numeric(s, errors='coerce').fillna(0)
    )

    if criteria.limit != "all":
        df = df.head(criteria.limit)

    result = df.reset_index(drop=True)
    logger.info(f"Filtered {len(records)} records down to {len(result)} ({criteria.mode.value} {threshold})")
    return result


def refine_results(base: pd.DataFrame, term: Optional[str]) -> pd.DataFrame:
    """
    Narrow a filtered result set by a free-text search term

    The match is a case-insensitive substring test on institute, branch and
    seat type. It is always applied to the base result set, so searches do
    not accumulate.
    """
    if term is None or not term.strip():
        return base

    needle = term.casefold()
    mask = np.zeros(len(base), dtype=bool)
    for column in SEARCH_COLUMNS:
        values = base[column].map(lambda v: isinstance(v, str) and needle in v.casefold())
        mask |= values.to_numpy(dtype=bool)

    return base[mask].reset_index(drop=True)
