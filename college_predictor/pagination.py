"""Fixed-size pagination over an ordered result set."""
import logging
from math import ceil
from typing import List

import pandas as pd

from . import config
from .exceptions import ValidationError
from .models import Page
from .utils import to_records

logger = logging.getLogger(__name__)


def page_window(current_page: int, total_pages: int, window: int = config.PAGE_WINDOW) -> List[int]:
    """Page numbers around the current page, clamped to [1, total_pages]."""
    start = max(1, current_page - window)
    end = min(total_pages, current_page + window)
    return list(range(start, end + 1))


def paginate(
    result: pd.DataFrame,
    page_size: int = config.RESULTS_PER_PAGE,
    page_number: int = 1
) -> Page:
    """
    Slice a result set into one page of records

    Args:
        result (pd.DataFrame): Ordered result set
        page_size (int): Records per page
        page_number (int): Page number (1-based)

    Returns:
        Page: Records on the page plus navigation metadata. An empty result
            set has zero pages and reports page 1. A page number outside
            [1, total_pages] gives an empty slice.
    """
    if page_size < 1:
        raise ValidationError("Page size must be at least 1")

    total = len(result)
    total_pages = ceil(total / page_size)
    current = page_number if total else 1

    if 1 <= page_number <= total_pages:
        start = (page_number - 1) * page_size
        end = min(start + page_size, total)
    else:
        start = end = 0
        if total:
            logger.warning(f"Page {page_number} out of range (1-{total_pages})")

    return Page(
        records=to_records(result.iloc[start:end]),
        start_index=start,
        end_index=end,
        page_size=page_size,
        total_results=total,
        total_pages=total_pages,
        current_page=current,
        has_previous=current > 1,
        has_next=current < total_pages,
        page_numbers=page_window(current, total_pages)
    )
