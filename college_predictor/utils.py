import json
import logging
import os
from typing import Any, Dict, List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objs as go
import requests

from . import config
from .classifier import classify
from .exceptions import LoadError
from .models import CollegeType, Record
from .regions import REGIONS

logger = logging.getLogger(__name__)

# Dataset fields kept at load time; everything else is ignored
COLUMNS = ['Institute', 'Institute Code', 'Branch', 'Seat Type', 'Rank', 'Percentile']
NUMERIC_COLUMNS = ['Rank', 'Percentile']


def _read_document(source: str) -> Any:
    if source.startswith(("http://", "https://")):
        response = requests.get(source, timeout=config.DATASET_TIMEOUT)
        response.raise_for_status()
        return response.json()

    if not os.path.exists(source):
        raise FileNotFoundError(f"Dataset file not found at: {source}")
    with open(source, encoding="utf-8") as f:
        return json.load(f)


def _code_to_str(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _text_or_none(value: Any) -> Optional[str]:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return str(value).strip()


def load_dataset(
    source: Optional[str] = None,
    collection: Optional[str] = None
) -> pd.DataFrame:
    """
    Load the college cutoff dataset from a JSON document

    Args:
        source (str): Local path or http(s) URL, defaults to config.DATASET_PATH
        collection (str): Key of the record list inside the document

    Returns:
        pd.DataFrame: One row per cutoff record

    Raises:
        LoadError: If the document cannot be fetched or parsed. No partial
            dataset is ever returned.
    """
    source = source or config.DATASET_PATH
    collection = collection or config.DATASET_COLLECTION
    logger.info(f"Attempting to load dataset from: {source}")

    try:
        document = _read_document(source)
    except (OSError, ValueError, requests.RequestException) as e:
        logger.error(f"Error reading dataset from {source}: {e}")
        raise LoadError(f"Failed to load college data from {source}: {e}") from e

    if not isinstance(document, dict) or collection not in document:
        logger.error(f"Collection '{collection}' not found in dataset")
        raise LoadError(f"Collection '{collection}' not found in dataset")

    entries = document[collection]
    if not isinstance(entries, list) or not all(isinstance(e, dict) for e in entries):
        logger.error(f"Collection '{collection}' is not a list of records")
        raise LoadError(f"Collection '{collection}' is not a list of records")

    df = pd.DataFrame.from_records(entries)
    df = df.reindex(columns=COLUMNS)

    # Absent cutoffs stay NaN; they are never treated as zero
    for column in NUMERIC_COLUMNS:
        df[column] = pd.to_numeric(df[column], errors="coerce")

    df['Institute Code'] = df['Institute Code'].map(_code_to_str)
    for column in ['Institute', 'Branch', 'Seat Type']:
        df[column] = df[column].map(_text_or_none)

    logger.info(f"Dataset loaded successfully. Total rows: {len(df)}")
    return df


def to_records(df: pd.DataFrame) -> List[Record]:
    """Convert a result frame into API records, NaN becoming None."""
    rows = df.reindex(columns=COLUMNS).astype(object)
    rows = rows.where(rows.notna(), None)
    return [
        Record(
            institute=row['Institute'],
            institute_code=_code_to_str(row['Institute Code']),
            branch=row['Branch'],
            seat_type=row['Seat Type'],
            rank=row['Rank'],
            percentile=row['Percentile'],
            college_type=classify(row['Institute']),
        )
        for row in rows.to_dict(orient='records')
    ]


def _unique_sorted(series: pd.Series) -> List[str]:
    values = series.dropna().map(lambda x: str(x).strip())
    return sorted(v for v in set(values) if v)


def get_unique_options(df: pd.DataFrame) -> Dict[str, List[str]]:
    """
    Collect the choices offered for each criteria field

    Returns:
        dict: seat_types, branches, college_types and regions, each
            starting with the "All" option
    """
    seat_types = _unique_sorted(df['Seat Type'])
    branches = _unique_sorted(df['Branch'])
    logger.info(f"Found {len(seat_types)} seat types and {len(branches)} branches")

    return {
        "seat_types": ["All"] + seat_types,
        "branches": ["All"] + branches,
        "college_types": ["All"] + [t.value for t in CollegeType],
        "regions": ["All"] + REGIONS,
    }


def build_percentile_chart(result: pd.DataFrame) -> Optional[go.Figure]:
    """Histogram of cutoff percentiles in a result set, None if nothing to plot."""
    percentiles = result['Percentile'].dropna() if 'Percentile' in result else pd.Series(dtype=float)
    if percentiles.empty:
        return None

    fig = px.histogram(
        percentiles.to_frame(name='Percentile'),
        x='Percentile',
        title='Cutoff Percentile Distribution',
        labels={'Percentile': 'Percentile', 'count': 'Number of Colleges'},
        nbins=20
    )
    fig.update_layout(
        showlegend=False,
        xaxis_title="Cutoff Percentile",
        yaxis_title="Number of Colleges"
    )
    return fig
