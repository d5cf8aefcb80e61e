"""
Load the usage metrics table and apply its declared column types.

Every column that the plots rely on is named in a schema together with the
kind of values it holds. Numeric-looking columns only become categorical when
the schema says so; read_csv alone would happily treat a user id as a number.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, Iterable, List

import numpy as np
import pandas as pd

from log_utils import info, warn


class ColumnKind(Enum):
    NUMERIC = "numeric"
    CATEGORY = "category"


Schema = Dict[str, ColumnKind]

USAGE_SCHEMA: Schema = {
    "metric_1": ColumnKind.NUMERIC,
    "metric_2": ColumnKind.NUMERIC,
    "user": ColumnKind.CATEGORY,
}


def _read_table(csv_file: Path) -> pd.DataFrame:
    if not csv_file.is_file():
        raise FileNotFoundError(f"Input file not found: {csv_file}")
    try:
        return pd.read_csv(csv_file)
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"Input file is empty: {csv_file}") from e
    except pd.errors.ParserError as e:
        raise ValueError(f"Could not parse {csv_file}: {e}") from e


def _to_numeric(df: pd.DataFrame, col: str) -> pd.Series:
    try:
        return pd.to_numeric(df[col], errors="raise").astype(float)
    except (ValueError, TypeError) as e:
        raise ValueError(f"Column '{col}' must be numeric: {e}") from e


def _to_category(df: pd.DataFrame, col: str) -> pd.Series:
    # Ordered levels in ascending natural order; this order is the category rank
    levels = sorted(df[col].unique())
    if len(levels) < 1:
        raise ValueError(f"Column '{col}' has no category values")
    if len(levels) == 1:
        warn(f"column '{col}' has a single category, coloring by it adds nothing")
    return pd.Series(
        pd.Categorical(df[col], categories=levels, ordered=True),
        index=df.index,
        name=col,
    )


def load_dataset(csv_file, schema: Schema = USAGE_SCHEMA) -> pd.DataFrame:
    """
    Read a delimited table and convert its columns to the kinds declared in
    the schema.

    Args:
        csv_file: Path to a CSV file with a header row.
        schema: Column name -> ColumnKind. Columns outside the schema are kept
            as read_csv inferred them.

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the file cannot be parsed, a schema column is missing or
            has missing values, a numeric column holds non-numeric values, or
            a category column has no values.
    """
    csv_file = Path(csv_file)
    df = _read_table(csv_file)

    missing = [col for col in schema if col not in df.columns]
    if missing:
        raise ValueError(f"CSV file is missing required columns: {missing}")

    for col, kind in schema.items():
        if df[col].isna().any():
            raise ValueError(f"Column '{col}' has missing values")
        if kind is ColumnKind.NUMERIC:
            df[col] = _to_numeric(df, col)
        elif kind is ColumnKind.CATEGORY:
            df[col] = _to_category(df, col)

    info(f"Loaded {len(df)} rows from {csv_file}")
    return df


def category_levels(df: pd.DataFrame, column: str) -> List:
    """Distinct values of a category column in rank order."""
    return list(df[column].cat.categories)


def category_ranks(df: pd.DataFrame, column: str) -> np.ndarray:
    """Rank (0..N-1) of each row's category."""
    return df[column].cat.codes.to_numpy(dtype=int)


def require_positive(df: pd.DataFrame, columns: Iterable[str]) -> None:
    """Log-scaled axes need every plotted value to be strictly positive."""
    for col in columns:
        if (df[col] <= 0).any():
            raise ValueError(
                f"Column '{col}' has values <= 0 and cannot be drawn on a log axis"
            )
