from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd

from .constants import (
    OCCUR_DATE,
    OCCUR_TIME,
    MURDER_FLAG,
    MURDER_FLAG_TRUE,
    PERP_COLUMNS,
    VIC_COLUMNS,
    CATEGORICAL_COLUMNS,
    TARGET_COLUMN,
    YEAR_COLUMN,
    DATE_FORMAT,
    TIME_FORMAT,
)

logger = logging.getLogger(__name__)


def _raise_on_missing(parsed: pd.Series, raw: pd.Series, column: str) -> None:
    bad = parsed.isna()
    if bad.any():
        examples = raw[bad].head(5).tolist()
        raise ValueError(f"{column}: {int(bad.sum())} value(s) could not be parsed, e.g. {examples}")


def parse_occurrence_dates(df: pd.DataFrame) -> pd.DataFrame:
    """Parse OCCUR_DATE from month/day/year text into calendar dates (strict)."""
    out = df.copy()
    parsed = pd.to_datetime(out[OCCUR_DATE], format=DATE_FORMAT, errors="raise")
    _raise_on_missing(parsed, out[OCCUR_DATE], OCCUR_DATE)
    out[OCCUR_DATE] = parsed
    return out


def parse_occurrence_times(df: pd.DataFrame) -> pd.DataFrame:
    """Parse OCCUR_TIME from hour:minute:second text into a time-of-day duration."""
    out = df.copy()
    stamps = pd.to_datetime(out[OCCUR_TIME], format=TIME_FORMAT, errors="raise")
    _raise_on_missing(stamps, out[OCCUR_TIME], OCCUR_TIME)
    out[OCCUR_TIME] = stamps - stamps.dt.normalize()
    return out


def derive_year(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out[YEAR_COLUMN] = out[OCCUR_DATE].dt.year.astype(int)
    return out


def directional_fill(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Forward fill then backward fill the given columns in current row order.

    Leading gaps left by the forward pass take the first later non-missing value.
    Rows are never reordered.
    """
    out = df.copy()
    cols: List[str] = [c for c in columns if c in out.columns]
    out[cols] = out[cols].ffill().bfill()
    return out


def to_categorical(df: pd.DataFrame, columns: Sequence[str] = CATEGORICAL_COLUMNS) -> pd.DataFrame:
    """Cast columns to categoricals whose levels are exactly the values present."""
    out = df.copy()
    for col in columns:
        out[col] = out[col].astype("category")
    return out


def derive_fatal(df: pd.DataFrame) -> pd.DataFrame:
    """FATAL is 1 only where the raw murder flag is exactly the string "TRUE".

    Booleans and other spellings ("true", "True") compare unequal and yield 0.
    """
    out = df.copy()
    out[TARGET_COLUMN] = (out[MURDER_FLAG] == MURDER_FLAG_TRUE).astype(int)
    return out


def clean_incidents(df: pd.DataFrame) -> pd.DataFrame:
    """Apply date/time parsing, YEAR, demographic fills, categorical casts and FATAL."""
    cleaned = parse_occurrence_dates(df)
    cleaned = parse_occurrence_times(cleaned)
    cleaned = derive_year(cleaned)

    before = int(cleaned[PERP_COLUMNS + VIC_COLUMNS].isna().sum().sum())
    cleaned = directional_fill(cleaned, PERP_COLUMNS)
    cleaned = directional_fill(cleaned, VIC_COLUMNS)
    after = int(cleaned[PERP_COLUMNS + VIC_COLUMNS].isna().sum().sum())
    logger.info("Filled %d missing demographic values (%d remain)", before - after, after)

    cleaned = to_categorical(cleaned, CATEGORICAL_COLUMNS)
    cleaned = derive_fatal(cleaned)
    logger.info("Cleaned %d incidents, %d fatal", len(cleaned), int(cleaned[TARGET_COLUMN].sum()))
    return cleaned
