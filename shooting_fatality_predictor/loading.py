from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pandas as pd

from .constants import REQUIRED_COLUMNS, TEXT_COLUMNS

logger = logging.getLogger(__name__)


class SchemaError(ValueError):
    """Raised when the incident file lacks columns the pipeline depends on."""


def check_schema(df: pd.DataFrame, required: Iterable[str] = REQUIRED_COLUMNS) -> None:
    missing: List[str] = [c for c in required if c not in df.columns]
    if missing:
        raise SchemaError(f"Incident table is missing required columns: {', '.join(missing)}")


def load_incidents(path: Union[str, Path], na_values: Optional[List[str]] = None) -> pd.DataFrame:
    """Read the incident file into a data frame, one row per record.

    Column types are inferred from content except the date, time and murder flag
    columns, which stay as text. A missing file or required column aborts the run.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Incident file not found: {path}")

    df = pd.read_csv(
        path,
        dtype={c: str for c in TEXT_COLUMNS},
        na_values=na_values,
    )
    check_schema(df)
    logger.info("Loaded %d incidents from %s", len(df), path)
    return df
