from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence, Tuple

import pandas as pd
from sklearn.model_selection import train_test_split

from .constants import ALIGNED_COLUMNS, DEFAULT_SEED, DEFAULT_TRAIN_FRACTION

logger = logging.getLogger(__name__)


@dataclass
class DatasetSplits:
    train: pd.DataFrame
    evaluation: pd.DataFrame
    seed: int
    train_fraction: float


def split_train_eval(
    df: pd.DataFrame,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    seed: int = DEFAULT_SEED,
) -> DatasetSplits:
    """Seeded row partition: floor(n * train_fraction) rows train, the rest evaluate.

    Rows keep their content and original index, so the two subsets are disjoint
    and together make up the input table.
    """
    if not 0.0 < train_fraction < 1.0:
        raise ValueError(f"train_fraction must be in (0, 1), got {train_fraction}")

    n_rows = len(df)
    # Epsilon keeps products such as 0.7 * 70 = 48.999... from losing a row
    n_train = int(math.floor(n_rows * train_fraction + 1e-9))
    n_eval = n_rows - n_train
    if n_train == 0 or n_eval == 0:
        raise ValueError(f"Cannot split {n_rows} rows with train_fraction={train_fraction}")

    # Integer sizes avoid the float rounding of fractional test_size
    train, evaluation = train_test_split(
        df, train_size=n_train, test_size=n_eval, random_state=seed, shuffle=True
    )
    logger.info("Split %d rows into %d train / %d evaluation (seed=%d)", n_rows, n_train, n_eval, seed)
    return DatasetSplits(train=train.copy(), evaluation=evaluation.copy(), seed=seed, train_fraction=train_fraction)


def align_levels(
    train: pd.DataFrame,
    evaluation: pd.DataFrame,
    columns: Sequence[str] = ALIGNED_COLUMNS,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Restrict categorical levels to those observed in the training subset.

    Training categories shrink to the observed values. Evaluation values outside
    that set become missing instead of gaining a new level.
    """
    train_out = train.copy()
    eval_out = evaluation.copy()
    for col in columns:
        levels = train_out[col].astype("category").cat.remove_unused_categories().cat.categories
        train_out[col] = pd.Categorical(train_out[col], categories=levels)

        was_missing = eval_out[col].isna()
        eval_out[col] = pd.Categorical(eval_out[col], categories=levels)
        unseen = int((eval_out[col].isna() & ~was_missing).sum())
        if unseen:
            logger.info("%s: %d evaluation value(s) not seen in training set to missing", col, unseen)
    return train_out, eval_out


def prepare_splits(
    df: pd.DataFrame,
    train_fraction: float = DEFAULT_TRAIN_FRACTION,
    seed: int = DEFAULT_SEED,
    columns: Sequence[str] = ALIGNED_COLUMNS,
) -> DatasetSplits:
    """Split then align evaluation levels against training levels."""
    splits = split_train_eval(df, train_fraction=train_fraction, seed=seed)
    splits.train, splits.evaluation = align_levels(splits.train, splits.evaluation, columns)
    return splits
