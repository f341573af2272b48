from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from .constants import BORO, OCCUR_DATE, YEAR_COLUMN, TARGET_COLUMN, DEFAULT_BUCKET_DAYS, ENGLISH_LABELS, LABELS


def borough_counts(df: pd.DataFrame) -> pd.Series:
    """Row count per distinct borough."""
    return df[BORO].value_counts(sort=False).sort_index().rename("count")


def yearly_counts(df: pd.DataFrame) -> pd.Series:
    return df[YEAR_COLUMN].value_counts().sort_index().rename("count")


def date_bucket_counts(df: pd.DataFrame, width_days: int = DEFAULT_BUCKET_DAYS) -> pd.Series:
    """Row counts per fixed-width window of OCCUR_DATE, aligned to the earliest date.

    Empty windows are kept with count 0; the index holds each window's start.
    """
    if width_days <= 0:
        raise ValueError(f"width_days must be positive, got {width_days}")
    dates = pd.to_datetime(df[OCCUR_DATE]).dropna()
    if dates.empty:
        return pd.Series([], dtype=int, name="count")

    start = dates.min().normalize()
    bucket = (dates.dt.normalize() - start).dt.days // width_days
    n_buckets = int(bucket.max()) + 1
    counts = np.bincount(bucket.to_numpy(dtype=int), minlength=n_buckets)
    index = pd.date_range(start, periods=n_buckets, freq=f"{width_days}D", name="window_start")
    return pd.Series(counts, index=index, name="count")


def plot_borough_counts(df: pd.DataFrame, ax: Optional[plt.Axes] = None) -> plt.Figure:
    counts = borough_counts(df)
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 5))
    ax.bar(counts.index.astype(str), counts.values, color="steelblue")
    ax.set_xlabel(ENGLISH_LABELS[BORO])
    ax.set_ylabel("Incidents")
    ax.set_title("Shooting incidents by borough")
    return ax.figure


def plot_occurrence_histogram(
    df: pd.DataFrame, width_days: int = DEFAULT_BUCKET_DAYS, ax: Optional[plt.Axes] = None
) -> plt.Figure:
    counts = date_bucket_counts(df, width_days)
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 5))
    ax.bar(counts.index, counts.values, width=width_days, align="edge", color="slategray")
    ax.set_xlabel(ENGLISH_LABELS[OCCUR_DATE])
    ax.set_ylabel("Incidents")
    ax.set_title(f"Shooting incidents per {width_days}-day window")
    return ax.figure


def plot_prediction_comparison(actual, predicted, ax: Optional[plt.Axes] = None) -> plt.Figure:
    """Grouped bars: x = actual label, hue = predicted label, height = row count."""
    frame = pd.DataFrame({
        "actual": pd.Categorical(np.asarray(actual).astype(int), categories=LABELS),
        "predicted": pd.Categorical(np.asarray(predicted).astype(int), categories=LABELS),
    })
    if ax is None:
        _, ax = plt.subplots(figsize=(6, 5))
    if not frame.empty:
        sns.countplot(data=frame, x="actual", hue="predicted", order=LABELS, hue_order=LABELS, ax=ax)
    ax.set_xlabel(f"Actual {ENGLISH_LABELS[TARGET_COLUMN]}")
    ax.set_ylabel("Count")
    ax.set_title("Predicted vs. actual fatality")
    return ax.figure
