from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pandas as pd
import pytest

from generate_synthetic_dataset import make_synthetic_dataset


def make_raw_incidents(n: int = 10, flags=None) -> pd.DataFrame:
    """Small raw incident table in the file's text layout."""
    if flags is None:
        flags = ["TRUE"] * 7 + ["FALSE"] * (n - 7)
    boroughs = ["BRONX", "BROOKLYN", "QUEENS", "MANHATTAN", "STATEN ISLAND"]
    return pd.DataFrame({
        "INCIDENT_KEY": list(range(1000, 1000 + n)),
        "OCCUR_DATE": [f"{(i % 12) + 1:02d}/{(i % 28) + 1:02d}/{2010 + i % 5}" for i in range(n)],
        "OCCUR_TIME": [f"{i % 24:02d}:{(i * 7) % 60:02d}:00" for i in range(n)],
        "BORO": [boroughs[i % len(boroughs)] for i in range(n)],
        "STATISTICAL_MURDER_FLAG": flags,
        "PERP_AGE_GROUP": [None if i % 3 == 0 else ["18-24", "25-44"][i % 2] for i in range(n)],
        "PERP_SEX": [None if i % 3 == 0 else "M" for i in range(n)],
        "PERP_RACE": [None if i % 3 == 0 else "BLACK" for i in range(n)],
        "VIC_AGE_GROUP": [["18-24", "25-44", "45-64"][i % 3] for i in range(n)],
        "VIC_SEX": [["M", "F"][i % 2] for i in range(n)],
        "VIC_RACE": [["BLACK", "WHITE HISPANIC"][i % 2] for i in range(n)],
    })


@pytest.fixture
def raw_incidents() -> pd.DataFrame:
    return make_raw_incidents()


@pytest.fixture
def synthetic_incidents() -> pd.DataFrame:
    return make_synthetic_dataset(n_incidents=600, seed=7)


@pytest.fixture
def synthetic_csv(tmp_path, synthetic_incidents):
    path = tmp_path / "incidents.csv"
    synthetic_incidents.to_csv(path, index=False)
    return path
