from __future__ import annotations

import numpy as np
import pandas as pd


BOROUGHS = ["BRONX", "BROOKLYN", "MANHATTAN", "QUEENS", "STATEN ISLAND"]
AGE_GROUPS = ["<18", "18-24", "25-44", "45-64", "65+", "UNKNOWN"]
SEXES = ["M", "F", "U"]
RACES = [
    "BLACK",
    "WHITE HISPANIC",
    "BLACK HISPANIC",
    "WHITE",
    "ASIAN / PACIFIC ISLANDER",
    "AMERICAN INDIAN/ALASKAN NATIVE",
    "UNKNOWN",
]


def make_synthetic_dataset(n_incidents: int = 600, seed: int = 42, missing_rate: float = 0.3) -> pd.DataFrame:
    """Synthetic incident table with the public file's column layout."""
    rng = np.random.default_rng(seed)

    incident_key = 20_000_000 + np.arange(n_incidents) * 7919
    start = pd.Timestamp("2006-01-01")
    day_offsets = rng.integers(0, 365 * 17, size=n_incidents)
    occur_date = (start + pd.to_timedelta(day_offsets, unit="D")).strftime("%m/%d/%Y")
    seconds = rng.integers(0, 24 * 3600, size=n_incidents)
    occur_time = [f"{s // 3600:02d}:{(s % 3600) // 60:02d}:{s % 60:02d}" for s in seconds]

    boro = rng.choice(BOROUGHS, size=n_incidents, p=[0.28, 0.38, 0.12, 0.16, 0.06])
    precinct = rng.integers(1, 124, size=n_incidents)

    perp_age = rng.choice(AGE_GROUPS, size=n_incidents, p=[0.08, 0.3, 0.32, 0.1, 0.05, 0.15]).astype(object)
    perp_sex = rng.choice(SEXES, size=n_incidents, p=[0.82, 0.06, 0.12]).astype(object)
    perp_race = rng.choice(RACES, size=n_incidents).astype(object)
    vic_age = rng.choice(AGE_GROUPS[:5], size=n_incidents, p=[0.1, 0.3, 0.35, 0.15, 0.1]).astype(object)
    vic_sex = rng.choice(SEXES[:2], size=n_incidents, p=[0.9, 0.1])
    vic_race = rng.choice(RACES, size=n_incidents)

    # Perpetrator details are often unknown in the public data
    perp_missing = rng.random(n_incidents) < missing_rate
    perp_age[perp_missing] = None
    perp_sex[perp_missing] = None
    perp_race[perp_missing] = None

    # Latent fatality risk with a few known contributors
    risk = (
        -1.6
        + 0.5 * (vic_age == "45-64")
        + 0.8 * (vic_age == "65+")
        + 0.3 * (boro == "STATEN ISLAND")
        + 0.2 * (perp_age == "25-44")
    )
    prob = 1 / (1 + np.exp(-risk))
    fatal = rng.random(n_incidents) < prob
    murder_flag = np.where(fatal, "TRUE", "FALSE")

    data = {
        "INCIDENT_KEY": incident_key,
        "OCCUR_DATE": occur_date,
        "OCCUR_TIME": occur_time,
        "BORO": boro,
        "LOC_OF_OCCUR_DESC": rng.choice(["INSIDE", "OUTSIDE"], size=n_incidents),
        "PRECINCT": precinct,
        "JURISDICTION_CODE": rng.choice([0, 1, 2], size=n_incidents, p=[0.85, 0.02, 0.13]),
        "LOC_CLASSFCTN_DESC": rng.choice(["STREET", "HOUSING", "COMMERCIAL"], size=n_incidents),
        "LOCATION_DESC": rng.choice(["MULTI DWELL - PUBLIC HOUS", "GROCERY/BODEGA", "BAR/NIGHT CLUB"], size=n_incidents),
        "STATISTICAL_MURDER_FLAG": murder_flag,
        "PERP_AGE_GROUP": perp_age,
        "PERP_SEX": perp_sex,
        "PERP_RACE": perp_race,
        "VIC_AGE_GROUP": vic_age,
        "VIC_SEX": vic_sex,
        "VIC_RACE": vic_race,
        "Latitude": np.round(rng.uniform(40.5, 40.9, size=n_incidents), 6),
        "Longitude": np.round(rng.uniform(-74.25, -73.7, size=n_incidents), 6),
    }
    return pd.DataFrame(data)


if __name__ == "__main__":
    df = make_synthetic_dataset()
    df.to_csv("synthetic_shooting_incidents.csv", index=False)
    print("Synthetic dataset written to synthetic_shooting_incidents.csv with shape:", df.shape)
