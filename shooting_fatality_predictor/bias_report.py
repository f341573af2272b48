from __future__ import annotations

from typing import Dict

import pandas as pd

from .constants import PERP_RACE, VIC_RACE, ENGLISH_LABELS


BIAS_DISCUSSION = """\
Potential sources of bias in the shooting incident data

Reporting bias: the table only holds incidents that were reported to and
recorded by the police. Shootings without injury, or in communities with low
trust in law enforcement, are less likely to appear, so the data describe
recorded incidents rather than all shootings.

Data-collection and classification bias: perpetrator age, sex and race are
frequently unknown and were imputed here from neighbouring rows. Recorded
demographics reflect officer and witness judgement, and the categories
themselves ("UNKNOWN", broad age bands, combined race labels) shape what the
model can learn.

Survivorship bias: whether an incident is recorded as a murder depends on
medical response times and outcomes, not only on the shooting itself, and
perpetrator details are more often known when an arrest follows.

Geographic bias: enforcement and patrol intensity differ between boroughs and
precincts. More policing produces more records, so borough effects may
measure attention as much as risk.

Temporal bias: the records span many years of changing recording practice,
policy and population. Patterns from earlier years may not hold for later ones,
and one fixed model averages over those shifts.
"""


def frequency_table(df: pd.DataFrame, column: str) -> pd.Series:
    """Count of each level of ``column``, sorted by level; missing values included."""
    counts = df[column].value_counts(dropna=False, sort=False)
    return counts.sort_index().rename("count")


def race_frequency_tables(df: pd.DataFrame) -> Dict[str, pd.Series]:
    return {col: frequency_table(df, col) for col in (PERP_RACE, VIC_RACE)}


def format_frequency_table(counts: pd.Series, column: str) -> str:
    frame = counts.rename_axis(column).reset_index()
    title = f"{ENGLISH_LABELS.get(column, column)} frequencies"
    return title + "\n" + frame.to_string(index=False)
