import pandas as pd

from shooting_fatality_predictor.bias_report import (
    BIAS_DISCUSSION,
    format_frequency_table,
    frequency_table,
    race_frequency_tables,
)
from shooting_fatality_predictor.preprocessing import clean_incidents


def test_frequency_table_merges_repeated_levels():
    df = pd.DataFrame({"PERP_RACE": ["A", "A", "A", "B", "B", "A"]})
    counts = frequency_table(df, "PERP_RACE")
    assert counts.to_dict() == {"A": 4, "B": 2}


def test_frequency_table_counts_missing():
    df = pd.DataFrame({"VIC_RACE": ["A", None, "B", None]})
    counts = frequency_table(df, "VIC_RACE")
    assert counts.sum() == 4
    assert counts.loc["A"] == 1


def test_race_tables_cover_full_table(raw_incidents):
    cleaned = clean_incidents(raw_incidents)
    tables = race_frequency_tables(cleaned)
    assert set(tables) == {"PERP_RACE", "VIC_RACE"}
    assert tables["PERP_RACE"].sum() == len(cleaned)
    assert tables["VIC_RACE"].to_dict() == {"BLACK": 5, "WHITE HISPANIC": 5}


def test_format_frequency_table_lists_levels():
    text = format_frequency_table(pd.Series({"A": 4, "B": 2}, name="count"), "PERP_RACE")
    assert "PERP_RACE" in text
    assert "count" in text


def test_bias_discussion_names_each_bias():
    for phrase in [
        "Reporting bias",
        "Data-collection and classification bias",
        "Survivorship bias",
        "Geographic bias",
        "Temporal bias",
    ]:
        assert phrase in BIAS_DISCUSSION


def test_format_frequency_table_has_readable_title():
    text = format_frequency_table(pd.Series({"A": 4}, name="count"), "VIC_RACE")
    assert text.splitlines()[0] == "Victim Race frequencies"
