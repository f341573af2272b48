import pandas as pd
import pytest

from conftest import make_raw_incidents
from shooting_fatality_predictor.preprocessing import clean_incidents
from shooting_fatality_predictor.splitting import align_levels, prepare_splits, split_train_eval


def test_ten_rows_split_seven_three():
    raw = make_raw_incidents(10, flags=["TRUE"] * 7 + ["FALSE"] * 3)
    cleaned = clean_incidents(raw)
    splits = split_train_eval(cleaned, train_fraction=0.7, seed=42)
    assert len(splits.train) == 7
    assert len(splits.evaluation) == 3
    assert cleaned["FATAL"].sum() == 7


def test_split_is_a_disjoint_partition(synthetic_incidents):
    cleaned = clean_incidents(synthetic_incidents)
    splits = split_train_eval(cleaned, seed=3)
    train_idx = set(splits.train.index)
    eval_idx = set(splits.evaluation.index)
    assert train_idx.isdisjoint(eval_idx)
    assert train_idx | eval_idx == set(cleaned.index)
    assert len(splits.train) + len(splits.evaluation) == len(cleaned)
    assert len(splits.train) == int(len(cleaned) * 0.7)


def test_split_preserves_row_content(synthetic_incidents):
    cleaned = clean_incidents(synthetic_incidents)
    splits = split_train_eval(cleaned, seed=3)
    pd.testing.assert_frame_equal(splits.train, cleaned.loc[splits.train.index])


def test_same_seed_same_partition(synthetic_incidents):
    cleaned = clean_incidents(synthetic_incidents)
    a = split_train_eval(cleaned, seed=11)
    b = split_train_eval(cleaned, seed=11)
    assert a.train.index.tolist() == b.train.index.tolist()
    assert a.evaluation.index.tolist() == b.evaluation.index.tolist()


def test_different_seed_different_partition(synthetic_incidents):
    cleaned = clean_incidents(synthetic_incidents)
    a = split_train_eval(cleaned, seed=11)
    b = split_train_eval(cleaned, seed=12)
    assert set(a.train.index) != set(b.train.index)


@pytest.mark.parametrize("fraction", [0.0, 1.0, -0.2, 1.5])
def test_invalid_fraction_rejected(raw_incidents, fraction):
    with pytest.raises(ValueError):
        split_train_eval(clean_incidents(raw_incidents), train_fraction=fraction)


def test_align_maps_unseen_levels_to_missing():
    train = pd.DataFrame({"VIC_SEX": pd.Categorical(["M", "M", "F"], categories=["F", "M", "U"])})
    evaluation = pd.DataFrame({"VIC_SEX": pd.Categorical(["U", "F", None], categories=["F", "M", "U"])})
    train_out, eval_out = align_levels(train, evaluation, ["VIC_SEX"])
    assert list(train_out["VIC_SEX"].cat.categories) == ["F", "M"]
    assert list(eval_out["VIC_SEX"].cat.categories) == ["F", "M"]
    assert eval_out["VIC_SEX"].isna().tolist() == [True, False, True]
    assert eval_out["VIC_SEX"].iloc[1] == "F"


def test_align_handles_plain_text_columns():
    train = pd.DataFrame({"BORO": ["BRONX", "QUEENS"]})
    evaluation = pd.DataFrame({"BORO": ["QUEENS", "STATEN ISLAND"]})
    _, eval_out = align_levels(train, evaluation, ["BORO"])
    assert eval_out["BORO"].iloc[0] == "QUEENS"
    assert pd.isna(eval_out["BORO"].iloc[1])


def test_evaluation_levels_subset_of_training(synthetic_incidents):
    cleaned = clean_incidents(synthetic_incidents)
    splits = prepare_splits(cleaned, seed=5)
    for col in ["PERP_AGE_GROUP", "PERP_SEX", "VIC_AGE_GROUP", "VIC_SEX", "BORO"]:
        train_levels = set(splits.train[col].dropna().unique())
        eval_levels = set(splits.evaluation[col].dropna().unique())
        assert eval_levels <= train_levels
        assert set(splits.evaluation[col].cat.categories) == train_levels


def test_fatal_stays_integer_in_both_subsets(synthetic_incidents):
    splits = prepare_splits(clean_incidents(synthetic_incidents), seed=5)
    assert pd.api.types.is_integer_dtype(splits.train["FATAL"])
    assert pd.api.types.is_integer_dtype(splits.evaluation["FATAL"])


def test_train_size_does_not_lose_a_row_to_float_error():
    # 0.7 * 70 evaluates to 48.99999999999999
    cleaned = clean_incidents(make_raw_incidents(70))
    splits = split_train_eval(cleaned, train_fraction=0.7, seed=1)
    assert len(splits.train) == 49
    assert len(splits.evaluation) == 21
