from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm
import statsmodels.formula.api as smf

from .constants import FORMULA, DEFAULT_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass
class LogitResult:
    formula: str
    params: Dict[str, float]
    bse: Dict[str, float]
    zvalues: Dict[str, float]
    pvalues: Dict[str, float]
    conf_int: Dict[str, Tuple[float, float]]
    summary_text: str
    feature_names: List[str]
    n_obs: int
    fitted: object


def fit_logit(train: pd.DataFrame, formula: str = FORMULA, maxiter: int = 100) -> LogitResult:
    """Fit a binomial GLM with logit link (statsmodels formula API) on the training subset.

    Plain maximum likelihood via IRLS; no penalty, no cross-validation. Rows with
    missing predictors are dropped by the formula machinery.
    """
    model = smf.glm(formula, data=train, family=sm.families.Binomial())
    fitted = model.fit(maxiter=maxiter)

    params = {k: float(v) for k, v in fitted.params.items()}
    bse = {k: float(v) for k, v in fitted.bse.items()}
    zvalues = {k: float(v) for k, v in fitted.tvalues.items()}
    pvalues = {k: float(v) for k, v in fitted.pvalues.items()}
    ci_df = fitted.conf_int()
    conf_int = {idx: (float(row[0]), float(row[1])) for idx, row in ci_df.iterrows()}

    logger.info("Fitted logit on %d rows with %d coefficients", int(fitted.nobs), len(params))
    return LogitResult(
        formula=formula,
        params=params,
        bse=bse,
        zvalues=zvalues,
        pvalues=pvalues,
        conf_int=conf_int,
        summary_text=str(fitted.summary()),
        feature_names=list(params.keys()),
        n_obs=int(fitted.nobs),
        fitted=fitted,
    )


def coefficient_table(result: LogitResult) -> pd.DataFrame:
    """Coefficients with standard errors, z, p, 95% CI and odds ratios."""
    keys = result.feature_names
    coef_vals = [result.params[k] for k in keys]
    ci_low = [result.conf_int.get(k, (float("nan"), float("nan")))[0] for k in keys]
    ci_high = [result.conf_int.get(k, (float("nan"), float("nan")))[1] for k in keys]

    def _exp(values: List[float]) -> List[float]:
        return [float(np.exp(v)) if np.isfinite(v) else float("nan") for v in values]

    return pd.DataFrame({
        "term": keys,
        "coef": coef_vals,
        "std_err": [result.bse.get(k, float("nan")) for k in keys],
        "z_value": [result.zvalues.get(k, float("nan")) for k in keys],
        "p_value": [result.pvalues.get(k, float("nan")) for k in keys],
        "ci_low": ci_low,
        "ci_high": ci_high,
        "OR": _exp(coef_vals),
        "OR_CI_low": _exp(ci_low),
        "OR_CI_high": _exp(ci_high),
    })


def predict_probabilities(result: LogitResult, evaluation: pd.DataFrame) -> pd.Series:
    if evaluation.empty:
        return pd.Series([], index=evaluation.index, dtype=float, name="prob")
    prob = result.fitted.predict(evaluation)
    return pd.Series(np.asarray(prob, dtype=float), index=evaluation.index, name="prob")


def predict_labels(result: LogitResult, evaluation: pd.DataFrame, threshold: float = DEFAULT_THRESHOLD) -> pd.Series:
    """Predicted class per row: 1 when P(FATAL) >= threshold, else 0."""
    prob = predict_probabilities(result, evaluation)
    return (prob >= threshold).astype(int).rename("predicted")
