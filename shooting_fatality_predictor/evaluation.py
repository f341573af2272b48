from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from sklearn.metrics import classification_report, cohen_kappa_score, confusion_matrix

from .constants import PREDICTORS, LABELS

logger = logging.getLogger(__name__)

METRIC_NAMES = [
    "accuracy",
    "sensitivity",
    "specificity",
    "ppv",
    "npv",
    "prevalence",
    "detection_rate",
    "balanced_accuracy",
    "f1",
    "no_information_rate",
    "kappa",
]


@dataclass
class EvalResult:
    cm: np.ndarray
    labels: List[int]
    positive: int
    metrics: Dict[str, float]
    undefined: List[str] = field(default_factory=list)
    report: Dict = field(default_factory=dict)

    @property
    def n(self) -> int:
        return int(self.cm.sum())


def drop_incomplete(evaluation: pd.DataFrame, columns: Sequence[str] = PREDICTORS) -> pd.DataFrame:
    """Drop evaluation rows with a missing value in any of the given predictor columns."""
    kept = evaluation.dropna(subset=list(columns))
    dropped = len(evaluation) - len(kept)
    if dropped:
        logger.info("Dropped %d evaluation row(s) with missing predictors (%d kept)", dropped, len(kept))
    return kept


def align_labels(predicted, actual, labels: Sequence[int] = LABELS) -> Tuple[pd.Categorical, pd.Categorical]:
    """Express predicted and actual labels over the same ordered categories."""
    categories = list(labels)
    pred_cat = pd.Categorical(np.asarray(predicted).astype(int), categories=categories)
    actual_cat = pd.Categorical(np.asarray(actual).astype(int), categories=categories)
    return pred_cat, actual_cat


def _ratio(num: float, den: float) -> float:
    return float(num) / float(den) if den > 0 else float("nan")


def evaluate_predictions(actual, predicted, positive: int = 1, labels: Sequence[int] = LABELS) -> EvalResult:
    """Confusion matrix (rows = actual, columns = predicted) and derived statistics.

    A statistic whose denominator is zero, e.g. sensitivity when no actual
    positives remain, is NaN and listed in ``undefined``.
    """
    labels = list(labels)
    pred_cat, actual_cat = align_labels(predicted, actual, labels)
    y_true = np.asarray(actual_cat)
    y_pred = np.asarray(pred_cat)

    if len(y_true) == 0:
        # No rows left to compare: every statistic is undefined
        metrics = {name: float("nan") for name in METRIC_NAMES}
        logger.warning("No evaluation rows to score; all statistics undefined")
        return EvalResult(
            cm=np.zeros((len(labels), len(labels)), dtype=int),
            labels=labels,
            positive=positive,
            metrics=metrics,
            undefined=list(METRIC_NAMES),
        )

    cm = confusion_matrix(y_true, y_pred, labels=labels)
    pos = labels.index(positive)
    neg = 1 - pos
    tp = int(cm[pos, pos])
    fn = int(cm[pos, neg])
    fp = int(cm[neg, pos])
    tn = int(cm[neg, neg])
    total = tp + fn + fp + tn

    sensitivity = _ratio(tp, tp + fn)
    specificity = _ratio(tn, tn + fp)
    ppv = _ratio(tp, tp + fp)
    npv = _ratio(tn, tn + fn)
    metrics = {
        "accuracy": _ratio(tp + tn, total),
        "sensitivity": sensitivity,
        "specificity": specificity,
        "ppv": ppv,
        "npv": npv,
        "prevalence": _ratio(tp + fn, total),
        "detection_rate": _ratio(tp, total),
        "balanced_accuracy": (sensitivity + specificity) / 2.0,
        "f1": _ratio(2 * tp, 2 * tp + fp + fn),
        "no_information_rate": _ratio(max(tp + fn, tn + fp), total),
    }

    # Kappa is undefined when both raters use a single identical class
    if len(set(y_true.tolist()) | set(y_pred.tolist())) > 1:
        metrics["kappa"] = float(cohen_kappa_score(y_true, y_pred, labels=labels))
    else:
        metrics["kappa"] = float("nan")

    undefined = [name for name, value in metrics.items() if not np.isfinite(value)]
    if undefined:
        logger.warning("Undefined evaluation statistics: %s", ", ".join(undefined))

    report = classification_report(
        y_true, y_pred, labels=labels, output_dict=True, zero_division=np.nan
    )

    return EvalResult(cm=cm, labels=labels, positive=positive, metrics=metrics, undefined=undefined, report=report)


def confusion_frame(ev: EvalResult) -> pd.DataFrame:
    return pd.DataFrame(
        ev.cm,
        index=pd.Index(ev.labels, name="actual"),
        columns=pd.Index(ev.labels, name="predicted"),
    )


def per_class_frame(ev: EvalResult) -> pd.DataFrame:
    """Precision, recall, F1 and support per label from the classification report."""
    rows = {label: ev.report[str(label)] for label in ev.labels if str(label) in ev.report}
    if not rows:
        return pd.DataFrame()
    frame = pd.DataFrame(rows).T
    frame.index.name = "label"
    return frame


def format_evaluation(ev: EvalResult) -> str:
    lines = ["Confusion matrix (rows = actual, columns = predicted)", confusion_frame(ev).to_string(), ""]
    lines.append(f"Positive class: {ev.positive}    N = {ev.n}")
    for name, value in ev.metrics.items():
        shown = "undefined" if name in ev.undefined else f"{value:.4f}"
        lines.append(f"{name:>20}: {shown}")
    per_class = per_class_frame(ev)
    if not per_class.empty:
        lines += ["", "Per-class report", per_class.to_string(float_format="{:.4f}".format, na_rep="undefined")]
    return "\n".join(lines)


def summarize_eval(ev: EvalResult) -> Dict:
    """JSON-friendly summary; undefined statistics become None."""
    return {
        **{k: (None if k in ev.undefined else float(v)) for k, v in ev.metrics.items()},
        "undefined": list(ev.undefined),
        "confusion_matrix": ev.cm.astype(int).tolist(),
        "labels": list(ev.labels),
        "positive": ev.positive,
    }
