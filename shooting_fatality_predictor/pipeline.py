from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from .bias_report import BIAS_DISCUSSION, format_frequency_table, race_frequency_tables
from .constants import (
    ALIGNED_COLUMNS,
    TARGET_COLUMN,
    YEAR_COLUMN,
    ENGLISH_LABELS,
    DEFAULT_SEED,
    DEFAULT_TRAIN_FRACTION,
    DEFAULT_THRESHOLD,
    DEFAULT_BUCKET_DAYS,
)
from .evaluation import EvalResult, drop_incomplete, evaluate_predictions, format_evaluation, summarize_eval
from .loading import load_incidents
from .logit_model import LogitResult, coefficient_table, fit_logit, predict_labels
from .plots import (
    plot_borough_counts,
    plot_occurrence_histogram,
    plot_prediction_comparison,
    yearly_counts,
)
from .preprocessing import clean_incidents
from .splitting import DatasetSplits, prepare_splits

logger = logging.getLogger(__name__)


@dataclass
class PipelineConfig:
    input_path: Path
    out_dir: Optional[Path] = None
    seed: int = DEFAULT_SEED
    train_fraction: float = DEFAULT_TRAIN_FRACTION
    threshold: float = DEFAULT_THRESHOLD
    bucket_days: int = DEFAULT_BUCKET_DAYS
    save_figures: bool = True
    na_values: Optional[List[str]] = None


@dataclass
class PipelineResult:
    cleaned: pd.DataFrame
    splits: DatasetSplits
    model: LogitResult
    scored: pd.DataFrame
    evaluation: EvalResult
    race_tables: Dict[str, pd.Series] = field(default_factory=dict)


def _save_figure(fig: plt.Figure, out_dir: Optional[Path], name: str, save: bool) -> None:
    if save and out_dir is not None:
        fig.savefig(out_dir / name, bbox_inches="tight")
    plt.close(fig)


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """Load, clean, describe, split, fit, evaluate and report, once, in order."""
    out_dir = Path(config.out_dir) if config.out_dir is not None else None
    if out_dir is not None:
        out_dir.mkdir(parents=True, exist_ok=True)

    raw = load_incidents(config.input_path, na_values=config.na_values)
    cleaned = clean_incidents(raw)

    # Descriptive plots
    _save_figure(plot_borough_counts(cleaned), out_dir, "borough_counts.png", config.save_figures)
    _save_figure(
        plot_occurrence_histogram(cleaned, config.bucket_days), out_dir, "occurrence_histogram.png", config.save_figures
    )
    print(f"Incidents per {ENGLISH_LABELS[YEAR_COLUMN].lower()}")
    print(yearly_counts(cleaned).to_string())

    splits = prepare_splits(cleaned, train_fraction=config.train_fraction, seed=config.seed, columns=ALIGNED_COLUMNS)

    model = fit_logit(splits.train)
    print(model.summary_text)

    scored = drop_incomplete(splits.evaluation, ALIGNED_COLUMNS)
    scored = scored.assign(predicted=predict_labels(model, scored, threshold=config.threshold))
    ev = evaluate_predictions(scored[TARGET_COLUMN], scored["predicted"])
    print(format_evaluation(ev))

    _save_figure(
        plot_prediction_comparison(scored[TARGET_COLUMN], scored["predicted"]),
        out_dir,
        "prediction_comparison.png",
        config.save_figures,
    )

    race_tables = race_frequency_tables(cleaned)
    for col, counts in race_tables.items():
        print(format_frequency_table(counts, col))
    print(BIAS_DISCUSSION)

    if out_dir is not None:
        coefficient_table(model).to_csv(out_dir / "logit_coefficients.csv", index=False, encoding="utf-8")
        with open(out_dir / "logit_summary.txt", "w", encoding="utf-8") as f:
            f.write(model.summary_text)
        results = {
            "n_incidents": int(len(cleaned)),
            "n_fatal": int(cleaned[TARGET_COLUMN].sum()),
            "n_train": int(len(splits.train)),
            "n_evaluation": int(len(splits.evaluation)),
            "n_scored": int(len(scored)),
            "seed": config.seed,
            "train_fraction": config.train_fraction,
            "threshold": config.threshold,
            "formula": model.formula,
            "evaluation": summarize_eval(ev),
            "race_tables": {col: {str(k): int(v) for k, v in counts.items()} for col, counts in race_tables.items()},
        }
        with open(out_dir / "results_summary.json", "w", encoding="utf-8") as f:
            json.dump(results, f, ensure_ascii=False, indent=2)
        logger.info("Reports written to %s", out_dir)

    return PipelineResult(
        cleaned=cleaned,
        splits=splits,
        model=model,
        scored=scored,
        evaluation=ev,
        race_tables=race_tables,
    )
