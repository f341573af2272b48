from __future__ import annotations

import argparse
import logging
from pathlib import Path

import matplotlib

from shooting_fatality_predictor.constants import DEFAULT_SEED, DEFAULT_TRAIN_FRACTION, DEFAULT_THRESHOLD
from shooting_fatality_predictor.pipeline import PipelineConfig, run_pipeline


def main() -> None:
    parser = argparse.ArgumentParser(description="Shooting Fatality Predictor CLI")
    parser.add_argument("--input", default="NYPD_Shooting_Incident_Data__Historic_.csv", help="Input incident CSV file")
    parser.add_argument("--out", default="fatality_model_results", help="Output directory")
    parser.add_argument("--train_size", type=float, default=DEFAULT_TRAIN_FRACTION, help="Training set ratio")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed for the train/evaluation split")
    parser.add_argument("--threshold", type=float, default=DEFAULT_THRESHOLD, help="Probability threshold for FATAL=1")
    parser.add_argument("--na_values", nargs="*", default=None, help="Extra tokens read as missing, e.g. \"(null)\"")
    parser.add_argument("--no_figures", action="store_true", help="Do not write plot images")
    parser.add_argument("--log_level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Figures are written to disk, never shown
    matplotlib.use("Agg")

    config = PipelineConfig(
        input_path=Path(args.input),
        out_dir=Path(args.out),
        seed=args.seed,
        train_fraction=args.train_size,
        threshold=args.threshold,
        save_figures=not args.no_figures,
        na_values=args.na_values,
    )
    run_pipeline(config)

    print("Done. Output directory:", str(config.out_dir))


if __name__ == "__main__":
    main()
