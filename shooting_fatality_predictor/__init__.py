"""Shooting Fatality Predictor package.

This package modularizes the incident analysis notebook workflow for reuse and testing.
"""

__all__ = [
    "constants",
    "loading",
    "preprocessing",
    "splitting",
    "logit_model",
    "evaluation",
    "plots",
    "bias_report",
    "pipeline",
]

__version__ = "0.1.0"
