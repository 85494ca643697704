"""Console output for training runs: section headers and cross-validation tables."""

import numpy as np

# Metric keys in the order they are reported, with display labels
METRIC_LABELS = {
    "l1": "L1 Loss (MAE)",
    "l2": "L2 Loss (MSE)",
    "rms": "RMS (RMSE)",
    "loss_fn": "Loss Function",
    "r2": "R-squared",
}


def print_header(title: str) -> None:
    """Print a banner announcing a training step."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def confidence_interval_95(values) -> float:
    """Half-width of the 95% confidence interval of the mean of values."""
    values = np.asarray(values, dtype=float)
    if len(values) < 2:
        return 0.0
    return 1.96 * np.std(values, ddof=1) / np.sqrt(len(values) - 1)


def summarize_folds(fold_metrics: dict) -> dict:
    """Reduce per-fold metric arrays to mean and standard deviation.

    Args:
        fold_metrics: Mapping of metric key to one value per fold.

    Returns:
        Mapping of metric key to {"mean", "std"}, plus "r2_ci95" when R-squared
        is present.
    """
    summary = {}
    for key, values in fold_metrics.items():
        values = np.asarray(values, dtype=float)
        summary[key] = {
            "mean": float(values.mean()),
            "std": float(values.std(ddof=1)) if len(values) > 1 else 0.0,
        }
    if "r2" in fold_metrics:
        summary["r2_ci95"] = float(confidence_interval_95(fold_metrics["r2"]))
    return summary


def print_regression_folds_average_metrics(algorithm_name: str, summary: dict) -> None:
    """Print fold-averaged regression metrics as produced by summarize_folds."""
    print("=" * 60)
    print(f"  Metrics for {algorithm_name} Regression model")
    print("-" * 60)
    print(f"{'Metric':<20} {'Average':>14} {'Std. Dev.':>14}")
    print("-" * 60)

    for key, label in METRIC_LABELS.items():
        if key not in summary:
            continue
        m = summary[key]
        print(f"{label:<20} {m['mean']:>14.3f} {m['std']:>14.3f}")

    if "r2_ci95" in summary:
        print("-" * 60)
        print(f"R-squared 95% confidence interval: +/- {summary['r2_ci95']:.3f}")
    print("=" * 60)
