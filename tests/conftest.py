"""Shared fixtures: synthetic product stats files and a trained model."""

import numpy as np
import pandas as pd
import pytest

from salesforecast.data_ingestion.product_data import CSV_COLUMNS
from salesforecast.training import product_model

PRODUCTS = ["263", "988", "101", "202", "303"]


def make_product_stats(n_rows: int = 360, seed: int = 7) -> pd.DataFrame:
    """Build product stats where next month's units track 0.6 x this month's units."""
    rng = np.random.default_rng(seed)
    rows = []
    for i in range(n_rows):
        units = rng.uniform(100, 2000)
        rows.append({
            "next": max(1, round(0.6 * units + rng.normal(0, 10))),
            "productId": PRODUCTS[i % len(PRODUCTS)],
            "year": 2015 + (i // 12) % 3,
            "month": i % 12 + 1,
            "units": round(units),
            "avg": int(rng.integers(10, 100)),
            "count": int(rng.integers(5, 40)),
            "max": int(rng.integers(200, 400)),
            "min": int(rng.integers(1, 5)),
            "prev": round(rng.uniform(100, 2000)),
        })

    return pd.DataFrame(rows, columns=CSV_COLUMNS)


@pytest.fixture
def product_stats():
    return make_product_stats()


@pytest.fixture
def product_stats_path(tmp_path, product_stats):
    """Write synthetic product stats to a CSV file."""
    path = tmp_path / "products.stats.csv"
    product_stats.to_csv(path, index=False)
    return path


@pytest.fixture(scope="session")
def trained_model_path(tmp_path_factory):
    """Train one model for the whole session and return its path."""
    workdir = tmp_path_factory.mktemp("model")
    data_path = workdir / "products.stats.csv"
    make_product_stats().to_csv(data_path, index=False)

    model_path = workdir / "product_month_fastTreeTweedie.zip"
    product_model.train_and_save_model(data_path, model_path)
    return model_path
