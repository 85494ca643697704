"""Product stats records and the CSV reader used for training."""

from dataclasses import asdict, dataclass
from typing import Iterable

import pandas as pd

# Column roles in the product stats file
PRODUCT_ID_COLUMN = "productId"
LABEL_COLUMN = "next"
NUMERIC_FEATURES = ["year", "month", "units", "avg", "count", "max", "min", "prev"]

# Column order of products.stats.csv
CSV_COLUMNS = [LABEL_COLUMN, PRODUCT_ID_COLUMN, "year", "month", "units", "avg", "count", "max", "min", "prev"]


@dataclass(frozen=True)
class ProductData:
    """One product's sales statistics for a calendar month."""

    productId: str
    year: float
    month: float
    units: float
    avg: float
    count: float
    max: float
    min: float
    prev: float
    next: float = 0.0


@dataclass(frozen=True)
class ProductUnitPrediction:
    """Forecast of a product's units for the following month."""

    score: float


def _coerce_types(df: pd.DataFrame) -> pd.DataFrame:
    """Cast productId to string and every other column to float."""
    df = df.copy()
    df[PRODUCT_ID_COLUMN] = df[PRODUCT_ID_COLUMN].astype(str)
    for column in NUMERIC_FEATURES + [LABEL_COLUMN]:
        df[column] = pd.to_numeric(df[column]).astype(float)
    return df


def load_product_data(file_path) -> pd.DataFrame:
    """Load a product stats CSV file (header row, comma separated).

    Raises:
        FileNotFoundError: the file does not exist.
        pandas.errors.EmptyDataError: the file is empty.
        ValueError: columns are missing, cells are blank, values are not
            numeric, or the file holds a header but no rows.
    """
    df = pd.read_csv(file_path, sep=",", dtype={PRODUCT_ID_COLUMN: str})

    missing = [column for column in CSV_COLUMNS if column not in df.columns]
    if missing:
        raise ValueError(f"Missing columns in {file_path}: {', '.join(missing)}")

    if df.empty:
        raise ValueError(f"No product rows found in {file_path}")

    blank = [column for column in CSV_COLUMNS if df[column].isna().any()]
    if blank:
        raise ValueError(f"Blank values in {file_path}: {', '.join(blank)}")

    return _coerce_types(df[CSV_COLUMNS])


def to_frame(samples: Iterable[ProductData]) -> pd.DataFrame:
    """Convert ProductData records to a DataFrame shaped like load_product_data output."""
    df = pd.DataFrame([asdict(sample) for sample in samples], columns=CSV_COLUMNS)
    return _coerce_types(df)
