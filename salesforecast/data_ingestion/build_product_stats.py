#!/usr/bin/env python3
"""
Build the monthly product stats file from raw order lines.

This script downloads the UCI Online Retail dataset, cleans it, aggregates
order lines into one row per product and calendar month, attaches the
previous and following month's units, and saves the result in the
products.stats.csv layout used for training.
"""

import sys
from io import BytesIO
from pathlib import Path

import pandas as pd
import requests

from salesforecast.config import DATA_PATH
from salesforecast.data_ingestion.product_data import CSV_COLUMNS, PRODUCT_ID_COLUMN

# Dataset URL
DATASET_URL = "https://archive.ics.uci.edu/ml/machine-learning-databases/00352/Online%20Retail.xlsx"

# Number of top products to keep (by total units sold)
TOP_PRODUCTS = 50


def download_dataset(url: str) -> bytes:
    """Download the dataset from UCI repository."""
    print(f"Downloading dataset from:\n{url}\n")
    print("This may take a minute...")

    response = requests.get(url, timeout=120)
    response.raise_for_status()
    print(f"Downloaded {len(response.content) / 1024 / 1024:.2f} MB\n")
    return response.content


def load_excel_data(content: bytes) -> pd.DataFrame:
    """Load Excel data from bytes content."""
    print("Loading Excel file...")
    df = pd.read_excel(BytesIO(content), engine="openpyxl")
    print(f"Loaded {len(df):,} rows\n")
    return df


def clean_data(df: pd.DataFrame) -> pd.DataFrame:
    """Remove returns, zero-priced lines and lines without a stock code."""
    print("Cleaning data...")
    original_count = len(df)

    # Remove rows where Quantity <= 0 (returns/cancellations)
    df = df[df["Quantity"] > 0]
    print(f"  After removing Quantity <= 0: {len(df):,} rows")

    # Remove rows where UnitPrice <= 0
    df = df[df["UnitPrice"] > 0]
    print(f"  After removing UnitPrice <= 0: {len(df):,} rows")

    df = df[df["StockCode"].notna()]
    print(f"  After removing missing StockCode: {len(df):,} rows")

    print(f"\nRemoved {original_count - len(df):,} invalid rows\n")
    return df


def aggregate_monthly_stats(df: pd.DataFrame) -> pd.DataFrame:
    """Aggregate order lines into units, avg, count, max and min per product-month."""
    print("Aggregating monthly product stats...")

    lines = pd.DataFrame({
        PRODUCT_ID_COLUMN: df["StockCode"].astype(str),
        "period": pd.to_datetime(df["InvoiceDate"]).dt.to_period("M"),
        "quantity": df["Quantity"],
    })

    stats = lines.groupby([PRODUCT_ID_COLUMN, "period"])["quantity"].agg(
        units="sum",
        avg="mean",
        count="count",
        max="max",
        min="min",
    ).reset_index()
    stats["avg"] = stats["avg"].round()

    print(f"  Aggregated to {len(stats):,} product-months\n")
    return stats


def add_adjacent_periods(stats: pd.DataFrame) -> pd.DataFrame:
    """Attach previous and following month's units to each product-month.

    Months without sales count as 0 units. The last month in the data has
    no observed following month and is dropped.
    """
    print("Attaching previous and next month units...")
    keys = [PRODUCT_ID_COLUMN, "period"]
    units = stats[keys + ["units"]]

    previous = units.assign(period=units["period"] + 1).rename(columns={"units": "prev"})
    following = units.assign(period=units["period"] - 1).rename(columns={"units": "next"})

    result = stats.merge(previous, on=keys, how="left").merge(following, on=keys, how="left")
    result[["prev", "next"]] = result[["prev", "next"]].fillna(0)

    last_period = result["period"].max()
    result = result[result["period"] != last_period].copy()

    result["year"] = result["period"].dt.year
    result["month"] = result["period"].dt.month

    print(f"  {len(result):,} rows with a known following month\n")
    return result.sort_values(keys).reset_index(drop=True)[CSV_COLUMNS]


def sample_top_products(df: pd.DataFrame, n_products: int) -> pd.DataFrame:
    """Keep only top N products by total units sold."""
    print(f"Sampling top {n_products} products by units sold...")

    product_sales = df.groupby(PRODUCT_ID_COLUMN)["units"].sum()
    top_products = product_sales.nlargest(n_products).index.tolist()

    filtered = df[df[PRODUCT_ID_COLUMN].isin(top_products)].reset_index(drop=True)

    print(f"  Filtered to {len(filtered):,} rows\n")
    return filtered


def build_product_stats(df: pd.DataFrame, n_products=None) -> pd.DataFrame:
    """Run cleaning, aggregation and neighbour-month lookup over raw order lines."""
    stats = add_adjacent_periods(aggregate_monthly_stats(clean_data(df)))
    if n_products is not None:
        stats = sample_top_products(stats, n_products)
    return stats


def save_to_csv(df: pd.DataFrame, output_path: Path) -> None:
    """Save DataFrame to CSV file."""
    print(f"Saving to {output_path}...")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)

    file_size = output_path.stat().st_size / 1024
    print(f"  Saved {file_size:.2f} KB\n")


def print_summary(df: pd.DataFrame, original_count: int, output_path: Path) -> None:
    """Print summary statistics."""
    print("=" * 60)
    print("Product Stats Preparation Complete!")
    print("=" * 60)
    print(f"Order lines read:        {original_count:,}")
    print(f"Product-month rows:      {len(df):,}")
    print(f"Number of products:      {df[PRODUCT_ID_COLUMN].nunique()}")
    print(f"Output file:             {output_path}")
    print("=" * 60)
    print("\nFirst 5 rows:")
    print(df.head().to_string(index=False))
    print()


def main():
    """Download order lines and write the product stats training file."""
    output_path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path(DATA_PATH)

    print("=" * 60)
    print("UCI Online Retail Product Stats Preparation")
    print("=" * 60 + "\n")

    try:
        content = download_dataset(DATASET_URL)
        df = load_excel_data(content)
        original_count = len(df)

        stats = build_product_stats(df, TOP_PRODUCTS)

        save_to_csv(stats, output_path)
        print_summary(stats, original_count, output_path)
    except requests.exceptions.Timeout:
        print("Error: Download timed out. Please try again.")
        sys.exit(1)
    except requests.exceptions.RequestException as e:
        print(f"Error downloading dataset: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
