#!/usr/bin/env python3
"""Validate product stats data against expected schema and rules."""

import sys
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd

from salesforecast.data_ingestion.product_data import LABEL_COLUMN, PRODUCT_ID_COLUMN


@dataclass
class ValidationResult:
    """Container for validation results."""

    success: bool = True
    failed_expectations: list = field(default_factory=list)
    passed_expectations: list = field(default_factory=list)
    row_count: int = 0
    columns_validated: int = 0


def validate_column_exists(df: pd.DataFrame, column: str, result: ValidationResult) -> bool:
    """Check if column exists in DataFrame."""
    if column in df.columns:
        return True
    result.success = False
    result.failed_expectations.append(f"Column '{column}' does not exist")
    return False


def validate_no_nulls(df: pd.DataFrame, column: str, result: ValidationResult) -> bool:
    """Check if column has no null values."""
    null_count = df[column].isna().sum()
    if null_count == 0:
        return True
    result.success = False
    result.failed_expectations.append(f"Column '{column}' has {null_count} null values")
    return False


def validate_numeric(df: pd.DataFrame, column: str, result: ValidationResult) -> bool:
    """Check if every non-null value in column parses as a number."""
    values = df[column].dropna()
    unparsable = pd.to_numeric(values, errors="coerce").isna().sum()
    if unparsable == 0:
        return True
    result.success = False
    result.failed_expectations.append(f"Column '{column}' has {unparsable} non-numeric values")
    return False


def validate_non_negative(df: pd.DataFrame, column: str, result: ValidationResult) -> bool:
    """Check if all values in column are zero or greater."""
    negative = (pd.to_numeric(df[column], errors="coerce") < 0).sum()
    if negative == 0:
        return True
    result.success = False
    result.failed_expectations.append(f"Column '{column}' has {negative} negative values")
    return False


def validate_month_range(df: pd.DataFrame, column: str, result: ValidationResult) -> bool:
    """Check if all values in column are calendar months (1-12)."""
    months = pd.to_numeric(df[column], errors="coerce").dropna()
    out_of_range = (~months.between(1, 12)).sum()
    if out_of_range == 0:
        return True
    result.success = False
    result.failed_expectations.append(f"Column '{column}' has {out_of_range} values outside 1-12")
    return False


CHECKS = {
    "numeric": (validate_numeric, "all values numeric"),
    "non_negative": (validate_non_negative, "all values >= 0"),
    "month": (validate_month_range, "all values in 1-12"),
}


def validate_product_data(file_path: str) -> ValidationResult:
    """Validate product stats CSV file against expected schema and rules."""
    result = ValidationResult()

    df = pd.read_csv(file_path, dtype={PRODUCT_ID_COLUMN: str})
    result.row_count = len(df)

    # Tweedie loss needs a non-negative label
    rules = [
        (LABEL_COLUMN, ["exists", "no_nulls", "numeric", "non_negative"]),
        (PRODUCT_ID_COLUMN, ["exists", "no_nulls"]),
        ("year", ["exists", "no_nulls", "numeric"]),
        ("month", ["exists", "no_nulls", "numeric", "month"]),
        ("units", ["exists", "no_nulls", "numeric", "non_negative"]),
        ("avg", ["exists", "no_nulls", "numeric"]),
        ("count", ["exists", "no_nulls", "numeric", "non_negative"]),
        ("max", ["exists", "no_nulls", "numeric"]),
        ("min", ["exists", "no_nulls", "numeric"]),
        ("prev", ["exists", "no_nulls", "numeric", "non_negative"]),
    ]

    for column, checks in rules:
        result.columns_validated += 1

        # Check column exists first
        if not validate_column_exists(df, column, result):
            continue

        for check in checks:
            if check == "exists":
                result.passed_expectations.append(f"Column '{column}' exists")
            elif check == "no_nulls":
                if validate_no_nulls(df, column, result):
                    result.passed_expectations.append(f"Column '{column}' has no nulls")
            else:
                validator, description = CHECKS[check]
                if validator(df, column, result):
                    result.passed_expectations.append(f"Column '{column}' {description}")

    if result.row_count == 0:
        result.success = False
        result.failed_expectations.append("File has no data rows")

    return result


def print_report(result: ValidationResult, file_path: str) -> None:
    """Print a formatted validation report."""
    print("=" * 60)
    print("Product Data Validation Report")
    print("=" * 60)
    print(f"File: {file_path}")
    print(f"Rows: {result.row_count:,}")
    print(f"Columns validated: {result.columns_validated}")
    print("-" * 60)

    for expectation in result.passed_expectations:
        print(f"  [PASSED] {expectation}")

    for expectation in result.failed_expectations:
        print(f"  [FAILED] {expectation}")

    print("-" * 60)
    total = len(result.passed_expectations) + len(result.failed_expectations)
    passed = len(result.passed_expectations)

    if result.success:
        print(f"Result: PASSED ({passed}/{total} checks)")
    else:
        print(f"Result: FAILED ({passed}/{total} checks passed)")
    print("=" * 60)


def main():
    if len(sys.argv) != 2:
        print("Usage: python -m salesforecast.data_validation.validate_product_data <csv_file_path>")
        sys.exit(1)

    file_path = sys.argv[1]

    if not Path(file_path).exists():
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    try:
        result = validate_product_data(file_path)
        print_report(result, file_path)
        sys.exit(0 if result.success else 1)
    except pd.errors.EmptyDataError:
        print(f"Error: File is empty: {file_path}")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
