#!/usr/bin/env python3
"""Train the product unit-sales forecast model and run sample predictions.

Usage:
    python -m salesforecast.training.train_model [data_path [model_path]]

Paths default to FORECAST_DATA_PATH and FORECAST_MODEL_PATH.
"""

import sys
from pathlib import Path

from salesforecast.config import DATA_PATH, MODEL_PATH
from salesforecast.data_validation.validate_product_data import print_report, validate_product_data
from salesforecast.training import product_model


def main():
    """Validate the data, train and save the model, then test it on fixed samples."""
    if len(sys.argv) > 3:
        print("Usage: python -m salesforecast.training.train_model [data_path [model_path]]")
        sys.exit(1)

    data_path = sys.argv[1] if len(sys.argv) > 1 else DATA_PATH
    model_path = sys.argv[2] if len(sys.argv) > 2 else MODEL_PATH

    if not Path(data_path).exists():
        print(f"Error: File not found: {data_path}")
        sys.exit(1)

    try:
        result = validate_product_data(data_path)
        if not result.success:
            print_report(result, data_path)
            sys.exit(1)

        product_model.train_and_save_model(data_path, model_path)
        product_model.test_prediction(model_path)

    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
