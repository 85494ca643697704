"""Runtime configuration for training and serving the product forecast model."""

import os

from dotenv import load_dotenv

# Load environment variables from .env
load_dotenv()

# File locations
DATA_PATH = os.getenv("FORECAST_DATA_PATH", "data/products.stats.csv")
DEFAULT_MODEL_PATH = "product_month_fastTreeTweedie.zip"
MODEL_PATH = os.getenv("FORECAST_MODEL_PATH", DEFAULT_MODEL_PATH)

# Cross-validation
CV_FOLDS = int(os.getenv("FORECAST_CV_FOLDS", "6"))
RANDOM_SEED = int(os.getenv("FORECAST_RANDOM_SEED", "42"))

# Boosted tree settings, matching the FastTreeTweedie defaults
REGRESSOR_PARAMS = {
    "objective": "reg:tweedie",
    "tweedie_variance_power": 1.5,
    "n_estimators": 100,
    "learning_rate": 0.2,
    "tree_method": "hist",
    "grow_policy": "lossguide",
    "max_leaves": 20,
    "max_depth": 0,
    "min_child_weight": 1,
    "n_jobs": 1,
}

MODEL_VERSION = "1.0.0"
