"""Train, persist and exercise the per-product monthly unit-sales model.

The model is a scikit-learn pipeline: numeric stats are passed through, the
product id is one-hot encoded, both groups are concatenated into one
feature matrix and fed to an XGBoost regressor with tweedie loss that
predicts the following month's units.
"""

from pathlib import Path

import joblib
from sklearn.compose import ColumnTransformer
from sklearn.metrics import make_scorer, mean_tweedie_deviance
from sklearn.model_selection import KFold, cross_validate
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import OneHotEncoder
from xgboost import XGBRegressor

from salesforecast.config import CV_FOLDS, DEFAULT_MODEL_PATH, RANDOM_SEED, REGRESSOR_PARAMS
from salesforecast.data_ingestion.product_data import (
    LABEL_COLUMN,
    NUMERIC_FEATURES,
    PRODUCT_ID_COLUMN,
    ProductData,
    ProductUnitPrediction,
    load_product_data,
    to_frame,
)
from salesforecast.training.console_helpers import (
    print_header,
    print_regression_folds_average_metrics,
    summarize_folds,
)

# Feature group names inside the ColumnTransformer
NUM_FEATURES = "NumFeatures"
CAT_FEATURES = "CatFeatures"

# Scorers keyed like console_helpers.METRIC_LABELS
SCORING = {
    "l1": "neg_mean_absolute_error",
    "l2": "neg_mean_squared_error",
    "rms": "neg_root_mean_squared_error",
    "loss_fn": make_scorer(
        mean_tweedie_deviance,
        greater_is_better=False,
        power=REGRESSOR_PARAMS["tweedie_variance_power"],
    ),
    "r2": "r2",
}

# Samples for the demo prediction run: (label, sample, known next-month units)
SAMPLES = [
    ("Product 1", ProductData(productId="263", year=2017, month=10, units=910,
                              avg=91, count=10, max=370, min=1, prev=1675), 551),
    ("Product 1", ProductData(productId="263", year=2017, month=11, units=551,
                              avg=29, count=35, max=221, min=1, prev=910), None),
    ("Product 2", ProductData(productId="988", year=2017, month=10, units=1094,
                              avg=43, count=25, max=220, min=1, prev=1036), 1076),
    ("Product 2", ProductData(productId="988", year=2017, month=11, units=1076,
                              avg=41, count=26, max=225, min=4, prev=1094), None),
]


def build_pipeline(random_state: int = RANDOM_SEED) -> Pipeline:
    """Build the unfitted feature and regression pipeline."""
    # Dense output keeps zero-valued stats from being read as missing
    features = ColumnTransformer(
        transformers=[
            (NUM_FEATURES, "passthrough", NUMERIC_FEATURES),
            (CAT_FEATURES, OneHotEncoder(handle_unknown="ignore"), [PRODUCT_ID_COLUMN]),
        ],
        remainder="drop",
        sparse_threshold=0,
    )

    regressor = XGBRegressor(random_state=random_state, **REGRESSOR_PARAMS)

    return Pipeline([
        ("features", features),
        ("regressor", regressor),
    ])


def cross_validate_pipeline(pipeline: Pipeline, df, n_folds: int = CV_FOLDS,
                            random_state: int = RANDOM_SEED) -> dict:
    """Run k-fold cross-validation on a copy of pipeline and summarize the folds.

    The pipeline passed in is left unfitted.
    """
    folds = KFold(n_splits=n_folds, shuffle=True, random_state=random_state)
    scores = cross_validate(pipeline, df, df[LABEL_COLUMN], cv=folds, scoring=SCORING,
                            error_score="raise")

    fold_metrics = {}
    for key in SCORING:
        values = scores[f"test_{key}"]
        # Error scorers report negated values
        fold_metrics[key] = values if key == "r2" else -values

    return summarize_folds(fold_metrics)


def save_model(model: Pipeline, output_model_path) -> None:
    with open(output_model_path, "wb") as f:
        joblib.dump(model, f)


def load_model(model_path) -> Pipeline:
    """Load a model written by save_model."""
    with open(model_path, "rb") as f:
        return joblib.load(f)


def predict(model: Pipeline, samples) -> list:
    """Forecast next-month units for each ProductData sample, in order."""
    scores = model.predict(to_frame(samples))
    return [ProductUnitPrediction(score=float(score)) for score in scores]


def train_and_save_model(data_path, output_model_path=DEFAULT_MODEL_PATH) -> dict:
    """Train and save the model for predicting next month product unit sales.

    Any file already at output_model_path is deleted first.

    Args:
        data_path: Input training file path.
        output_model_path: Trained model path.

    Returns:
        Cross-validation summary as produced by console_helpers.summarize_folds.
    """
    output_model_path = Path(output_model_path)
    if output_model_path.exists():
        output_model_path.unlink()

    return create_product_model_using_pipeline(data_path, output_model_path)


def create_product_model_using_pipeline(data_path, output_model_path) -> dict:
    """Cross-validate, fit and save the product forecasting pipeline."""
    print_header("Training product forecasting")

    df = load_product_data(data_path)
    print(f"Loaded {len(df):,} rows for {df[PRODUCT_ID_COLUMN].nunique()} products")

    pipeline = build_pipeline()
    algorithm_name = type(pipeline.named_steps["regressor"]).__name__

    # Single dataset, so accuracy comes from cross-validation instead of a holdout
    print("=============== Cross-validating to get model's accuracy metrics ===============")
    summary = cross_validate_pipeline(pipeline, df)
    print_regression_folds_average_metrics(algorithm_name, summary)

    model = pipeline.fit(df, df[LABEL_COLUMN])

    save_model(model, output_model_path)
    print(f"Model saved: {output_model_path}")

    return summary


def test_prediction(output_model_path=DEFAULT_MODEL_PATH) -> list:
    """Predict the fixed samples with a saved model and print them next to known values.

    Returns:
        ProductUnitPrediction list in SAMPLES order.
    """
    print_header("Testing Product Unit Sales Forecast model")

    model = load_model(output_model_path)
    predictions = predict(model, [sample for _, sample, _ in SAMPLES])

    current_label = None
    for (label, sample, real_value), prediction in zip(SAMPLES, predictions):
        if label != current_label:
            if current_label is not None:
                print(" ")
            print(f"** Testing {label} **")
            current_label = label

        period = f"Product: {sample.productId}, month: {int(sample.month) + 1}, year: {int(sample.year)}"
        if real_value is not None:
            print(f"{period} - Real value (units): {real_value}, "
                  f"Forecast Prediction (units): {prediction.score:.2f}")
        else:
            print(f"{period} - Forecast Prediction (units): {prediction.score:.2f}")

    return predictions
