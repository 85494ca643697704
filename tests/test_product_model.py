"""Tests for training, saving and predicting with the product forecast model."""

import dataclasses

import pandas as pd
import pytest

from salesforecast.data_ingestion.product_data import ProductData, load_product_data
from salesforecast.training import product_model


def test_pipeline_concatenates_numeric_and_one_hot_features(product_stats):
    """Verify the feature matrix holds 8 numeric stats plus one column per product."""
    pipeline = product_model.build_pipeline()
    features = pipeline.named_steps["features"].fit_transform(product_stats)

    n_products = product_stats["productId"].nunique()
    assert features.shape == (len(product_stats), 8 + n_products)


def test_cross_validation_reports_all_metrics(product_stats_path):
    df = load_product_data(product_stats_path)

    summary = product_model.cross_validate_pipeline(product_model.build_pipeline(), df)

    for key in ("l1", "l2", "rms", "loss_fn", "r2"):
        assert set(summary[key]) == {"mean", "std"}
    assert summary["l1"]["mean"] > 0
    assert summary["rms"]["mean"] == pytest.approx(summary["l2"]["mean"] ** 0.5, rel=0.5)
    assert summary["r2"]["mean"] > 0.5
    assert summary["r2_ci95"] >= 0


def test_cross_validation_leaves_pipeline_unfitted(product_stats_path):
    df = load_product_data(product_stats_path)
    pipeline = product_model.build_pipeline()

    product_model.cross_validate_pipeline(pipeline, df)

    assert not hasattr(pipeline.named_steps["features"], "transformers_")


def test_train_and_save_model_writes_loadable_model(product_stats_path, tmp_path):
    model_path = tmp_path / "model.zip"

    product_model.train_and_save_model(product_stats_path, model_path)

    assert model_path.exists()
    model = product_model.load_model(model_path)
    predictions = product_model.predict(model, [sample for _, sample, _ in product_model.SAMPLES])
    assert len(predictions) == 4
    assert all(p.score > 0 for p in predictions)


def test_training_twice_leaves_one_model_file(product_stats_path, tmp_path):
    """Verify retraining replaces the model instead of adding a second file."""
    model_path = tmp_path / "models" / "product_month_fastTreeTweedie.zip"
    model_path.parent.mkdir()

    first = product_model.train_and_save_model(product_stats_path, model_path)
    second = product_model.train_and_save_model(product_stats_path, model_path)

    assert list(model_path.parent.iterdir()) == [model_path]
    assert first == second
    product_model.load_model(model_path)


def test_training_is_reproducible(product_stats_path, tmp_path):
    first_path = tmp_path / "first.zip"
    second_path = tmp_path / "second.zip"

    product_model.train_and_save_model(product_stats_path, first_path)
    product_model.train_and_save_model(product_stats_path, second_path)

    samples = [sample for _, sample, _ in product_model.SAMPLES]
    first = product_model.predict(product_model.load_model(first_path), samples)
    second = product_model.predict(product_model.load_model(second_path), samples)
    assert first == second


def test_existing_model_file_is_replaced(product_stats_path, tmp_path):
    model_path = tmp_path / "model.zip"
    model_path.write_bytes(b"stale model")

    product_model.train_and_save_model(product_stats_path, model_path)

    assert model_path.read_bytes() != b"stale model"
    product_model.load_model(model_path)


def test_missing_data_file_raises_without_model(tmp_path):
    model_path = tmp_path / "model.zip"

    with pytest.raises(FileNotFoundError):
        product_model.train_and_save_model(tmp_path / "missing.csv", model_path)

    assert not model_path.exists()


def test_malformed_data_file_raises_without_model(tmp_path):
    data_path = tmp_path / "bad.csv"
    data_path.write_text("productId,units\n263,910\n")
    model_path = tmp_path / "model.zip"

    with pytest.raises(ValueError):
        product_model.train_and_save_model(data_path, model_path)

    assert not model_path.exists()


def test_unwritable_model_path_raises(product_stats_path, tmp_path):
    with pytest.raises(FileNotFoundError):
        product_model.train_and_save_model(product_stats_path, tmp_path / "no_such_dir" / "model.zip")


def test_load_missing_model_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        product_model.load_model(tmp_path / "missing.zip")


def test_test_prediction_tracks_known_value(trained_model_path):
    """Verify the first product 263 forecast, for a month absent from training, lands within 20% of 551."""
    predictions = product_model.test_prediction(trained_model_path)

    assert len(predictions) == 4
    assert predictions[0].score == pytest.approx(551, rel=0.2)


def test_test_prediction_prints_results(trained_model_path, capsys):
    product_model.test_prediction(trained_model_path)

    out = capsys.readouterr().out
    assert "** Testing Product 1 **" in out
    assert "** Testing Product 2 **" in out
    assert "Product: 263, month: 11, year: 2017 - Real value (units): 551" in out
    assert "Product: 988, month: 12, year: 2017 - Forecast Prediction (units):" in out


def test_unknown_product_still_predicts(trained_model_path):
    """Verify product ids not seen in training do not break prediction."""
    model = product_model.load_model(trained_model_path)
    sample = ProductData(productId="unseen", year=2017, month=5, units=400,
                         avg=20, count=20, max=90, min=1, prev=380)

    prediction = product_model.predict(model, [sample])[0]

    assert prediction.score > 0


def test_prediction_ignores_label_value(trained_model_path):
    model = product_model.load_model(trained_model_path)
    _, sample, _ = product_model.SAMPLES[0]
    labelled = dataclasses.replace(sample, next=9999)

    assert product_model.predict(model, [sample]) == product_model.predict(model, [labelled])


def test_training_prints_cross_validation_metrics(product_stats_path, tmp_path, capsys):
    product_model.train_and_save_model(product_stats_path, tmp_path / "model.zip")

    out = capsys.readouterr().out
    assert "Cross-validating to get model's accuracy metrics" in out
    assert "Metrics for XGBRegressor Regression model" in out
    assert "R-squared" in out


def test_prediction_frame_matches_training_frame(product_stats_path):
    """Verify samples and loaded rows share a column layout."""
    df = load_product_data(product_stats_path)
    samples = product_model.to_frame([sample for _, sample, _ in product_model.SAMPLES])

    pd.testing.assert_index_equal(df.columns, samples.columns)
    assert (df.dtypes == samples.dtypes).all()


def test_blank_cells_raise_without_model(product_stats, tmp_path):
    data_path = tmp_path / "blank.csv"
    product_stats = product_stats.astype({"units": object, "productId": object})
    product_stats.loc[:49, ["units", "productId"]] = None
    product_stats.to_csv(data_path, index=False)
    model_path = tmp_path / "model.zip"

    with pytest.raises(ValueError, match="Blank values"):
        product_model.train_and_save_model(data_path, model_path)

    assert not model_path.exists()
