"""
SalesForecast - Per-product monthly unit-sales forecasting.

This package trains a tweedie-loss gradient-boosted tree model that predicts
next month's unit sales for each product, persists it, and serves
predictions from the saved artifact.

Modules:
    config: Paths, cross-validation and regressor settings
    data_ingestion: Product stats records, CSV reader and stats builder
    data_validation: Schema and value checks for product stats files
    training: Pipeline construction, cross-validation, fit and prediction
    api: FastAPI application for model inference
"""

__version__ = "1.0.0"
