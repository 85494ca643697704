"""
Model Training Module.

This module builds, cross-validates, trains and saves the per-product
monthly unit-sales model using scikit-learn pipelines and XGBoost.

Components:
    - product_model: Pipeline construction, cross-validation, fit, save/load
    - console_helpers: Section headers and fold-average metrics output
    - train_model: Command-line entry point
"""
