"""
SalesForecast Test Suite.

This package contains unit and integration tests for the SalesForecast
training pipeline and prediction API.

Test Modules:
    - test_product_data: Tests for reading product stats files
    - test_build_product_stats: Tests for building stats from order lines
    - test_validation: Tests for product data validation
    - test_product_model: Tests for training, saving and prediction
    - test_console_helpers: Tests for metrics summaries and output
    - test_train_model: Tests for the training entry point
    - test_api: Tests for API endpoints
"""
