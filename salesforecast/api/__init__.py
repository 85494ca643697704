"""
API Module.

This module provides a FastAPI application for serving product unit-sales
forecasts via REST endpoints.

Components:
    - FastAPI application setup
    - Prediction endpoint
    - Health check endpoint
    - Request/response models
"""
