"""
Data Validation Module.

This module checks product stats files for schema and value problems
before training.
"""
