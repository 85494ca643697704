"""
Data Ingestion Module.

This module provides the product stats records and the utilities that
read them from CSV or build them from raw order lines.

Components:
    - ProductData and ProductUnitPrediction records
    - Product stats CSV reader
    - Monthly product stats builder for the UCI Online Retail dataset
"""
