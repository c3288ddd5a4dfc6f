"""Ingestion configuration value objects."""
