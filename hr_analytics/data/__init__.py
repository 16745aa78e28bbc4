"""Readers turning CSV/Parquet exports into input records."""
