"""Shared helpers: numeric guards, date arithmetic and status enums."""
