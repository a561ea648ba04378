"""Conversion, storage and migration core."""
