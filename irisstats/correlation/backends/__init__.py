"""Correlation backends."""
