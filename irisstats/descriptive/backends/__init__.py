"""Descriptive backends."""
