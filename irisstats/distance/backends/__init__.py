"""Distance backends."""
