"""Top-level package for the COVID monthly dashboard."""
