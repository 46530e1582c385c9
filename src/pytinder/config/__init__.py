"""pytinder configuration properties."""
