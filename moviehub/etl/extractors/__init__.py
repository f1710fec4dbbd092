"""Data extractors."""
