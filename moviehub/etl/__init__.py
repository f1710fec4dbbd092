"""Catalog synchronization engine (extract, dedup, enrich, load)."""
