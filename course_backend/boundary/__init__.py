"""Boundary adapters (persistent store)."""
