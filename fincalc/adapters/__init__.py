"""Adapters between the calculation core and its callers."""
