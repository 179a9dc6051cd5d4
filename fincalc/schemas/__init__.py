"""Pydantic contracts for calculator inputs and results."""
