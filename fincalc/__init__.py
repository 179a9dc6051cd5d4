"""Financial calculators built on a shared period-stepping projection engine."""

__version__ = "0.1.0"
