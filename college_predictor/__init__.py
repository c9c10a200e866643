"""MHT-CET DSE college cutoff predictor."""

__version__ = "1.0.0"
