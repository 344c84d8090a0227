"""Cleaning, aggregation and charting for the NYPD shooting incident report."""

__version__ = "0.1.0"
