"""Data ingestion, schema and cleaning utilities."""

from .clean import CleaningOptions, CleanResult, clean_dataset
from .load import load_dataset
from .scan import scan_dataset

__all__ = ["CleaningOptions", "CleanResult", "clean_dataset", "load_dataset", "scan_dataset"]
