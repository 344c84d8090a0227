"""Utility helpers for output files and directory management."""

from .io import ensure_dirs, save_table, savefig

__all__ = ["ensure_dirs", "save_table", "savefig"]
