"""Frequency accumulation: tables, the counter engine, and file entry points."""

from .engine import CounterEngine, check_readable, process_file, process_files
from .table import FrequencyTable

__all__ = ["CounterEngine", "FrequencyTable", "check_readable", "process_file", "process_files"]
