# bibnet/ingest/__init__.py

"""
Loading of bibliographic records from JSON and normalization of their labels.
"""

from .loader import load_records, parse_records, read_input
from .normalize import LabelNormalizer

__all__ = ["LabelNormalizer", "load_records", "parse_records", "read_input"]
