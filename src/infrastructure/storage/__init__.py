"""
Backtest document storage.

Whole-document JSON persistence plus the schema normalization every stored
document passes through on its way in and out.
"""

from .format_normalizer import normalize, to_legacy_schema, to_new_schema
from .json_store import JsonBacktestStore

__all__ = ["JsonBacktestStore", "normalize", "to_legacy_schema", "to_new_schema"]
