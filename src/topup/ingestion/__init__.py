"""
Data ingestion layer for loading the raw JSON sources.

All file reading happens through this module so IO and parse failures
surface with a consistent error taxonomy.
"""

from topup.ingestion.sources import load_companies, load_users, read_json

__all__ = ["load_companies", "load_users", "read_json"]
