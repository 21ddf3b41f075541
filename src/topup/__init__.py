"""
topup: company token top-up pipeline.

This package validates company and user records, joins users to their
companies, credits each company's top-up to its users' token balances
and writes a per-company report.
"""

from importlib.metadata import version

__version__ = version("topup")

__all__ = ["__version__"]
