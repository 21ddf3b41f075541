"""Report rendering and output."""

from topup.reporting.text import render, render_company, write_report

__all__ = ["render", "render_company", "write_report"]
