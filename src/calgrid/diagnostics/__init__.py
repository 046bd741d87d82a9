"""Diagnostics package.

- diagnostics: plain-text renderings of engine output for eyeballing grids
"""

__all__ = ["pretty_month"]
