# linkcount/__init__.py
"""
linkcount package initializer.
Defines package version; the CLI lives in :mod:`linkcount.cli`.
"""
__version__ = "0.1.0"

__all__ = ["__version__"]
