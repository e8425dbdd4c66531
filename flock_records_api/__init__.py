"""
Top‑level package for the Flock Records API.

This file makes ``flock_records_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``flock_records_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
