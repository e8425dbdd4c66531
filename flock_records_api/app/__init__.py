"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (settings, logging, the JSON document store),
``schemas`` (request and response models), ``services`` (flock
bookkeeping) and ``api`` (HTTP routes).
"""

from .main import app  # noqa: F401
