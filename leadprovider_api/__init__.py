"""
Top‑level package for the Lead Provider API.

This file makes ``leadprovider_api`` a Python package so that modules
within ``app`` can be imported using fully qualified names like
``leadprovider_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
