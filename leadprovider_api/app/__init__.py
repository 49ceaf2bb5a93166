"""
Application package initializer.

This package contains the main entrypoint for the API and all of its
submodules.  Each domain (auth, cart, orders, admin review) exposes a
router defined in ``api/endpoints`` and keeps its business logic in
``services``.  Request and response bodies live in ``schemas``.
"""

from .main import app  # noqa: F401
