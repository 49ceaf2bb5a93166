"""
Service layer abstraction.

Each service encapsulates business logic for a domain and talks to the
SQLite database through ``core.db``.  Services raise the errors from
``core.errors``; API handlers stay free of SQL and error mapping.
"""
