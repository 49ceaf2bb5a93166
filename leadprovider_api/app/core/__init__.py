"""Core infrastructure: configuration, database, logging, security and errors."""
