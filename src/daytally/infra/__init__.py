"""
Infrastructure layer - database, logging, settings, and technical concerns.

This layer holds the SQLAlchemy engine and unit of work, structlog setup
and process configuration.
"""
