"""CLI command groups, one module per domain."""
