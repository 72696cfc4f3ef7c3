"""Core domain logic with no I/O."""
