"""Static defaults shared across layers."""
