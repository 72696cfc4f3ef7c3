#!/usr/bin/env python3
"""
CLI entry point for daytally.cli module.

This allows running: python -m daytally.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
