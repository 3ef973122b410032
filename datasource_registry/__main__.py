#!/usr/bin/env python3
"""
Allows the CLI to be run as:
    python -m datasource_registry
"""

from .cli import main

if __name__ == "__main__":
    main()
