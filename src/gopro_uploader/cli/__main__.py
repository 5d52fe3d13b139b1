#!/usr/bin/env python3
"""
CLI entry point for gopro_uploader.cli module.

This allows running: python -m gopro_uploader.cli
"""

from .main import cli

if __name__ == "__main__":
    cli()
