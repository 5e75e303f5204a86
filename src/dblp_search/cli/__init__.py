"""
Command-line interface for dblp-search.
"""

from dblp_search.cli.main import cli, main

__all__ = ["cli", "main"]
