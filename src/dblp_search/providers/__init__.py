"""
Provider implementations for dblp-search.

Example:
    >>> from dblp_search.providers import DblpProvider
    >>> provider = DblpProvider()
    >>> venues = provider.search_venue("TOCS")
"""

from .base import BaseProvider
from .dblp import DblpProvider

__all__ = [
    "BaseProvider",
    "DblpProvider",
]
