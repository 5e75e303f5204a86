"""
Core functionality for dblp-search.

This package contains the record models and the client configuration.
"""

from .config import (
    AUTHOR_API_ENDPOINT,
    PUBLICATION_API_ENDPOINT,
    VENUE_API_ENDPOINT,
    ClientConfig,
    load_config,
    load_config_from_dict,
    save_config,
)
from .models import Author, AuthorNote, Publication, Query, Record, RecordKind, Venue

__all__ = [
    # Models
    "Publication",
    "Author",
    "AuthorNote",
    "Venue",
    "Record",
    "RecordKind",
    "Query",
    # Configuration
    "ClientConfig",
    "PUBLICATION_API_ENDPOINT",
    "AUTHOR_API_ENDPOINT",
    "VENUE_API_ENDPOINT",
    "load_config",
    "load_config_from_dict",
    "save_config",
]
