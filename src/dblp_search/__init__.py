"""
dblp-search: a client for the dblp publication, author and venue search API.

Example:
    >>> from dblp_search import DblpProvider
    >>> provider = DblpProvider()
    >>> authors = provider.search_author("Leslie Lamport")
"""

__version__ = "0.3.0"

from dblp_search.core.models import Author, AuthorNote, Publication, Query, RecordKind, Venue
from dblp_search.normalization import extract_hits, normalize, parse_response
from dblp_search.providers import DblpProvider

__all__ = [
    "__version__",
    "Publication",
    "Author",
    "AuthorNote",
    "Venue",
    "RecordKind",
    "Query",
    "extract_hits",
    "normalize",
    "parse_response",
    "DblpProvider",
]
