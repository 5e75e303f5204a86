"""
Normalization module for dblp-search.

Turns decoded dblp search responses into typed records.
"""

from dblp_search.normalization.batch import (
    NormalizationResult,
    normalize_all,
    normalize_all_collect,
    parse_response,
)
from dblp_search.normalization.hits import extract_hits, extract_total
from dblp_search.normalization.standardizer import (
    MISSING,
    FieldExtractor,
    normalize,
    normalize_author,
    normalize_publication,
    normalize_venue,
    resolve_polymorphic_list,
)

__all__ = [
    "extract_hits",
    "extract_total",
    "MISSING",
    "FieldExtractor",
    "resolve_polymorphic_list",
    "normalize",
    "normalize_publication",
    "normalize_author",
    "normalize_venue",
    "normalize_all",
    "normalize_all_collect",
    "NormalizationResult",
    "parse_response",
]
