"""
Utility modules for dblp-search.

This package contains:
- The exception hierarchy
- Retry logic with backoff
- Rate limiting
- Logging configuration
"""

from .exceptions import (
    ConfigurationError,
    DblpError,
    MalformedEnvelope,
    MissingAttribute,
    MissingRequiredField,
    NetworkError,
    NormalizationError,
    ProviderError,
    RateLimitError,
    TypeMismatch,
    UnexpectedFieldShape,
)
from .logging import (
    ColoredFormatter,
    PerformanceLogger,
    configure_library_logging,
    level_from_verbosity,
    setup_logging,
)
from .rate_limit import TokenBucket
from .retry import retry_with_backoff

__all__ = [
    # Exceptions
    "DblpError",
    "MalformedEnvelope",
    "NormalizationError",
    "UnexpectedFieldShape",
    "MissingAttribute",
    "MissingRequiredField",
    "TypeMismatch",
    "ProviderError",
    "RateLimitError",
    "NetworkError",
    "ConfigurationError",
    # Retry / rate limiting
    "retry_with_backoff",
    "TokenBucket",
    # Logging
    "setup_logging",
    "level_from_verbosity",
    "configure_library_logging",
    "PerformanceLogger",
    "ColoredFormatter",
]
