"""
Exception hierarchy for dblp-search.

This module defines the exceptions raised while parsing dblp search
responses and while talking to the dblp endpoints. Every failure is a
recoverable, typed error; nothing in the package aborts the process.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DblpError(Exception):
    """Base exception for all dblp-search errors.

    Provides common functionality for error details and timestamps.
    """

    def __init__(self, message: str, details: Optional[Dict] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> Dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "timestamp": self.timestamp.isoformat(),
        }


class MalformedEnvelope(DblpError):
    """The response envelope does not have the expected total/hit shape.

    Raised by the hits extractor. ``path`` points at the offending
    location, e.g. ``result.hits.hit`` or ``result.hits.hit[3].info``.
    """

    def __init__(self, path: str, message: str = "Malformed search envelope", **kwargs: Any):
        """Initialize the envelope error.

        Args:
            path: Dotted path of the offending node
            message: Human-readable error message
            **kwargs: Additional details
        """
        super().__init__(message, {"path": path, **kwargs})
        self.path = path


class NormalizationError(DblpError):
    """A fragment could not be turned into a record.

    Base class for all per-fragment failures. ``kind`` is the record kind
    being built and ``index`` the position of the fragment in the hit list,
    attached by the batch layer through :meth:`at_index`.
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        kind: Optional[str] = None,
        index: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the normalization error.

        Args:
            message: Human-readable error message
            field: Name of the field being normalized
            kind: Record kind (publication, author, venue)
            index: Position of the fragment in the hit list
            **kwargs: Additional details
        """
        details = kwargs
        if field:
            details["field"] = field
        if kind:
            details["kind"] = kind
        if index is not None:
            details["index"] = index
        super().__init__(message, details)
        self.field = field
        self.kind = kind
        self.index = index

    def for_kind(self, kind: str) -> "NormalizationError":
        """Record the record kind on the error and return it."""
        self.kind = kind
        self.details["kind"] = kind
        return self

    def at_index(self, index: int) -> "NormalizationError":
        """Record the fragment index on the error and return it."""
        self.index = index
        self.details["index"] = index
        return self


class UnexpectedFieldShape(NormalizationError):
    """A single-or-many field holds a JSON kind it may not hold."""

    def __init__(self, field: str, found: str, **kwargs: Any) -> None:
        """Initialize the shape error.

        Args:
            field: Name of the single-or-many field
            found: JSON kind encountered (object, array, string, ...)
            **kwargs: Additional details
        """
        super().__init__(f"Unexpected {found} in '{field}'", field=field, found=found, **kwargs)
        self.found = found


class MissingAttribute(NormalizationError):
    """A nested object lacks an attribute the resolver requires."""

    def __init__(self, attribute: str, field: Optional[str] = None, **kwargs: Any) -> None:
        """Initialize the missing attribute error.

        Args:
            attribute: Attribute name (``text``, ``@type``, ``author``, ...)
            field: Field holding the nested object
            **kwargs: Additional details
        """
        super().__init__(
            f"Missing attribute '{attribute}'", field=field, attribute=attribute, **kwargs
        )
        self.attribute = attribute


class MissingRequiredField(NormalizationError):
    """A required top-level field is absent from the fragment."""

    def __init__(self, field: str, **kwargs: Any) -> None:
        super().__init__(f"Missing required field '{field}'", field=field, **kwargs)


class TypeMismatch(NormalizationError):
    """A top-level field is not of its declared JSON type."""

    def __init__(self, field: str, expected: str, found: str, **kwargs: Any) -> None:
        """Initialize the type mismatch error.

        Args:
            field: Field name
            expected: Declared JSON type
            found: JSON type encountered
            **kwargs: Additional details
        """
        super().__init__(
            f"Field '{field}' should be {expected}, got {found}",
            field=field,
            expected=expected,
            found=found,
            **kwargs,
        )
        self.expected = expected
        self.found = found


class ProviderError(DblpError):
    """Transport-related errors.

    Base class for all errors that occur when talking to a dblp endpoint.
    """

    def __init__(self, provider: str, message: str, **kwargs: Any) -> None:
        """Initialize the provider error.

        Args:
            provider: Name of the provider
            message: Human-readable error message
            **kwargs: Additional details to store
        """
        super().__init__(f"[{provider}] {message}", kwargs)
        self.provider = provider


class RateLimitError(ProviderError):
    """Hit API rate limit.

    Should trigger retry logic with backoff.
    """

    def __init__(
        self,
        provider: str,
        message: str = "Rate limit exceeded",
        retry_after: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the rate limit error.

        Args:
            provider: Name of the provider
            message: Human-readable error message
            retry_after: Optional seconds to wait before retrying
            **kwargs: Additional details
        """
        super().__init__(provider, message, retry_after=retry_after, **kwargs)
        self.retry_after = retry_after


class NetworkError(ProviderError):
    """Network/timeout issues.

    Should trigger retry logic.
    """

    def __init__(
        self,
        provider: str,
        message: str = "Network error",
        status_code: Optional[int] = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the network error.

        Args:
            provider: Name of the provider
            message: Human-readable error message
            status_code: Optional HTTP status code
            **kwargs: Additional details
        """
        super().__init__(provider, message, status_code=status_code, **kwargs)
        self.status_code = status_code


class ConfigurationError(DblpError):
    """Configuration error.

    Raised when the client configuration is invalid or incomplete.
    """

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = kwargs
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
        self.config_key = config_key
