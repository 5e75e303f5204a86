"""
Record normalization for dblp search hits.

The dblp API picks the JSON shape of a field from how many values it
holds: one author is an object, several are an array of objects; one venue
is a string, several are an array of strings; an author without notes has
no ``notes`` member at all. This module resolves each of those
"single-or-many" fields into a tuple and builds the typed records.

Every failure raises a :class:`NormalizationError` subclass naming the
field; no record is ever built from a fragment that failed.
"""

import json
import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional, Tuple, TypeVar, Union

from dblp_search.core.models import Author, AuthorNote, Publication, Record, RecordKind, Venue
from dblp_search.normalization.hits import json_kind
from dblp_search.utils.exceptions import (
    MissingAttribute,
    MissingRequiredField,
    NormalizationError,
    TypeMismatch,
    UnexpectedFieldShape,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Missing:
    """Marker for a member that is not present in the fragment."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()


def resolve_polymorphic_list(
    value: Any, field: str, extract: Callable[[Any, str], T]
) -> Tuple[T, ...]:
    """Resolve a single-or-many value into a tuple.

    Dispatch on the JSON kind of ``value``:

    - absent (:data:`MISSING`): no values
    - array: one value per element, in array order
    - object or string: exactly one value

    ``extract`` turns one element into its canonical form and decides which
    element kinds the field accepts, so an author field rejects bare
    strings and a venue field rejects objects.

    Args:
        value: Decoded JSON node, or MISSING
        field: Field name used in error messages
        extract: Per-element extractor ``(element, field) -> value``

    Returns:
        The resolved values

    Raises:
        UnexpectedFieldShape: If ``value`` is null, a number or a boolean

    Example:
        >>> resolve_polymorphic_list("TOCS", "venue", venue_name)
        ('TOCS',)
    """
    if value is MISSING:
        return ()
    if isinstance(value, list):
        return tuple(extract(element, field) for element in value)
    if isinstance(value, (dict, str)):
        return (extract(value, field),)
    raise UnexpectedFieldShape(field, json_kind(value))


def _string_attribute(element: Dict[str, Any], attribute: str, field: str) -> str:
    if attribute not in element or element[attribute] is None:
        raise MissingAttribute(attribute, field)

    value = element[attribute]
    if not isinstance(value, str):
        raise TypeMismatch(f"{field}.{attribute}", "string", json_kind(value))
    return value


def author_name(element: Any, field: str) -> str:
    """Extract the name of one author entry (``{"@pid": ..., "text": name}``)."""
    if not isinstance(element, dict):
        raise UnexpectedFieldShape(field, json_kind(element))
    return _string_attribute(element, "text", field)


def author_note(element: Any, field: str) -> AuthorNote:
    """Extract one profile note (``{"@type": ..., "text": ...}``)."""
    if not isinstance(element, dict):
        raise UnexpectedFieldShape(field, json_kind(element))
    return AuthorNote(
        note_type=_string_attribute(element, "@type", field),
        text=_string_attribute(element, "text", field),
    )


def venue_name(element: Any, field: str) -> str:
    """Accept a venue entry, which is always a bare string."""
    if not isinstance(element, str):
        raise UnexpectedFieldShape(field, json_kind(element))
    return element


def alias_name(element: Any, field: str) -> str:
    """Accept an alias entry, which is always a bare string."""
    if not isinstance(element, str):
        raise UnexpectedFieldShape(field, json_kind(element))
    return element


def unwrap(value: Any, field: str, inner_key: str, allow_string: bool = False) -> Any:
    """Open a wrapper object such as ``{"author": [...]}``.

    Args:
        value: The wrapper node, or MISSING
        field: Wrapper field name
        inner_key: Member holding the single-or-many value
        allow_string: Pass a bare string through unwrapped

    Returns:
        The inner node, or MISSING when the wrapper itself is absent

    Raises:
        MissingAttribute: If the wrapper lacks ``inner_key``
        UnexpectedFieldShape: If the wrapper is not an object
    """
    if value is MISSING:
        return MISSING
    if isinstance(value, dict):
        if inner_key not in value:
            raise MissingAttribute(inner_key, field)
        return value[inner_key]
    if allow_string and isinstance(value, str):
        return value
    raise UnexpectedFieldShape(field, json_kind(value))


class FieldExtractor:
    """Typed access to the top-level members of one fragment.

    Example:
        >>> extractor = FieldExtractor({"title": "Paxos Made Simple", "pages": 51})
        >>> extractor.require_string("title")
        'Paxos Made Simple'
        >>> extractor.optional_string("pages")
        '51'
    """

    def __init__(self, fragment: Dict[str, Any]):
        """Initialize with a fragment.

        Args:
            fragment: The ``info`` object of one hit
        """
        self.fragment = fragment

    def get(self, field: str) -> Any:
        """Get a member, or MISSING if the fragment lacks it."""
        return self.fragment.get(field, MISSING)

    def require_string(self, field: str) -> str:
        """Get a member that must be present and a JSON string.

        Raises:
            MissingRequiredField: If the member is absent or null
            TypeMismatch: If the member is not a string
        """
        value = self.get(field)
        if value is MISSING or value is None:
            raise MissingRequiredField(field)
        if not isinstance(value, str):
            raise TypeMismatch(field, "string", json_kind(value))
        return value

    def optional_string(self, field: str) -> Optional[str]:
        """Get an optional scalar member as a string.

        Absent and null give None; numbers and booleans give their JSON
        text.

        Raises:
            TypeMismatch: If the member is an object or an array
        """
        value = self.get(field)
        if value is MISSING or value is None:
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, (bool, int, float)):
            return json.dumps(value)
        raise TypeMismatch(field, "string", json_kind(value))


def _for_kind(kind: RecordKind) -> Callable:
    """Tag normalization errors raised by the wrapped builder with ``kind``."""

    def decorator(func: Callable[[Dict[str, Any]], T]) -> Callable[[Dict[str, Any]], T]:
        @wraps(func)
        def wrapper(fragment: Dict[str, Any]) -> T:
            try:
                if not isinstance(fragment, dict):
                    raise TypeMismatch("info", "object", json_kind(fragment))
                return func(fragment)
            except NormalizationError as e:
                e.for_kind(kind.value)
                raise

        return wrapper

    return decorator


@_for_kind(RecordKind.PUBLICATION)
def normalize_publication(fragment: Dict[str, Any]) -> Publication:
    """Build a Publication from one publication-search fragment.

    Raises:
        NormalizationError: On the first malformed or missing field
    """
    extractor = FieldExtractor(fragment)

    authors = resolve_polymorphic_list(
        unwrap(extractor.get("authors"), "authors", "author"), "authors.author", author_name
    )
    venues = resolve_polymorphic_list(extractor.get("venue"), "venue", venue_name)

    return Publication(
        authors=authors,
        title=extractor.require_string("title"),
        venues=venues,
        year=extractor.require_string("year"),
        type=extractor.require_string("type"),
        key=extractor.require_string("key"),
        url=extractor.require_string("url"),
        ee=extractor.require_string("ee"),
        access=extractor.optional_string("access"),
        publisher=extractor.optional_string("publisher"),
        doi=extractor.optional_string("doi"),
        pages=extractor.optional_string("pages"),
        volume=extractor.optional_string("volume"),
        number=extractor.optional_string("number"),
    )


@_for_kind(RecordKind.AUTHOR)
def normalize_author(fragment: Dict[str, Any]) -> Author:
    """Build an Author from one author-search fragment.

    Raises:
        NormalizationError: On the first malformed or missing field
    """
    extractor = FieldExtractor(fragment)

    notes = resolve_polymorphic_list(
        unwrap(extractor.get("notes"), "notes", "note"), "notes.note", author_note
    )
    aliases = resolve_polymorphic_list(
        unwrap(extractor.get("aliases"), "aliases", "alias", allow_string=True),
        "aliases.alias",
        alias_name,
    )

    return Author(
        name=extractor.require_string("author"),
        url=extractor.require_string("url"),
        notes=notes,
        aliases=aliases,
    )


@_for_kind(RecordKind.VENUE)
def normalize_venue(fragment: Dict[str, Any]) -> Venue:
    """Build a Venue from one venue-search fragment."""
    extractor = FieldExtractor(fragment)

    return Venue(
        name=extractor.require_string("venue"),
        acronym=extractor.optional_string("acronym"),
        type=extractor.require_string("type"),
        url=extractor.require_string("url"),
    )


_NORMALIZERS: Dict[RecordKind, Callable[[Dict[str, Any]], Record]] = {
    RecordKind.PUBLICATION: normalize_publication,
    RecordKind.AUTHOR: normalize_author,
    RecordKind.VENUE: normalize_venue,
}


def normalize(fragment: Dict[str, Any], kind: Union[RecordKind, str]) -> Record:
    """Build the record of ``kind`` from one fragment.

    Args:
        fragment: The ``info`` object of one hit
        kind: Record kind, as a RecordKind or its string value

    Returns:
        Publication, Author or Venue

    Raises:
        ValueError: If ``kind`` is not a known record kind
        NormalizationError: If the fragment is malformed
    """
    return _NORMALIZERS[RecordKind(kind)](fragment)
