"""Core data models for dblp-search."""

from enum import Enum
from typing import Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class RecordKind(str, Enum):
    """The three dblp search endpoints and the record each one yields."""

    PUBLICATION = "publication"
    AUTHOR = "author"
    VENUE = "venue"


class Publication(BaseModel):
    """A publication hit from the dblp publication search.

    ``authors`` and ``venues`` are always tuples, whatever cardinality
    encoding the API used for them.

    Attributes:
        authors: Author names in document order
        title: Publication title
        venues: Venue names (usually one, several for split proceedings)
        year: Publication year, verbatim from the API
        type: dblp publication type (e.g. 'Journal Articles')
        key: dblp record key (e.g. 'journals/tocs/Lamport98')
        url: dblp record URL
        ee: Electronic edition link
        access: Access status ('open', 'closed', ...)
        publisher: Publisher name
        doi: Digital Object Identifier
        pages: Page range
        volume: Volume
        number: Issue number
    """

    authors: Tuple[str, ...] = Field(default_factory=tuple)
    title: str
    venues: Tuple[str, ...] = Field(default_factory=tuple)
    year: str
    type: str
    key: str
    url: str
    ee: str

    access: Optional[str] = None
    publisher: Optional[str] = None
    doi: Optional[str] = None
    pages: Optional[str] = None
    volume: Optional[str] = None
    number: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class AuthorNote(BaseModel):
    """A typed note on an author profile (affiliation, award, ...)."""

    note_type: str
    text: str

    model_config = ConfigDict(frozen=True)


class Author(BaseModel):
    """An author hit from the dblp author search.

    Attributes:
        name: Canonical author name
        url: dblp profile URL
        notes: Profile notes in document order
        aliases: Alternative names in document order
    """

    name: str
    url: str
    notes: Tuple[AuthorNote, ...] = Field(default_factory=tuple)
    aliases: Tuple[str, ...] = Field(default_factory=tuple)

    model_config = ConfigDict(frozen=True)


class Venue(BaseModel):
    """A venue hit from the dblp venue search."""

    name: str
    acronym: Optional[str] = None
    type: str
    url: str

    model_config = ConfigDict(frozen=True)


Record = Union[Publication, Author, Venue]


class Query(BaseModel):
    """Search query specification.

    Attributes:
        text: Search text, sent as ``q``
        max_results: Number of hits to request, sent as ``h``
        first: Offset of the first hit, sent as ``f``
    """

    text: str
    max_results: Optional[int] = Field(default=None, ge=1, le=1000)
    first: Optional[int] = Field(default=None, ge=0)

    model_config = ConfigDict(str_strip_whitespace=True)
