"""
dblp provider implementation.

dblp serves three search endpoints (publications, authors, venues) with a
shared JSON envelope. This provider sends the request and hands the body
to the normalization layer.

API Documentation: https://dblp.org/faq/How+to+use+the+dblp+search+API.html
"""

import logging
from typing import Any, Dict, List, Optional, Union

from dblp_search.core.models import Author, Publication, Query, Record, RecordKind, Venue
from dblp_search.normalization.batch import parse_response
from dblp_search.providers.base import BaseProvider
from dblp_search.utils.logging import PerformanceLogger

logger = logging.getLogger(__name__)


class DblpProvider(BaseProvider):
    """Provider for the dblp search API.

    Example:
        >>> provider = DblpProvider()
        >>> for pub in provider.search_publication("The Part-Time Parliament"):
        ...     print(pub.title, pub.venues)
    """

    @property
    def name(self) -> str:
        """Get the provider name."""
        return "dblp"

    def search(self, query: Query, kind: Union[RecordKind, str]) -> List[Record]:
        """Run ``query`` against the endpoint serving ``kind``.

        An answer with a total of "0" returns an empty list.
        """
        kind = RecordKind(kind)
        url = self.config.endpoint_for(kind)
        params = self._translate_query(query)

        with PerformanceLogger(f"dblp {kind.value} search '{query.text}'", logger):
            envelope = self._make_request(url, params=params)
            records = self._normalize_response(envelope, kind)

        logger.info(f"dblp {kind.value} search '{query.text}': {len(records)} records")
        return records

    def search_publication(
        self, text: str, max_results: Optional[int] = None, first: Optional[int] = None
    ) -> List[Publication]:
        """Search publications.

        Example:
            >>> provider.search_publication("The Part-Time Parliament")[0].authors
            ['Leslie Lamport']
        """
        return self.search(self._query(text, max_results, first), RecordKind.PUBLICATION)  # type: ignore[return-value]

    def search_author(
        self, text: str, max_results: Optional[int] = None, first: Optional[int] = None
    ) -> List[Author]:
        """Search authors."""
        return self.search(self._query(text, max_results, first), RecordKind.AUTHOR)  # type: ignore[return-value]

    def search_venue(
        self, text: str, max_results: Optional[int] = None, first: Optional[int] = None
    ) -> List[Venue]:
        """Search venues."""
        return self.search(self._query(text, max_results, first), RecordKind.VENUE)  # type: ignore[return-value]

    def _query(self, text: str, max_results: Optional[int], first: Optional[int]) -> Query:
        return Query(
            text=text,
            max_results=max_results if max_results is not None else self.config.max_results,
            first=first,
        )

    def _translate_query(self, query: Query) -> Dict[str, Any]:
        """Translate a Query to dblp API parameters."""
        params: Dict[str, Any] = {"q": query.text, "format": "json"}

        if query.max_results is not None:
            params["h"] = query.max_results
        if query.first is not None:
            params["f"] = query.first

        return params

    def _normalize_response(self, raw: Any, kind: RecordKind) -> List[Record]:
        """Convert a dblp response body into records."""
        return parse_response(raw, kind, strict=self.config.strict)
