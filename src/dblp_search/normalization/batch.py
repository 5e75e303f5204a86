"""
Normalization of whole hit lists.

Two error policies are offered:

- fail-fast (:func:`normalize_all`): the first malformed fragment aborts
  the batch and its error carries the fragment index;
- collect (:func:`normalize_all_collect`): malformed fragments are set
  aside with their indexed errors and every other fragment still becomes a
  record.

Record order always follows fragment order.
"""

import logging
from typing import Any, Dict, List, NamedTuple, Sequence, Union

from dblp_search.core.models import Record, RecordKind
from dblp_search.normalization.hits import extract_hits
from dblp_search.normalization.standardizer import normalize
from dblp_search.utils.exceptions import NormalizationError

logger = logging.getLogger(__name__)


class NormalizationResult(NamedTuple):
    """Outcome of a collecting normalization pass.

    Supports tuple unpacking: ``records, errors = normalize_all_collect(...)``.

    Attributes:
        records: Records of the well-formed fragments, in fragment order
        errors: One indexed error per malformed fragment, in fragment order
    """

    records: List[Record]
    errors: List[NormalizationError]


def normalize_all(
    fragments: Sequence[Dict[str, Any]], kind: Union[RecordKind, str]
) -> List[Record]:
    """Normalize every fragment, stopping at the first failure.

    Raises:
        NormalizationError: For the first malformed fragment, with ``index`` set
    """
    records = []
    for index, fragment in enumerate(fragments):
        try:
            records.append(normalize(fragment, kind))
        except NormalizationError as e:
            e.at_index(index)
            raise
    return records


def normalize_all_collect(
    fragments: Sequence[Dict[str, Any]], kind: Union[RecordKind, str]
) -> NormalizationResult:
    """Normalize every fragment, collecting failures instead of raising."""
    records: List[Record] = []
    errors: List[NormalizationError] = []

    for index, fragment in enumerate(fragments):
        try:
            records.append(normalize(fragment, kind))
        except NormalizationError as e:
            errors.append(e.at_index(index))

    return NormalizationResult(records, errors)


def parse_response(
    envelope: Any, kind: Union[RecordKind, str], strict: bool = True
) -> List[Record]:
    """Turn a decoded search response into records.

    Args:
        envelope: Decoded JSON response body
        kind: Record kind the endpoint serves
        strict: Fail on the first malformed hit; otherwise log and skip it

    Returns:
        Records in ranking order; empty when the search had no matches

    Raises:
        MalformedEnvelope: If the envelope itself is malformed (either mode)
        NormalizationError: In strict mode, for the first malformed hit
    """
    kind = RecordKind(kind)
    fragments = extract_hits(envelope)

    if strict:
        return normalize_all(fragments, kind)

    records, errors = normalize_all_collect(fragments, kind)
    for error in errors:
        logger.warning(f"Skipping malformed {kind.value} hit #{error.index}: {error}")

    return records
