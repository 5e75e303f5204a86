"""
Hit extraction for dblp search responses.

Every dblp search endpoint answers with the same envelope::

    {"result": {"hits": {"@total": "2", "hit": [{"info": {...}}, ...]}}}

When nothing matches, ``@total`` is ``"0"`` and ``hit`` is left out. The
functions here walk that envelope and hand back the ``info`` fragments in
the order the service ranked them.
"""

import logging
from typing import Any, Dict, List

from dblp_search.utils.exceptions import MalformedEnvelope

logger = logging.getLogger(__name__)

NO_HITS = "0"


def json_kind(value: Any) -> str:
    """Name the JSON kind of a decoded value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _hits_node(envelope: Any) -> Dict[str, Any]:
    if not isinstance(envelope, dict):
        raise MalformedEnvelope("$", f"Envelope is a JSON {json_kind(envelope)}, not an object")

    result = envelope.get("result")
    if not isinstance(result, dict):
        raise MalformedEnvelope("result", "Missing 'result' object")

    hits = result.get("hits")
    if not isinstance(hits, dict):
        raise MalformedEnvelope("result.hits", "Missing 'hits' object")

    return hits


def _total(hits: Dict[str, Any]) -> str:
    if "@total" not in hits:
        raise MalformedEnvelope("result.hits.@total", "Missing result count")

    total = hits["@total"]
    if not isinstance(total, str):
        raise MalformedEnvelope(
            "result.hits.@total",
            f"Result count is a JSON {json_kind(total)}, not a string",
        )
    return total


def extract_total(envelope: Any) -> str:
    """Get the verbatim ``@total`` string of an envelope.

    Raises:
        MalformedEnvelope: If the count is missing or not a string
    """
    return _total(_hits_node(envelope))


def extract_hits(envelope: Any) -> List[Dict[str, Any]]:
    """Extract the ``info`` fragment of every hit, in ranking order.

    A total of ``"0"`` is the normal "no matches" answer and yields an
    empty list whatever ``hit`` holds. The comparison is on the string, as
    the API sends it.

    Args:
        envelope: Decoded JSON response body

    Returns:
        One fragment per hit

    Raises:
        MalformedEnvelope: If the envelope does not have the documented
            shape, including a non-zero total with no ``hit`` array

    Example:
        >>> extract_hits({"result": {"hits": {"@total": "0"}}})
        []
    """
    hits = _hits_node(envelope)
    total = _total(hits)

    if total == NO_HITS:
        logger.debug("Envelope reports no hits")
        return []

    if "hit" not in hits:
        raise MalformedEnvelope(
            "result.hits.hit", f"Total is {total} but the hit array is missing", total=total
        )

    hit_list = hits["hit"]
    if not isinstance(hit_list, list):
        raise MalformedEnvelope(
            "result.hits.hit", f"Hit list is a JSON {json_kind(hit_list)}, not an array"
        )

    fragments = []
    for i, hit in enumerate(hit_list):
        if not isinstance(hit, dict):
            raise MalformedEnvelope(
                f"result.hits.hit[{i}]", f"Hit is a JSON {json_kind(hit)}, not an object"
            )

        info = hit.get("info")
        if not isinstance(info, dict):
            raise MalformedEnvelope(f"result.hits.hit[{i}].info", "Hit has no 'info' object")

        fragments.append(info)

    logger.debug(f"Extracted {len(fragments)} of {total} hits")
    return fragments
