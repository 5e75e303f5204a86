"""
Tests for hit extraction from search envelopes.
"""

import unittest

from dblp_search.normalization.hits import extract_hits, extract_total
from dblp_search.utils.exceptions import MalformedEnvelope


def envelope(hits):
    return {"result": {"query": "q", "status": {"@code": "200"}, "hits": hits}}


class TestExtractHits(unittest.TestCase):
    def test_zero_total_without_hit_array(self):
        self.assertEqual(extract_hits({"result": {"hits": {"@total": "0"}}}), [])

    def test_zero_total_ignores_hit_array(self):
        hits = {"@total": "0", "hit": [{"info": {"title": "stale"}}]}
        self.assertEqual(extract_hits(envelope(hits)), [])

    def test_zero_total_ignores_malformed_hit(self):
        self.assertEqual(extract_hits(envelope({"@total": "0", "hit": {"info": {}}})), [])

    def test_fragments_in_array_order(self):
        hits = {
            "@total": "3",
            "@sent": "3",
            "hit": [
                {"@score": "9", "@id": "1", "info": {"title": "first"}},
                {"@score": "5", "@id": "2", "info": {"title": "second"}},
                {"@score": "1", "@id": "3", "info": {"title": "third"}},
            ],
        }
        fragments = extract_hits(envelope(hits))
        self.assertEqual([f["title"] for f in fragments], ["first", "second", "third"])

    def test_total_larger_than_page(self):
        hits = {"@total": "1520", "hit": [{"info": {"title": "only"}}]}
        self.assertEqual(len(extract_hits(envelope(hits))), 1)

    def test_hit_object_instead_of_array(self):
        hits = {"@total": "1", "hit": {"info": {"title": "lonely"}}}
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits(envelope(hits))
        self.assertEqual(ctx.exception.path, "result.hits.hit")

    def test_missing_hit_array_with_nonzero_total(self):
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits(envelope({"@total": "4"}))
        self.assertEqual(ctx.exception.path, "result.hits.hit")
        self.assertEqual(ctx.exception.details["total"], "4")

    def test_total_compared_as_string(self):
        # A numeric zero is not the documented "0" string
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits(envelope({"@total": 0}))
        self.assertEqual(ctx.exception.path, "result.hits.@total")

    def test_missing_total(self):
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits(envelope({"hit": []}))
        self.assertEqual(ctx.exception.path, "result.hits.@total")

    def test_missing_result(self):
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits({"error": "bad request"})
        self.assertEqual(ctx.exception.path, "result")

    def test_missing_hits(self):
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits({"result": {"query": "q"}})
        self.assertEqual(ctx.exception.path, "result.hits")

    def test_envelope_not_an_object(self):
        with self.assertRaises(MalformedEnvelope):
            extract_hits([])

    def test_hit_without_info(self):
        hits = {"@total": "2", "hit": [{"info": {"title": "a"}}, {"@score": "3"}]}
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits(envelope(hits))
        self.assertEqual(ctx.exception.path, "result.hits.hit[1].info")

    def test_hit_not_an_object(self):
        with self.assertRaises(MalformedEnvelope) as ctx:
            extract_hits(envelope({"@total": "1", "hit": ["title"]}))
        self.assertEqual(ctx.exception.path, "result.hits.hit[0]")

    def test_extract_total(self):
        self.assertEqual(extract_total(envelope({"@total": "42", "hit": []})), "42")


if __name__ == '__main__':
    unittest.main()
