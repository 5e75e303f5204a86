"""
Tests for the dblp provider.
"""

import unittest
from unittest.mock import MagicMock, patch

import requests

from dblp_search.core.config import AUTHOR_API_ENDPOINT, ClientConfig
from dblp_search.core.models import Author, Publication, Query, RecordKind
from dblp_search.providers.dblp import DblpProvider
from dblp_search.utils.exceptions import (
    MalformedEnvelope,
    NetworkError,
    ProviderError,
    UnexpectedFieldShape,
)

PUBLICATION_RESPONSE = {
    "result": {
        "query": "The Part-Time Parliament",
        "status": {"@code": "200", "text": "OK"},
        "hits": {
            "@total": "2",
            "@computed": "2",
            "@sent": "2",
            "@first": "0",
            "hit": [
                {
                    "@score": "8",
                    "@id": "1",
                    "info": {
                        "authors": {"author": {"@pid": "l/LeslieLamport", "text": "Leslie Lamport"}},
                        "title": "The Part-Time Parliament.",
                        "venue": "ACM Trans. Comput. Syst.",
                        "year": "1998",
                        "type": "Journal Articles",
                        "key": "journals/tocs/Lamport98",
                        "ee": "https://doi.org/10.1145/279227.279229",
                        "url": "https://dblp.org/rec/journals/tocs/Lamport98",
                    },
                },
                {
                    "@score": "4",
                    "@id": "2",
                    "info": {
                        "authors": {
                            "author": [
                                {"@pid": "l/LeslieLamport", "text": "Leslie Lamport"},
                                {"@pid": "m/DahliaMalkhi", "text": "Dahlia Malkhi"},
                            ]
                        },
                        "title": "Vertical Paxos and Primary-Backup Replication.",
                        "venue": ["PODC", "Part 1"],
                        "pages": "312-313",
                        "year": "2009",
                        "type": "Conference and Workshop Papers",
                        "key": "conf/podc/LamportMZ09",
                        "ee": "https://doi.org/10.1145/1582716.1582783",
                        "url": "https://dblp.org/rec/conf/podc/LamportMZ09",
                    },
                },
            ],
        },
    }
}


def mock_response(status_code=200, payload=None, headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.headers = headers or {}
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(str(status_code))
    return response


class TestDblpProvider(unittest.TestCase):
    def setUp(self):
        self.config = ClientConfig(rate_limit=100.0)

    def test_query_translation(self):
        provider = DblpProvider(self.config)
        params = provider._translate_query(Query(text="Paxos", max_results=25, first=50))
        self.assertEqual(params, {"q": "Paxos", "format": "json", "h": 25, "f": 50})

    def test_query_translation_minimal(self):
        provider = DblpProvider(self.config)
        self.assertEqual(
            provider._translate_query(Query(text="TOCS")), {"q": "TOCS", "format": "json"}
        )

    def test_search_publication(self):
        provider = DblpProvider(self.config)
        provider._make_request = MagicMock(return_value=PUBLICATION_RESPONSE)

        results = provider.search_publication("The Part-Time Parliament")

        provider._make_request.assert_called_once_with(
            self.config.publication_endpoint,
            params={"q": "The Part-Time Parliament", "format": "json"},
        )
        self.assertEqual(len(results), 2)
        self.assertIsInstance(results[0], Publication)
        self.assertEqual(results[0].authors, ("Leslie Lamport",))
        self.assertEqual(results[1].authors, ("Leslie Lamport", "Dahlia Malkhi"))
        self.assertEqual(results[1].venues, ("PODC", "Part 1"))

    def test_search_author_uses_author_endpoint(self):
        provider = DblpProvider(self.config)
        provider._make_request = MagicMock(
            return_value={
                "result": {
                    "hits": {
                        "@total": "1",
                        "hit": [
                            {
                                "info": {
                                    "author": "Leslie Lamport",
                                    "url": "https://dblp.org/pid/l/LeslieLamport",
                                }
                            }
                        ],
                    }
                }
            }
        )

        results = provider.search_author("Leslie Lamport", max_results=5)

        args, kwargs = provider._make_request.call_args
        self.assertEqual(args[0], AUTHOR_API_ENDPOINT)
        self.assertEqual(kwargs["params"]["h"], 5)
        self.assertIsInstance(results[0], Author)
        self.assertEqual(results[0].name, "Leslie Lamport")

    def test_zero_hits_is_empty(self):
        provider = DblpProvider(self.config)
        provider._make_request = MagicMock(return_value={"result": {"hits": {"@total": "0"}}})
        self.assertEqual(provider.search_venue("no such venue"), [])

    def test_default_max_results_from_config(self):
        provider = DblpProvider(ClientConfig(rate_limit=100.0, max_results=10))
        provider._make_request = MagicMock(return_value={"result": {"hits": {"@total": "0"}}})
        provider.search_venue("TOCS")
        self.assertEqual(provider._make_request.call_args.kwargs["params"]["h"], 10)

    def test_malformed_envelope_propagates(self):
        provider = DblpProvider(self.config)
        provider._make_request = MagicMock(
            return_value={"result": {"hits": {"@total": "1", "hit": {"info": {}}}}}
        )
        with self.assertRaises(MalformedEnvelope):
            provider.search_publication("x")

    def test_lenient_config_skips_bad_hits(self):
        provider = DblpProvider(ClientConfig(rate_limit=100.0, strict=False))
        response = {
            "result": {
                "hits": {
                    "@total": "2",
                    "hit": [
                        {"info": {"venue": 7, "type": "Journal", "url": "u"}},
                        {"info": {"venue": "TOCS", "type": "Journal", "url": "u"}},
                    ],
                }
            }
        }
        provider._make_request = MagicMock(return_value=response)
        results = provider.search(Query(text="TOCS"), RecordKind.VENUE)
        self.assertEqual([v.name for v in results], ["TOCS"])

    def test_strict_config_raises_on_bad_venue(self):
        provider = DblpProvider(self.config)
        fragment = dict(PUBLICATION_RESPONSE["result"]["hits"]["hit"][0]["info"], venue=None)
        provider._make_request = MagicMock(
            return_value={"result": {"hits": {"@total": "1", "hit": [{"info": fragment}]}}}
        )
        with self.assertRaises(UnexpectedFieldShape) as ctx:
            provider.search_publication("x")
        self.assertEqual(ctx.exception.index, 0)


class TestTransport(unittest.TestCase):
    def setUp(self):
        self.config = ClientConfig(rate_limit=100.0, mailto="me@example.org")

    def test_make_request_returns_json(self):
        session = MagicMock()
        session.get.return_value = mock_response(payload=PUBLICATION_RESPONSE)
        provider = DblpProvider(self.config, session=session)

        body = provider._make_request("https://dblp.org/search/publ/api", params={"q": "a b"})

        self.assertEqual(body, PUBLICATION_RESPONSE)
        headers = session.get.call_args.kwargs["headers"]
        self.assertIn("me@example.org", headers["User-Agent"])
        self.assertEqual(session.get.call_args.kwargs["timeout"], 30)
        self.assertEqual(provider.get_last_query(), "https://dblp.org/search/publ/api?q=a+b")

    def test_invalid_json(self):
        session = MagicMock()
        response = mock_response()
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response
        provider = DblpProvider(self.config, session=session)

        with self.assertRaises(ProviderError):
            provider._make_request("https://dblp.org/search/publ/api")

    @patch("dblp_search.utils.retry.time.sleep")
    def test_server_error_retried(self, mock_sleep):
        session = MagicMock()
        session.get.side_effect = [
            mock_response(503),
            mock_response(payload={"result": {"hits": {"@total": "0"}}}),
        ]
        provider = DblpProvider(self.config, session=session)

        self.assertEqual(provider.search_venue("TOCS"), [])
        self.assertEqual(session.get.call_count, 2)
        mock_sleep.assert_called_once()

    @patch("dblp_search.utils.retry.time.sleep")
    def test_connection_error_exhausts_retries(self, mock_sleep):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        provider = DblpProvider(self.config, session=session)

        with self.assertRaises(NetworkError):
            provider.search_venue("TOCS")
        self.assertEqual(session.get.call_count, 3)

    @patch("dblp_search.utils.retry.time.sleep")
    def test_client_error_not_retried(self, mock_sleep):
        session = MagicMock()
        session.get.return_value = mock_response(400)
        provider = DblpProvider(self.config, session=session)

        with self.assertRaises(ProviderError):
            provider.search_venue("TOCS")
        self.assertEqual(session.get.call_count, 1)
        mock_sleep.assert_not_called()


class TestSessionLifecycle(unittest.TestCase):
    @patch("dblp_search.providers.base.requests.Session")
    def test_close_owned_session(self, mock_session_cls):
        provider = DblpProvider(ClientConfig())
        provider.close()
        mock_session_cls.return_value.close.assert_called_once()

    @patch("dblp_search.providers.base.requests.Session")
    def test_context_manager_closes_session(self, mock_session_cls):
        with DblpProvider(ClientConfig()) as provider:
            self.assertIs(provider.session, mock_session_cls.return_value)
            mock_session_cls.return_value.close.assert_not_called()
        mock_session_cls.return_value.close.assert_called_once()

    def test_injected_session_left_open(self):
        session = MagicMock()
        DblpProvider(ClientConfig(), session=session).close()
        session.close.assert_not_called()


if __name__ == '__main__':
    unittest.main()
