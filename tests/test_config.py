"""
Tests for client configuration.
"""

import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from dblp_search.core.config import (
    PUBLICATION_API_ENDPOINT,
    VENUE_API_ENDPOINT,
    ClientConfig,
    load_config,
    load_config_from_dict,
    save_config,
)
from dblp_search.core.models import RecordKind
from dblp_search.utils.exceptions import ConfigurationError


class TestClientConfig(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_defaults(self):
        config = ClientConfig()
        self.assertEqual(config.publication_endpoint, PUBLICATION_API_ENDPOINT)
        self.assertEqual(config.endpoint_for(RecordKind.VENUE), VENUE_API_ENDPOINT)
        self.assertEqual(config.endpoint_for("author"), "https://dblp.org/search/author/api")
        self.assertTrue(config.strict)
        self.assertIsNone(config.max_results)

    def test_endpoint_must_be_url(self):
        with self.assertRaises(ConfigurationError) as ctx:
            load_config_from_dict({"venue_endpoint": "dblp.org/search/venue/api"})
        self.assertEqual(ctx.exception.config_key, "venue_endpoint")

    def test_unknown_key_rejected(self):
        with self.assertRaises(ConfigurationError):
            load_config_from_dict({"endpoint": "https://example.org"})

    def test_env_expansion(self):
        with patch.dict(os.environ, {"DBLP_MAILTO": "me@example.org"}):
            config = load_config_from_dict(
                {"mailto": "${DBLP_MAILTO}", "rate_limit": "${DBLP_RATE:-2.5}"}
            )
        self.assertEqual(config.mailto, "me@example.org")
        self.assertEqual(config.rate_limit, 2.5)

    def test_load_yaml(self):
        path = Path(self.test_dir) / "dblp.yml"
        path.write_text(
            "publication_endpoint: https://dblp.uni-trier.de/search/publ/api/\n"
            "max_results: 50\n"
            "strict: false\n",
            encoding="utf-8",
        )
        config = load_config(path)
        self.assertEqual(config.publication_endpoint, "https://dblp.uni-trier.de/search/publ/api")
        self.assertEqual(config.max_results, 50)
        self.assertFalse(config.strict)

    def test_load_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(Path(self.test_dir) / "missing.yml")

    def test_load_non_mapping(self):
        path = Path(self.test_dir) / "dblp.yml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with self.assertRaises(ConfigurationError):
            load_config(path)

    def test_save_and_reload(self):
        path = Path(self.test_dir) / "out" / "dblp.yml"
        config = ClientConfig(mailto="me@example.org", timeout=10)
        save_config(config, path)
        self.assertEqual(load_config(path), config)


if __name__ == '__main__':
    unittest.main()
