import unittest
import sys
import os
import json
import tempfile

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config import load_config, geometry_from_config, reset_age_on_hit
from errors import ConfigError


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, name, text):
        path = os.path.join(self.tmp.name, name)
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_plain_text(self):
        cfg = load_config(self.write("cache.cfg", "2\n4\n32\n"))
        g = geometry_from_config(cfg)
        self.assertEqual((g.associativity, g.line_size, g.total_size), (2, 4, 32))
        self.assertEqual(g.address_layout, "standard")
        self.assertTrue(reset_age_on_hit(cfg))

    def test_plain_text_wrong_count(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("cache.cfg", "2 4\n"))

    def test_plain_text_not_integers(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("cache.cfg", "2\nfour\n32\n"))

    def test_json(self):
        path = self.write("cache.json", json.dumps({
            "associativity": 4, "line_size_bytes": 16, "size_bytes": 256,
            "address_layout": "legacy", "reset_age_on_hit": False,
        }))
        cfg = load_config(path)
        g = geometry_from_config(cfg)
        self.assertEqual(g.address_layout, "legacy")
        self.assertEqual(g.num_sets, 4)
        self.assertFalse(reset_age_on_hit(cfg))

    def test_json_missing_key(self):
        path = self.write("cache.json", json.dumps({"associativity": 4, "size_bytes": 256}))
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_json_invalid(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("cache.json", "{not json"))

    def test_invalid_utf8(self):
        path = os.path.join(self.tmp.name, "cache.cfg")
        with open(path, "wb") as f:
            f.write(b"2\n4\n\xff\n")
        with self.assertRaises(ConfigError):
            load_config(path)

    def test_reset_age_on_hit_must_be_boolean(self):
        for value in ("false", 0, None):
            path = self.write("cache.json", json.dumps({
                "associativity": 1, "line_size_bytes": 4, "size_bytes": 16,
                "reset_age_on_hit": value,
            }))
            with self.assertRaises(ConfigError, msg=repr(value)):
                reset_age_on_hit(load_config(path))

    def test_missing_file(self):
        with self.assertRaises(ConfigError):
            load_config(os.path.join(self.tmp.name, "absent.cfg"))

    def test_bad_geometry_surfaces_as_config_error(self):
        cfg = load_config(self.write("cache.cfg", "3 4 48"))
        with self.assertRaises(ConfigError):
            geometry_from_config(cfg)

    def test_legacy_flag_overrides(self):
        cfg = load_config(self.write("cache.cfg", "1 4 16"))
        self.assertEqual(geometry_from_config(cfg, legacy=True).address_layout, "legacy")
        self.assertFalse(reset_age_on_hit(cfg, legacy=True))


if __name__ == '__main__':
    unittest.main()
