"""
Unit tests for SatisfierConfig.
"""

import os
import shutil
import tempfile
import unittest

from satisfier.config import SatisfierConfig, get_config, load_config


class TestSatisfierConfig(unittest.TestCase):
    """Test cases for SatisfierConfig."""

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_defaults(self):
        config = SatisfierConfig()
        self.assertEqual(config.get("solver.strategy"), "stack")
        self.assertFalse(config.get("solver.fill_unassigned"))
        self.assertEqual(config.get("parser.negation_policy"), "flip")
        self.assertEqual(config.get("repository.type"), "json")
        self.assertEqual(config["repository.path"], "formulas.json")
        self.assertIsNone(config.get("logging.trace_dir"))

    def test_missing_key_returns_default(self):
        config = SatisfierConfig()
        self.assertEqual(config.get("solver.nonexistent", 5), 5)
        self.assertNotIn("solver.nonexistent", config)
        self.assertIn("solver.strategy", config)

    def test_set_and_update(self):
        config = SatisfierConfig()
        config.set("solver.strategy", "recursive")
        config["logging.level"] = "DEBUG"
        config.update({"parser": {"negation_policy": "tseitin"}})
        self.assertEqual(config.get("solver.strategy"), "recursive")
        self.assertEqual(config.get("logging.level"), "DEBUG")
        self.assertEqual(config.get("parser.negation_policy"), "tseitin")
        self.assertEqual(config.get("repository.type"), "json")

    def test_load_yaml_file(self):
        path = os.path.join(self.test_dir, "config.yaml")
        with open(path, "w") as f:
            f.write("solver:\n  strategy: recursive\nrepository:\n  path: /tmp/x.json\n")
        config = SatisfierConfig(path)
        self.assertEqual(config.get("solver.strategy"), "recursive")
        self.assertEqual(config.get("repository.path"), "/tmp/x.json")
        self.assertEqual(config.get("parser.negation_policy"), "flip")

    def test_missing_file_keeps_defaults(self):
        with self.assertLogs("satisfier.config", level="ERROR"):
            config = SatisfierConfig(os.path.join(self.test_dir, "nope.yaml"))
        self.assertEqual(config.get("solver.strategy"), "stack")

    def test_save_and_reload(self):
        config = SatisfierConfig()
        config.set("solver.strategy", "recursive")
        path = os.path.join(self.test_dir, "nested", "saved.yaml")
        config.save(path)
        self.assertEqual(SatisfierConfig(path).to_dict(), config.to_dict())

    def test_global_config(self):
        self.assertIs(load_config(), get_config())


if __name__ == "__main__":
    unittest.main()
