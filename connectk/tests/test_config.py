import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from connectk.core.config import DEFAULT_CONFIG_PATH, EngineConfig, get_config_path, load_config


class TestConfig(unittest.TestCase):
    def write_yaml(self, text: str) -> Path:
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        with handle:
            handle.write(text)
        self.addCleanup(os.unlink, handle.name)
        return Path(handle.name)

    def test_shipped_defaults(self):
        config = load_config(DEFAULT_CONFIG_PATH)
        self.assertEqual(config.min_size, 4)
        self.assertEqual(config.max_size, 20)
        self.assertEqual((config.default_rows, config.default_cols, config.default_win_length), (6, 7, 4))
        self.assertEqual(config.max_positions, 12000)
        self.assertEqual(config.skill, 1.0)
        self.assertIsNone(config.seed)
        self.assertTrue(config.prune)

    def test_sections_are_flattened(self):
        path = self.write_yaml("board:\n  max_size: 12\nsearch:\n  skill: 0.5\n  seed: 42\n")
        config = load_config(path)
        self.assertEqual(config.max_size, 12)
        self.assertEqual(config.skill, 0.5)
        self.assertEqual(config.seed, 42)
        # Untouched keys keep their defaults
        self.assertEqual(config.min_size, 4)
        self.assertEqual(config.max_positions, 12000)

    def test_empty_file_gives_defaults(self):
        self.assertEqual(load_config(self.write_yaml("")), EngineConfig())

    def test_invalid_values_are_rejected(self):
        with self.assertRaises(ValidationError):
            load_config(self.write_yaml("board:\n  min_size: 10\n  max_size: 8\n"))
        with self.assertRaises(ValidationError):
            load_config(self.write_yaml("search:\n  skill: 2\n"))
        with self.assertRaises(ValidationError):
            EngineConfig(default_win_length=9)

    def test_env_override(self):
        with mock.patch.dict(os.environ, {"CONNECTK_CONFIG": "/tmp/other.yaml"}):
            self.assertEqual(get_config_path(), Path("/tmp/other.yaml"))
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertEqual(get_config_path(), DEFAULT_CONFIG_PATH)


if __name__ == '__main__':
    unittest.main()
