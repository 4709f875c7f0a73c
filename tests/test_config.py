from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from picoview import config


class ViewerConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "picoview.json"
        env = {key: value for key, value in os.environ.items() if key != config.CONFIG_PATH_ENV}
        patches = [
            mock.patch("picoview.config.CONFIG_PATH", self.config_path),
            mock.patch.dict("picoview.config.os.environ", env, clear=True),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, payload: object) -> None:
        self.config_path.write_text(json.dumps(payload), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_viewer_config(), config.ViewerConfig())
        self.assertEqual(config.ViewerConfig().tab_stop, 8)
        self.assertEqual(config.ViewerConfig().status_message_seconds, 5.0)

    def test_values_are_read_from_json(self) -> None:
        self._write({"tab_stop": 4, "status_message_seconds": 2.5, "escape_timeout_ms": 50})
        loaded = config.load_viewer_config()
        self.assertEqual(loaded, config.ViewerConfig(tab_stop=4, status_message_seconds=2.5, escape_timeout_ms=50))

    def test_out_of_range_and_mistyped_values_fall_back(self) -> None:
        self._write({"tab_stop": 0, "status_message_seconds": True, "escape_timeout_ms": "fast"})
        self.assertEqual(config.load_viewer_config(), config.ViewerConfig())

        self._write({"tab_stop": True, "status_message_seconds": -1, "escape_timeout_ms": 5000})
        self.assertEqual(config.load_viewer_config(), config.ViewerConfig())

    def test_malformed_json_falls_back(self) -> None:
        self.config_path.write_text("{not json", encoding="utf-8")
        self.assertEqual(config.load_config(), {})
        self.assertEqual(config.load_viewer_config(), config.ViewerConfig())

    def test_non_object_json_falls_back(self) -> None:
        self._write([1, 2, 3])
        self.assertEqual(config.load_config(), {})

    def test_environment_overrides_config_path(self) -> None:
        other = Path(self._tmp.name) / "other.json"
        other.write_text(json.dumps({"tab_stop": 2}), encoding="utf-8")
        with mock.patch.dict("picoview.config.os.environ", {config.CONFIG_PATH_ENV: str(other)}):
            self.assertEqual(config.config_path(), other)
            self.assertEqual(config.load_viewer_config().tab_stop, 2)


if __name__ == "__main__":
    unittest.main()
