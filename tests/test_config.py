"""Tests for the settings file handling.

Covers: tt.core.config
"""

import json
import shutil
import tempfile
import unittest
from pathlib import Path


class TestConfig(unittest.TestCase):
    """Tests for load_settings / save_settings in config.py."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)

        # Monkey-patch the settings path to use temp dir
        from tt.core import config
        self._orig_settings_path = config.SETTINGS_PATH
        config.SETTINGS_PATH = self._tmppath / "settings.json"

    def tearDown(self):
        from tt.core import config
        config.SETTINGS_PATH = self._orig_settings_path
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, payload):
        from tt.core import config
        with open(config.SETTINGS_PATH, "w", encoding="utf-8") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)

    def test_fresh_start_returns_defaults(self):
        """No settings file → defaults, and nothing written yet."""
        from tt.core import config
        settings = config.load_settings()
        self.assertEqual(settings["tick_interval_ms"], 10)
        self.assertTrue(settings["monotonic_ticks"])
        self.assertFalse(settings["always_on_top"])
        self.assertFalse(settings["confirm_reset"])
        self.assertEqual(settings["font"], "Calibri")
        self.assertFalse(config.SETTINGS_PATH.exists())

    def test_save_and_load_roundtrip(self):
        from tt.core import config
        settings = config.build_default_settings()
        settings["tick_interval_ms"] = 50
        settings["always_on_top"] = True
        settings["font"] = "Arial"
        config.save_settings(settings)

        loaded = config.load_settings()
        self.assertEqual(loaded, settings)

    def test_save_drops_unknown_keys(self):
        from tt.core import config
        settings = config.build_default_settings()
        settings["theme"] = "Galaxy Dark"
        config.save_settings(settings)

        with open(config.SETTINGS_PATH, encoding="utf-8") as f:
            on_disk = json.load(f)
        self.assertNotIn("theme", on_disk)

    def test_load_fills_missing_defaults(self):
        """Missing keys are filled in, present ones kept."""
        from tt.core import config
        self._write({"font": "Arial"})
        loaded = config.load_settings()
        self.assertEqual(loaded["font"], "Arial")
        self.assertEqual(loaded["tick_interval_ms"], 10)
        self.assertTrue(loaded["monotonic_ticks"])

    def test_load_replaces_wrong_types(self):
        from tt.core import config
        self._write({"tick_interval_ms": "fast", "always_on_top": 1, "confirm_reset": True})
        loaded = config.load_settings()
        self.assertEqual(loaded["tick_interval_ms"], 10)
        self.assertFalse(loaded["always_on_top"])
        self.assertTrue(loaded["confirm_reset"])

    def test_bool_is_not_accepted_as_interval(self):
        from tt.core import config
        self._write({"tick_interval_ms": True})
        self.assertEqual(config.load_settings()["tick_interval_ms"], 10)

    def test_load_clamps_interval(self):
        from tt.core import config
        self._write({"tick_interval_ms": 0})
        self.assertEqual(config.load_settings()["tick_interval_ms"], config.MIN_TICK_INTERVAL_MS)
        self._write({"tick_interval_ms": 50000})
        self.assertEqual(config.load_settings()["tick_interval_ms"], config.MAX_TICK_INTERVAL_MS)

    def test_corrupt_json_falls_back_to_defaults(self):
        from tt.core import config
        self._write("{not json")
        self.assertEqual(config.load_settings(), config.build_default_settings())

    def test_non_object_json_falls_back_to_defaults(self):
        from tt.core import config
        self._write([1, 2, 3])
        self.assertEqual(config.load_settings(), config.build_default_settings())

    def test_tick_interval_seconds(self):
        from tt.core import config
        self.assertAlmostEqual(config.tick_interval_seconds({"tick_interval_ms": 10}), 0.01)
        self.assertAlmostEqual(config.tick_interval_seconds({}), 0.01)
        self.assertAlmostEqual(config.tick_interval_seconds({"tick_interval_ms": 5000}), 1.0)


if __name__ == "__main__":
    unittest.main()
