import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from filestat.config import default_config_path, load_config
from filestat.core.errors import ConfigError, ValidationError


class TestConfig(unittest.TestCase):
    def test_default_path_prefers_env_then_xdg(self) -> None:
        with patch.dict(os.environ, {"FILESTAT_CONFIG": "/tmp/custom.yml", "XDG_CONFIG_HOME": "/xdg"}):
            self.assertEqual(default_config_path(), Path("/tmp/custom.yml"))
        env = {k: v for k, v in os.environ.items() if k != "FILESTAT_CONFIG"}
        env["XDG_CONFIG_HOME"] = "/xdg"
        with patch.dict(os.environ, env, clear=True):
            self.assertEqual(default_config_path(), Path("/xdg/filestat/config.yml"))

    def test_missing_default_config_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with patch.dict(os.environ, {"FILESTAT_CONFIG": str(Path(td) / "none.yml")}):
                cfg = load_config()
        self.assertIsNone(cfg.units)
        self.assertIsNone(cfg.format)
        self.assertIsNone(cfg.source)

    def test_missing_explicit_config_raises(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError) as cm:
                load_config(Path(td) / "none.yml")
        self.assertEqual(cm.exception.code, "config.not_found")

    def test_loads_valid_config(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "config.yml"
            p.write_text('units: e\nformat: "%d/%m/%Y"\ntrace: t.jsonl\n', encoding="utf-8")
            cfg = load_config(p)
        self.assertEqual(cfg.units, "e")
        self.assertEqual(cfg.format, "%d/%m/%Y")
        self.assertEqual(cfg.trace, "t.jsonl")
        self.assertEqual(cfg.source, p)

    def test_empty_file_is_empty_config(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "config.yml"
            p.write_text("", encoding="utf-8")
            cfg = load_config(p)
        self.assertIsNone(cfg.units)

    def test_rejects_invalid_units_and_unknown_keys(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "config.yml"
            p.write_text("units: x\n", encoding="utf-8")
            with self.assertRaises(ValidationError) as cm:
                load_config(p)
            self.assertEqual(cm.exception.code, "config.invalid")

            p.write_text("colour: blue\n", encoding="utf-8")
            with self.assertRaises(ValidationError):
                load_config(p)

    def test_rejects_non_mapping(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "config.yml"
            p.write_text("- e\n- h\n", encoding="utf-8")
            with self.assertRaises(ValidationError):
                load_config(p)

    def test_rejects_malformed_yaml(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            p = Path(td) / "config.yml"
            p.write_text("units: [e\n", encoding="utf-8")
            with self.assertRaises(ValidationError):
                load_config(p)


if __name__ == "__main__":
    unittest.main()
