"""Tests for startup configuration and log setup."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from lazybrowser.config import (
    LOG_FILENAME,
    build_config,
    default_log_file,
    parse_log_level,
    resolve_start_dir,
)
from lazybrowser.log import LOGGER_NAME, setup_logging


class ConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_parse_log_level(self) -> None:
        self.assertEqual(parse_log_level("debug"), logging.DEBUG)
        self.assertEqual(parse_log_level(" Info "), logging.INFO)
        self.assertEqual(parse_log_level("chatty"), logging.WARNING)
        self.assertEqual(parse_log_level(None), logging.WARNING)

    def test_file_path_starts_in_its_parent(self) -> None:
        target = self.root / "readme.md"
        target.write_text("x", encoding="utf-8")

        self.assertEqual(resolve_start_dir(target), self.root)
        self.assertEqual(resolve_start_dir(self.root), self.root)

    def test_build_config_from_environment(self) -> None:
        env = {"EDITOR": "micro", "NO_COLOR": "1", "LAZYBROWSER_LOG_LEVEL": "debug"}
        config = build_config(self.root, environ=env, log_file=self.root / "x.log")

        self.assertEqual(config.start_dir, self.root)
        self.assertEqual(config.editor_command, ("micro",))
        self.assertFalse(config.color)
        self.assertEqual(config.log_level, logging.DEBUG)
        self.assertEqual(config.log_file, self.root / "x.log")

    def test_options_override_environment(self) -> None:
        env = {"EDITOR": "micro", "LAZYBROWSER_LOG_LEVEL": "debug"}
        config = build_config(self.root, editor="nano -w", log_level="error", style="friendly", environ=env)

        self.assertEqual(config.editor_command, ("nano", "-w"))
        self.assertTrue(config.color)
        self.assertEqual(config.style, "friendly")
        self.assertEqual(config.log_level, logging.ERROR)
        self.assertEqual(config.log_file, default_log_file())

    def test_no_color_flag(self) -> None:
        config = build_config(self.root, no_color=True, environ={"EDITOR": "vi"})
        self.assertFalse(config.color)

    def test_default_log_file_name(self) -> None:
        self.assertEqual(default_log_file().name, LOG_FILENAME)


class LoggingSetupTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        setup_logging(logging.WARNING, None)
        self._tmp.cleanup()

    def test_records_go_to_log_file(self) -> None:
        log_file = self.root / "logs" / "lazybrowser.log"
        logger = setup_logging(logging.INFO, log_file)

        logging.getLogger(f"{LOGGER_NAME}.file_ops").info("Deleted %s", "old.txt")
        for handler in logger.handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        self.assertIn("INFO", content)
        self.assertIn("Deleted old.txt", content)
        self.assertFalse(logger.propagate)

    def test_repeated_setup_replaces_handler(self) -> None:
        setup_logging(logging.INFO, self.root / "a.log")
        logger = setup_logging(logging.DEBUG, self.root / "b.log")

        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)

    def test_without_file_records_are_dropped(self) -> None:
        logger = setup_logging(logging.INFO, None)

        self.assertEqual(len(logger.handlers), 1)
        self.assertIsInstance(logger.handlers[0], logging.NullHandler)


if __name__ == "__main__":
    unittest.main()
