from __future__ import annotations

import contextlib
import unittest
from pathlib import Path
from unittest import mock

from lazybrowser.editor import launch_editor, resolve_editor_command


class ResolveEditorCommandTests(unittest.TestCase):
    def test_explicit_command_wins_and_is_split(self) -> None:
        env = {"VISUAL": "code", "EDITOR": "vim"}
        self.assertEqual(resolve_editor_command("nvim -u NONE", env), ("nvim", "-u", "NONE"))

    def test_visual_then_editor(self) -> None:
        self.assertEqual(resolve_editor_command(None, {"VISUAL": "hx", "EDITOR": "vim"}), ("hx",))
        self.assertEqual(resolve_editor_command(None, {"VISUAL": "  ", "EDITOR": "vim"}), ("vim",))

    def test_falls_back_to_first_editor_on_path(self) -> None:
        with mock.patch("lazybrowser.editor.shutil.which", side_effect=lambda name: "/usr/bin/vi" if name == "vi" else None):
            self.assertEqual(resolve_editor_command(None, {}), ("vi",))

    def test_nothing_found(self) -> None:
        with mock.patch("lazybrowser.editor.shutil.which", return_value=None):
            self.assertEqual(resolve_editor_command(None, {}), ())


class LaunchEditorTests(unittest.TestCase):
    def setUp(self) -> None:
        self.events: list[str] = []

    @contextlib.contextmanager
    def _suspend(self):
        self.events.append("release")
        try:
            yield
        finally:
            self.events.append("reacquire")

    def test_missing_command_reports_without_suspending(self) -> None:
        message = launch_editor(Path("/tmp/a.txt"), (), self._suspend)
        self.assertIn("no editor", message)
        self.assertEqual(self.events, [])

    def test_runs_editor_inside_suspended_terminal(self) -> None:
        def fake_run(cmd, check):
            self.events.append("run")
            return mock.Mock(returncode=0)

        with mock.patch("lazybrowser.editor.subprocess.run", side_effect=fake_run) as run_mock:
            result = launch_editor(Path("/tmp/a.txt"), ("nvim", "-p"), self._suspend)

        self.assertIsNone(result)
        run_mock.assert_called_once_with(["nvim", "-p", "/tmp/a.txt"], check=False)
        self.assertEqual(self.events, ["release", "run", "reacquire"])

    def test_launch_failure_is_reported_and_terminal_reacquired(self) -> None:
        with mock.patch("lazybrowser.editor.subprocess.run", side_effect=FileNotFoundError("no such editor")):
            result = launch_editor(Path("/tmp/a.txt"), ("missing-editor",), self._suspend)

        self.assertIn("Failed to launch editor", result)
        self.assertEqual(self.events, ["release", "reacquire"])


if __name__ == "__main__":
    unittest.main()
