"""CLI behavior tests.

Verifies how ``fsdocs.cli.main`` picks the workspace root and what it prints.
"""

from __future__ import annotations

import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from watchdog.events import FileCreatedEvent, FileDeletedEvent, FileModifiedEvent

from fsdocs import cli
from fsdocs.file_system import watch
from fsdocs.workspace import Workspace

DOCUMENT = {
    "items": {
        "main.py": {"label": "Entry Point", "type": "script", "description": "starts things"},
        "src": {"label": "Sources"},
    },
    "types": {"script": "S"},
}


def _make_tree(root: Path) -> None:
    (root / "fsdocs.config.json").write_text(json.dumps(DOCUMENT), encoding="utf-8")
    (root / "src").mkdir()
    (root / "src" / "util.py").write_text("x", encoding="utf-8")
    (root / ".git").mkdir()
    (root / "main.py").write_text("x", encoding="utf-8")


class CliTreeTests(unittest.TestCase):
    def test_prints_annotated_tree_for_explicit_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            stdout = io.StringIO()
            with mock.patch.object(sys, "argv", ["fsdocs", str(root), "--no-color"]), mock.patch("sys.stdout", stdout):
                cli.main()

        self.assertEqual(
            stdout.getvalue().splitlines(),
            [
                f"{root.name}/",
                "▸ src/  Sources",
                "    util.py",
                "  fsdocs.config.json",
                "  main.py  S Entry Point",
            ],
        )

    def test_depth_limits_expansion(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            stdout = io.StringIO()
            with (
                mock.patch.object(sys, "argv", ["fsdocs", str(root), "--no-color", "--depth", "1"]),
                mock.patch("sys.stdout", stdout),
            ):
                cli.main()

        self.assertNotIn("util.py", stdout.getvalue())
        self.assertIn("▸ src/  Sources", stdout.getvalue())

    def test_defaults_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "only.txt").write_text("x", encoding="utf-8")
            previous_cwd = Path.cwd()
            stdout = io.StringIO()
            try:
                os.chdir(root)
                with mock.patch.object(sys, "argv", ["fsdocs", "--no-color"]), mock.patch("sys.stdout", stdout):
                    cli.main()
            finally:
                os.chdir(previous_cwd)

        self.assertIn("  only.txt", stdout.getvalue().splitlines())

    def test_missing_directory_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with mock.patch.object(sys, "argv", ["fsdocs", str(missing)]):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main()

        self.assertIn("Not a directory", str(ctx.exception.code))


class CliDescribeTests(unittest.TestCase):
    def test_describe_prints_tooltip_markdown(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            stdout = io.StringIO()
            with (
                mock.patch.object(sys, "argv", ["fsdocs", str(root), "--describe", "main.py", "--no-color"]),
                mock.patch("sys.stdout", stdout),
            ):
                cli.main()

        self.assertEqual(stdout.getvalue(), "**Entry Point** [S · script]\n\n```\nstarts things\n```\n")

    def test_describe_unknown_name_exits(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)

            with mock.patch.object(sys, "argv", ["fsdocs", str(root), "--describe", "other.py"]):
                with self.assertRaises(SystemExit) as ctx:
                    cli.main()

        self.assertEqual(ctx.exception.code, "Item 'other.py' has no annotation")


class FeedingObserver:
    """Observer double that replays watchdog events as soon as it starts."""

    def __init__(self, events) -> None:
        self._events = list(events)
        self._handler = None
        self.stopped = False

    def schedule(self, handler, path: str, recursive: bool = False) -> None:
        self._handler = handler

    def start(self) -> None:
        for event in self._events:
            self._handler.on_any_event(event)

    def stop(self) -> None:
        self.stopped = True

    def join(self, timeout: float | None = None) -> None:
        return None


class LineCountingStdout(io.StringIO):
    """Captured stdout that closes ``subscription`` once enough lines arrive."""

    def __init__(self, expected_lines: int) -> None:
        super().__init__()
        self.expected_lines = expected_lines
        self.subscription = None

    def write(self, text: str) -> int:
        written = super().write(text)
        if self.subscription is not None and self.getvalue().count("\n") >= self.expected_lines:
            self.subscription.dispose()
        return written


class CliWatchTests(unittest.TestCase):
    def test_watch_streams_classified_change_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            (root / "born.txt").write_text("x", encoding="utf-8")
            observer = FeedingObserver(
                [
                    FileCreatedEvent(str(root / "born.txt")),
                    FileModifiedEvent(str(root / "born.txt")),
                    FileDeletedEvent(str(root / "gone.txt")),
                ]
            )
            stdout = LineCountingStdout(expected_lines=3)
            watch_calls: list[tuple[bool, tuple[str, ...]]] = []

            def fake_watch(workspace, *, recursive=False, excludes=()):
                watch_calls.append((recursive, tuple(excludes)))
                stdout.subscription = watch(
                    workspace.root,
                    recursive=recursive,
                    excludes=excludes,
                    observer_factory=lambda: observer,
                )
                return stdout.subscription

            with (
                mock.patch.object(sys, "argv", ["fsdocs", str(root), "--watch", "--recursive", "--exclude", "*.tmp"]),
                mock.patch("sys.stdout", stdout),
                mock.patch.object(Workspace, "watch", fake_watch),
            ):
                cli.main()

        self.assertEqual(stdout.getvalue().splitlines(), ["+ born.txt", "~ born.txt", "- gone.txt"])
        self.assertEqual(watch_calls, [(True, ("*.tmp",))])
        self.assertTrue(observer.stopped)


if __name__ == "__main__":
    unittest.main()
