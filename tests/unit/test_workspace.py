"""Tests for workspace composition: refresh, decorated listings, and change following."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from fsdocs.file_system import ChangeEvent, ChangeType
from fsdocs.workspace import MissingAnnotation, Workspace

DOCUMENT = {
    "items": {"src": {"label": "Sources", "type": "dir"}, "main.py": {"label": "Entry Point"}},
    "types": {"dir": "📁"},
}


class FakeSubscription:
    def __init__(self, events: list[ChangeEvent], before_each=None) -> None:
        self._events = list(events)
        self._before_each = before_each

    def __aiter__(self):
        return self

    async def __anext__(self) -> ChangeEvent:
        if not self._events:
            raise StopAsyncIteration
        event = self._events.pop(0)
        if self._before_each is not None:
            self._before_each(event)
        return event


class WorkspaceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        self.workspace = Workspace(self.root)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write_config(self, document: dict) -> None:
        (self.root / "fsdocs.config.json").write_text(json.dumps(document), encoding="utf-8")

    async def test_tree_items_are_filtered_sorted_and_decorated(self) -> None:
        self._write_config(DOCUMENT)
        (self.root / "src").mkdir()
        (self.root / ".git").mkdir()
        (self.root / "main.py").write_text("x", encoding="utf-8")

        await self.workspace.refresh()
        items = await self.workspace.tree_items()

        self.assertEqual([item.label for item in items], ["src", "fsdocs.config.json", "main.py"])
        self.assertEqual(items[0].description, "📁 Sources")
        self.assertIsNone(items[1].description)
        self.assertEqual(items[2].description, "Entry Point")

    async def test_refresh_without_config_leaves_items_undecorated(self) -> None:
        (self.root / "main.py").write_text("x", encoding="utf-8")

        self.assertIsNone(await self.workspace.refresh())
        self.assertFalse(await self.workspace.config_exists())
        [item] = await self.workspace.tree_items()

        self.assertIsNone(item.description)

    async def test_workspace_without_root_is_empty(self) -> None:
        workspace = Workspace(None)

        self.assertIsNone(await workspace.refresh())
        self.assertEqual(await workspace.tree_items(), [])
        self.assertIsNone(workspace.config_path)
        self.assertIsNone(workspace.watch())

    async def test_label_for_and_name_for(self) -> None:
        self._write_config(DOCUMENT)
        await self.workspace.refresh()
        (self.root / "main.py").write_text("x", encoding="utf-8")
        [entry] = [entry for entry in await self.workspace.get_children() if entry.name == "main.py"]

        self.assertEqual(self.workspace.name_for(entry), "main.py")
        self.assertEqual(self.workspace.label_for("main.py"), "Entry Point")
        with self.assertRaises(MissingAnnotation):
            self.workspace.label_for("other.py")

    async def test_custom_config_filename(self) -> None:
        (self.root / "docs.json").write_text(json.dumps(DOCUMENT), encoding="utf-8")
        workspace = Workspace(self.root, config_filename="docs.json")

        await workspace.refresh()

        self.assertTrue(await workspace.config_exists())
        self.assertEqual(workspace.overlay.describe("main.py"), "Entry Point")

    async def test_follow_changes_reloads_when_config_changes(self) -> None:
        self._write_config(DOCUMENT)
        await self.workspace.refresh()
        config_path = self.root / "fsdocs.config.json"
        other_path = self.root / "main.py"

        def rewrite_config(event: ChangeEvent) -> None:
            if event.path == config_path:
                self._write_config({"items": {"main.py": {"label": "Reloaded"}}})

        subscription = FakeSubscription(
            [ChangeEvent(ChangeType.CHANGED, other_path), ChangeEvent(ChangeType.CHANGED, config_path)],
            before_each=rewrite_config,
        )

        seen = [event async for event in self.workspace.follow_changes(subscription)]

        self.assertEqual([event.path for event in seen], [other_path, config_path])
        self.assertEqual(self.workspace.overlay.describe("main.py"), "Reloaded")


if __name__ == "__main__":
    unittest.main()
