"""Translate raw OS watch callbacks into classified change events.

Watchdog observers deliver callbacks on their own thread. Each callback is
reduced to a raw ``(kind, name)`` pair (``"change"`` for content/metadata
updates, ``"rename"`` for everything that may create or remove a path),
handed to the event loop, and classified there:

- ``"change"`` is always ``CHANGED``;
- anything else is ``CREATED`` when the path exists now, ``DELETED`` otherwise.

No debouncing happens here; every callback yields exactly one event.
"""

from __future__ import annotations

import asyncio
import fnmatch
import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path, PurePath

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

from .errors import normalize_os_error
from .fs import normalize_nfc, path_exists
from .types import ChangeEvent, ChangeType

logger = logging.getLogger(__name__)

RAW_CHANGE = "change"
RAW_RENAME = "rename"

OBSERVER_JOIN_TIMEOUT_SECONDS = 1.0

_CLOSED = object()


async def classify_change(root: Path, event_kind: str, raw_name: str) -> ChangeEvent:
    """Classify one raw callback for ``root`` into a ``ChangeEvent``."""
    filepath = root / normalize_nfc(raw_name)
    if event_kind == RAW_CHANGE:
        return ChangeEvent(ChangeType.CHANGED, filepath)
    if await path_exists(filepath):
        return ChangeEvent(ChangeType.CREATED, filepath)
    return ChangeEvent(ChangeType.DELETED, filepath)


def is_excluded(raw_name: str, excludes: Iterable[str]) -> bool:
    """Return whether root-relative ``raw_name`` matches an exclude glob."""
    posix_name = PurePath(raw_name).as_posix()
    return any(fnmatch.fnmatch(posix_name, pattern) for pattern in excludes)


class RawEventHandler(FileSystemEventHandler):
    """Reduce watchdog events to ``(kind, root-relative name)`` callbacks."""

    def __init__(self, root: Path, deliver: Callable[[str, str], None]) -> None:
        super().__init__()
        self._root = os.fspath(root)
        self._deliver = deliver

    def _relative(self, raw_path: str | bytes) -> str:
        return os.path.relpath(os.fsdecode(raw_path), self._root)

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type == EVENT_TYPE_MODIFIED:
            # Directory modifications only echo child creations/deletions.
            if event.is_directory:
                return
            self._deliver(RAW_CHANGE, self._relative(event.src_path))
        elif event.event_type in (EVENT_TYPE_CREATED, EVENT_TYPE_DELETED):
            self._deliver(RAW_RENAME, self._relative(event.src_path))
        elif event.event_type == EVENT_TYPE_MOVED:
            self._deliver(RAW_RENAME, self._relative(event.src_path))
            self._deliver(RAW_RENAME, self._relative(event.dest_path))


class WatchSubscription:
    """Cancellable stream of ``ChangeEvent`` values for one watched root.

    Iterate with ``async for``. ``dispose()`` and ``aclose()`` stop the
    observer and end the iteration; either may be called any number of times.
    """

    def __init__(
        self,
        root: Path,
        *,
        recursive: bool = False,
        excludes: Iterable[str] = (),
        observer_factory: Callable[[], object] = Observer,
    ) -> None:
        self.root = root
        self.recursive = recursive
        self.excludes = tuple(excludes)
        self._observer_factory = observer_factory
        self._observer = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._raw: asyncio.Queue = asyncio.Queue()
        self._events: asyncio.Queue = asyncio.Queue()
        self._pump: asyncio.Task | None = None
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def start(self) -> WatchSubscription:
        """Schedule the OS watch; must be called with a running event loop."""
        self._loop = asyncio.get_running_loop()
        observer = self._observer_factory()
        try:
            observer.schedule(RawEventHandler(self.root, self.deliver), os.fspath(self.root), recursive=self.recursive)
            observer.start()
        except OSError as exc:
            self._loop = None
            raise normalize_os_error(exc, self.root) from exc
        self._observer = observer
        self._pump = self._loop.create_task(self._classify_forever())
        logger.debug("watching %s (recursive=%s)", self.root, self.recursive)
        return self

    def deliver(self, event_kind: str, raw_name: str) -> None:
        """Accept one raw callback; safe to call from any thread."""
        if self._disposed or self._loop is None:
            return
        if is_excluded(raw_name, self.excludes):
            return
        try:
            self._loop.call_soon_threadsafe(self._raw.put_nowait, (event_kind, raw_name))
        except RuntimeError:
            # Loop already closed; nothing left to deliver to.
            return

    async def _classify_forever(self) -> None:
        while True:
            event_kind, raw_name = await self._raw.get()
            event = await classify_change(self.root, event_kind, raw_name)
            logger.debug("%s %s", event.type.value, event.path)
            self._events.put_nowait(event)

    def _shutdown(self):
        """Stop delivery and return the observer still to be joined, if any."""
        if self._disposed:
            return None
        self._disposed = True
        observer = self._observer
        self._observer = None
        if observer is not None:
            observer.stop()
        if self._pump is not None:
            self._pump.cancel()
            self._pump = None
        self._events.put_nowait(_CLOSED)
        logger.debug("stopped watching %s", self.root)
        return observer

    def dispose(self) -> None:
        """Stop watching and wait for the observer thread; for non-async callers."""
        observer = self._shutdown()
        if observer is not None:
            observer.join(OBSERVER_JOIN_TIMEOUT_SECONDS)

    async def aclose(self) -> None:
        """Stop watching; the observer thread is joined off the event loop."""
        observer = self._shutdown()
        if observer is not None:
            await asyncio.to_thread(observer.join, OBSERVER_JOIN_TIMEOUT_SECONDS)

    def __aiter__(self) -> WatchSubscription:
        return self

    async def __anext__(self) -> ChangeEvent:
        if self._disposed and self._events.empty():
            raise StopAsyncIteration
        item = await self._events.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    async def __aenter__(self) -> WatchSubscription:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def watch(
    root: Path,
    *,
    recursive: bool = False,
    excludes: Iterable[str] = (),
    observer_factory: Callable[[], object] = Observer,
) -> WatchSubscription:
    """Start watching ``root`` and return the live subscription."""
    subscription = WatchSubscription(
        root,
        recursive=recursive,
        excludes=excludes,
        observer_factory=observer_factory,
    )
    return subscription.start()


__all__ = [
    "RAW_CHANGE",
    "RAW_RENAME",
    "classify_change",
    "is_excluded",
    "RawEventHandler",
    "WatchSubscription",
    "watch",
]
