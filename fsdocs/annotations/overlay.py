"""Annotation lookup and display composition.

``AnnotationTable`` is an immutable snapshot of one parsed sidecar document.
``ConfigurationOverlay`` owns the current snapshot reference and swaps it
wholesale on every load, so a reader that grabbed ``overlay.table`` keeps a
consistent view for the rest of its render pass.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from ..file_system import FileNotFound, FileSystemProvider
from .schema import AnnotationDocument, AnnotationRecord, ConfigurationParseError, parse_annotation_document

logger = logging.getLogger(__name__)

_BACKTICK_RUN_RE = re.compile(r"`+")


@dataclass(frozen=True)
class Tooltip:
    """Rich tooltip text in Markdown."""

    markdown: str

    def __str__(self) -> str:
        return self.markdown


def _code_block(text: str) -> str:
    """Fence ``text`` so none of its contents is read as Markdown."""
    longest = max((len(run) for run in _BACKTICK_RUN_RE.findall(text)), default=0)
    fence = "`" * max(3, longest + 1)
    return f"{fence}\n{text}\n{fence}\n"


@dataclass(frozen=True)
class AnnotationTable:
    items: Mapping[str, AnnotationRecord]
    environments: Mapping[str, str]
    types: Mapping[str, str]

    @classmethod
    def from_document(cls, document: AnnotationDocument) -> AnnotationTable:
        return cls(
            items=MappingProxyType(dict(document.items)),
            environments=MappingProxyType(dict(document.environments)),
            types=MappingProxyType(dict(document.types)),
        )

    def record_for(self, name: str) -> AnnotationRecord | None:
        return self.items.get(name)

    def environment_icon(self, record: AnnotationRecord) -> str | None:
        if record.environment is None:
            return None
        return self.environments.get(record.environment)

    def type_icon(self, record: AnnotationRecord) -> str | None:
        if record.type is None:
            return None
        return self.types.get(record.type)

    def describe(self, name: str) -> str | None:
        """Return ``"<env icon> <type icon> <label>"`` for ``name``.

        Tags that are absent or missing from their icon table are skipped.
        """
        record = self.record_for(name)
        if record is None:
            return None

        parts: list[str] = []
        environment_icon = self.environment_icon(record)
        if environment_icon is not None:
            parts.append(environment_icon)
        type_icon = self.type_icon(record)
        if type_icon is not None:
            parts.append(type_icon)
        parts.append(record.label)
        return " ".join(parts)

    def tooltip(self, name: str) -> Tooltip | None:
        record = self.record_for(name)
        if record is None:
            return None

        out = [f"**{record.label}**"]
        if record.environment is not None:
            out.append(_tag_segment(self.environment_icon(record), record.environment))
        if record.type is not None:
            out.append(_tag_segment(self.type_icon(record), record.type))
        if record.description is not None:
            out.append("\n\n" + _code_block(record.description))
        return Tooltip("".join(out))


def _tag_segment(icon: str | None, tag: str) -> str:
    if icon is None:
        return f" [{tag}]"
    return f" [{icon} · {tag}]"


class ConfigurationOverlay:
    """Current annotation snapshot plus the loaders that replace it.

    ``table`` is ``None`` whenever no usable document is loaded: the
    document is missing, or it failed to parse. Lookups then return ``None``.
    """

    def __init__(self, table: AnnotationTable | None = None) -> None:
        self._table = table
        self.last_error: ConfigurationParseError | None = None

    @property
    def table(self) -> AnnotationTable | None:
        return self._table

    def clear(self) -> None:
        self._table = None
        self.last_error = None

    def load(self, data: bytes | str) -> AnnotationTable | None:
        """Replace the snapshot from raw document bytes; never raises on bad input."""
        try:
            document = parse_annotation_document(data)
        except ConfigurationParseError as exc:
            logger.error("fsdocs: %s", exc)
            self._table = None
            self.last_error = exc
            return None

        table = AnnotationTable.from_document(document)
        self._table = table
        self.last_error = None
        logger.debug("loaded %d annotation(s)", len(table.items))
        return table

    async def load_file(self, path: Path, provider: FileSystemProvider) -> AnnotationTable | None:
        """Load the sidecar document at ``path``; a missing file means no annotations."""
        try:
            data = await provider.read_file(path)
        except FileNotFound:
            logger.debug("fsdocs: missing config file '%s'", path.name)
            self.clear()
            return None
        return self.load(data)

    def describe(self, name: str) -> str | None:
        table = self._table
        return table.describe(name) if table is not None else None

    def tooltip(self, name: str) -> Tooltip | None:
        table = self._table
        return table.tooltip(name) if table is not None else None

    def label_for(self, name: str) -> str | None:
        table = self._table
        if table is None:
            return None
        record = table.record_for(name)
        return record.label if record is not None else None


__all__ = [
    "Tooltip",
    "AnnotationTable",
    "ConfigurationOverlay",
]
