"""Sidecar-document annotations: schema validation and display overlay."""

from __future__ import annotations

from .overlay import AnnotationTable, ConfigurationOverlay, Tooltip
from .schema import AnnotationDocument, AnnotationRecord, ConfigurationParseError, parse_annotation_document

__all__ = [
    "AnnotationTable",
    "ConfigurationOverlay",
    "Tooltip",
    "AnnotationDocument",
    "AnnotationRecord",
    "ConfigurationParseError",
    "parse_annotation_document",
]
