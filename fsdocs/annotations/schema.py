"""Validated schema for the ``fsdocs.config.json`` sidecar document.

Shape::

    {
      "items": {"<entry-name>": {"label": str, "environment"?: str, "type"?: str, "description"?: str}},
      "environments": {"<id>": "<icon>"},
      "types": {"<id>": "<icon>"}
    }

Records missing ``label`` (or of the wrong shape) are rejected when the
document is parsed, never lazily at lookup time.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class AnnotationRecord(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    label: str
    environment: str | None = None
    type: str | None = None
    description: str | None = None


class AnnotationDocument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    items: dict[str, AnnotationRecord] = Field(default_factory=dict)
    environments: dict[str, str] = Field(default_factory=dict)
    types: dict[str, str] = Field(default_factory=dict)


class ConfigurationParseError(Exception):
    """The sidecar document exists but is not valid JSON or violates the schema."""

    def __init__(self, message: str, *, is_syntax_error: bool = False) -> None:
        self.is_syntax_error = is_syntax_error
        super().__init__(message)


def _describe_validation_error(exc: ValidationError) -> tuple[str, bool]:
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        return "config file is not a valid JSON file", True
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ())) or "<document>"
    return f"config file is invalid at {location}: {first.get('msg', 'invalid value')}", False


def parse_annotation_document(data: bytes | str) -> AnnotationDocument:
    """Parse raw sidecar bytes, raising ``ConfigurationParseError`` on failure."""
    try:
        return AnnotationDocument.model_validate_json(data)
    except ValidationError as exc:
        message, is_syntax_error = _describe_validation_error(exc)
        raise ConfigurationParseError(message, is_syntax_error=is_syntax_error) from exc


__all__ = [
    "AnnotationRecord",
    "AnnotationDocument",
    "ConfigurationParseError",
    "parse_annotation_document",
]
