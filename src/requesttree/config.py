"""
Configuration for requesttree.

All tunable document defaults in one place. Loaded from:
1. Defaults (this file)
2. Environment variables (REQUESTTREE_*) override defaults
3. Explicit ``DocumentSettings(...)`` passed by the host overrides everything
"""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, field_validator

from requesttree.core.types import NodeKind


class DocumentSettings(BaseModel):
    """Document defaults: default names, undo depth and encoding options."""

    model_config = ConfigDict(frozen=True)

    root_folder_name: str = "Requests"
    default_request_name: str = "New Request"
    default_folder_name: str = "New Folder"
    undo_levels: int = Field(default=0, ge=0)  # 0 keeps every undo step
    json_indent: int = Field(default=2, ge=0)
    file_extension: str = ".requesttree"

    @field_validator("root_folder_name", "default_request_name", "default_folder_name")
    @classmethod
    def _name_not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("default names must not be empty")
        return value

    @field_validator("file_extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        if not value.startswith("."):
            return f".{value}"
        return value

    def default_name(self, kind: NodeKind) -> str:
        """Return the default name for a freshly created node of ``kind``."""
        if kind is NodeKind.FOLDER:
            return self.default_folder_name
        return self.default_request_name


class DefaultNames:
    """Default-name provider keyed by node kind.

    Callable so it can be injected anywhere a ``NameProvider`` is expected.
    Hosts that localize names can pass their own mapping.
    """

    def __init__(self, settings: DocumentSettings | None = None, overrides: dict[NodeKind, str] | None = None):
        self.settings = settings or get_settings()
        self.overrides = dict(overrides or {})

    def __call__(self, kind: NodeKind) -> str:
        return self.overrides.get(kind) or self.settings.default_name(kind)


ENV_PREFIX = "REQUESTTREE_"

_ENV_FIELDS = (
    "root_folder_name",
    "default_request_name",
    "default_folder_name",
    "undo_levels",
    "json_indent",
    "file_extension",
)


def load_settings(environ: dict[str, str] | None = None) -> DocumentSettings:
    """
    Build settings from defaults plus environment overrides.

    Params:
        environ: Mapping to read overrides from, defaults to ``os.environ``

    Returns:
        A validated, immutable DocumentSettings

    Raises:
        pydantic.ValidationError: If an override has an invalid value
    """
    source = os.environ if environ is None else environ
    overrides = {}
    for name in _ENV_FIELDS:
        value = source.get(f"{ENV_PREFIX}{name.upper()}")
        if value is not None:
            overrides[name] = value
    return DocumentSettings(**overrides)


# Module-level settings instance, loaded on first use
_settings: DocumentSettings | None = None


def get_settings() -> DocumentSettings:
    """Get the process-wide settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next ``get_settings`` reloads them."""
    global _settings
    _settings = None
