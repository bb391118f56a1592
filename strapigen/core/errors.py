"""Exceptions raised by strapigen."""
from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from strapigen.core.workflow import RunStage


class StrapiGenError(Exception):
    """Base exception for all strapigen errors."""

    def __init__(self, message: str, *args):
        self.message = message
        super().__init__(message, *args)


class ConfigError(StrapiGenError):
    """Raised when the configuration file is missing or invalid."""


class SchemaFetchError(StrapiGenError):
    """Raised when the Strapi schema endpoints cannot be read.

    ``status_code`` is None when the request never got a response
    (DNS failure, refused connection, timeout).
    """

    def __init__(self, message: str, status_code: int | None = None, body: str = "", url: str = ""):
        self.status_code = status_code
        self.body = body
        self.url = url
        super().__init__(message)


class SyncError(StrapiGenError):
    """Raised by the sync engine when a stage fails."""

    def __init__(self, stage: "RunStage", message: str):
        self.stage = stage
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.stage.value}] {self.message}"
