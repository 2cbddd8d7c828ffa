from __future__ import annotations

from typing import Any, Optional


class TotpError(Exception):
    """Base error for totpgen."""

    def __init__(self, message: str, *, context: Optional[dict[str, Any]] = None) -> None:  # noqa: D401
        super().__init__(message)
        self.context = context or {}


class InvalidConfiguration(TotpError):
    """Generator configuration rejected at construction time."""
