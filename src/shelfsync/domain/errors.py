"""Errors raised across the reconciliation core and its collaborators."""

from __future__ import annotations


class WorkspaceError(RuntimeError):
    """Raised by the workspace collaborator when listing or updating records fails."""


class RegistryError(RuntimeError):
    """Raised by the registry collaborator when a search or detail lookup fails."""


class UnmappableFieldError(ValueError):
    """Raised when an external value cannot be converted for a local field."""

    def __init__(self, message: str, *, field: str, payload: object) -> None:
        super().__init__(message)
        self.field = field
        self.payload = payload


class HierarchyCycleError(RuntimeError):
    """Raised when a parent chain does not terminate."""

    def __init__(self, message: str, *, chain: tuple[str, ...]) -> None:
        super().__init__(message)
        self.chain = chain
