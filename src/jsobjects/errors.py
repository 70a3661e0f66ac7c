"""Exception types for jsobjects."""

from __future__ import annotations


class JSObjectsError(Exception):
    """Base class for all jsobjects errors."""


class OwnershipError(JSObjectsError):
    """A node was attached to a second container, or attached into itself."""


class BuilderContractError(JSObjectsError):
    """The event stream fed to a TreeBuilder broke the parser contract."""
