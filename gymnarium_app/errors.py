"""
Error taxonomy for the Gymnarium application.

ConfigurationIncompleteError is fatal and raised while the compatibility
tables are built (import time).  IncompatibleCombinationError is the
exceptional form of a failed validation; the validator itself returns
results as data.  AssemblyError is raised when a valid combination cannot
be turned into a session.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Optional

if TYPE_CHECKING:
    from .compatibility.validator import ValidationResult


class GymnariumError(Exception):
    """Base class for every error raised by gymnarium_app."""


class UnknownVariantError(GymnariumError, ValueError):
    """Text did not name any variant of the requested axis."""

    def __init__(self, axis: Any, text: str):
        self.axis = axis
        self.text = text
        super().__init__(
            f'Did not find "{text.lower()}" in {axis.headline.lower()}.'
        )


class SelectError(GymnariumError, ValueError):
    """A configuration value could not be parsed for the selected variant."""


class ConfigurationIncompleteError(GymnariumError):
    """A compatibility table does not cover its full cross product."""

    def __init__(self, message: str, missing: Iterable[Any] = ()):
        self.missing = tuple(missing)
        super().__init__(message)


class IncompatibleCombinationError(GymnariumError):
    """One or more pairwise checks failed for a requested combination."""

    def __init__(self, result: "ValidationResult"):
        self.result = result
        self.violations = result.violations
        lines = "\n".join(f"  - {m}" for m in result.messages())
        super().__init__(f"Incompatible combination:\n{lines}")


class AssemblyError(GymnariumError):
    """A variant implementation could not be constructed for a valid combination."""

    def __init__(self, variant: Any, reason: Optional[str] = None):
        self.variant = variant
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Could not assemble {variant.axis.label}={variant.label}{detail}"
        )


class StateFileError(GymnariumError, ValueError):
    """A state file path has an unsupported format or holds unusable data."""
