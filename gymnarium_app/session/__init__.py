"""session – session builder and the assembled session."""

from .session import Session
from .builder import (
    RunState, AssemblyResult, VariantFactories, SessionBuilder,
    default_factories, selection_with_defaults, build_session,
)

__all__ = [
    "Session", "RunState", "AssemblyResult", "VariantFactories", "SessionBuilder",
    "default_factories", "selection_with_defaults", "build_session",
]
