"""compatibility – pairwise tables and the combination validator."""

from .tables import (
    AXIS_PAIRS, CompatibilityTable, CompatibilityMatrix, DEFAULT_TABLES, DEFAULT_MATRIX,
    describe_matrix,
)
from .validator import (
    Combination, Selection, Violation, ValidationResult, validate, validate_combination,
)

__all__ = [
    "AXIS_PAIRS", "CompatibilityTable", "CompatibilityMatrix", "DEFAULT_TABLES",
    "DEFAULT_MATRIX", "describe_matrix",
    "Combination", "Selection", "Violation", "ValidationResult", "validate",
    "validate_combination",
]
