"""
Combination Validator

Checks one chosen variant per axis against all six pairwise tables and
reports every violating pair at once.  Validation is a pure function of
the four variants and the (immutable) matrix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ..availables.configuration import Selected
from ..availables.variants import (
    AgentVariant,
    Axis,
    EnvironmentVariant,
    ExitConditionVariant,
    Variant,
    VisualiserVariant,
)
from ..errors import IncompatibleCombinationError
from .tables import AXIS_PAIRS, DEFAULT_MATRIX, CompatibilityMatrix


@dataclass(frozen=True)
class Combination:
    """Exactly one variant per axis."""
    environment: EnvironmentVariant
    agent: AgentVariant
    visualiser: VisualiserVariant
    exit_condition: ExitConditionVariant

    def __post_init__(self):
        for axis in Axis:
            value = self.variant(axis)
            if not isinstance(value, axis.variant_type):
                raise TypeError(
                    f"{axis.label} slot expects a {axis.variant_type.__name__}, got {value!r}"
                )

    def variant(self, axis: Axis) -> Variant:
        return {
            Axis.ENVIRONMENT: self.environment,
            Axis.AGENT: self.agent,
            Axis.VISUALISER: self.visualiser,
            Axis.EXIT_CONDITION: self.exit_condition,
        }[axis]

    def variants(self) -> Tuple[Variant, ...]:
        return tuple(self.variant(axis) for axis in Axis)

    def pairs(self) -> Iterator[Tuple[Variant, Variant]]:
        """The six pairwise projections in canonical axis-pair order."""
        for first, second in AXIS_PAIRS:
            yield self.variant(first), self.variant(second)

    def __str__(self) -> str:
        return ", ".join(str(v) for v in self.variants())


@dataclass(frozen=True)
class Selection:
    """Four selected variants with their settings."""
    environment: Selected
    agent: Selected
    visualiser: Selected
    exit_condition: Selected

    def combination(self) -> Combination:
        return Combination(
            environment=self.environment.variant,
            agent=self.agent.variant,
            visualiser=self.visualiser.variant,
            exit_condition=self.exit_condition.variant,
        )


@dataclass(frozen=True)
class Violation:
    """A pair of chosen variants whose table cell is marked illegal."""
    first: Variant
    second: Variant

    @property
    def message(self) -> str:
        return f"{self.first} incompatible with {self.second}"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ValidationResult:
    combination: Combination
    violations: Tuple[Violation, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.violations

    def messages(self) -> List[str]:
        return [v.message for v in self.violations]

    def raise_for_violations(self) -> "ValidationResult":
        """Return self when valid, otherwise raise IncompatibleCombinationError."""
        if not self.is_valid:
            raise IncompatibleCombinationError(self)
        return self


def validate_combination(
    combination: Combination, matrix: CompatibilityMatrix = DEFAULT_MATRIX
) -> ValidationResult:
    """Evaluate all six pairwise projections of ``combination``."""
    violations = tuple(
        Violation(first, second)
        for first, second in combination.pairs()
        if not matrix.is_compatible(first, second)
    )
    return ValidationResult(combination=combination, violations=violations)


def validate(
    environment: EnvironmentVariant,
    agent: AgentVariant,
    visualiser: VisualiserVariant,
    exit_condition: ExitConditionVariant,
    matrix: CompatibilityMatrix = DEFAULT_MATRIX,
) -> ValidationResult:
    """
    Validate one chosen variant per axis.

    Returns:
        ValidationResult listing every violating pair (empty when valid).

    Raises:
        TypeError: if a value is not a variant of the expected axis.
    """
    combination = Combination(environment, agent, visualiser, exit_condition)
    return validate_combination(combination, matrix)
