"""
Pairwise Compatibility Tables
Static legality matrices for every unordered pair of axes.

The six tables are authored as literal data below and checked for
completeness when the module is imported.  A cell that is missing after a
new variant was added raises ConfigurationIncompleteError immediately
instead of being treated as allowed.
"""

from __future__ import annotations

from dataclasses import dataclass
from itertools import combinations, product
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from ..availables.registry import variants_of
from ..availables.variants import (
    AgentVariant,
    Axis,
    EnvironmentVariant,
    ExitConditionVariant,
    Variant,
    VisualiserVariant,
)
from ..errors import ConfigurationIncompleteError

Cell = Tuple[Variant, Variant]

# Unordered axis pairs in canonical order
AXIS_PAIRS: Tuple[Tuple[Axis, Axis], ...] = tuple(combinations(tuple(Axis), 2))


@dataclass(frozen=True)
class CompatibilityTable:
    """Legality of every (first-axis variant, second-axis variant) pair."""
    first_axis: Axis
    second_axis: Axis
    cells: Mapping[Cell, bool]

    def __post_init__(self):
        if self.first_axis is self.second_axis:
            raise ConfigurationIncompleteError(
                f"Compatibility table pairs {self.first_axis} with itself"
            )
        for a, b in self.cells:
            if not isinstance(a, self.first_axis.variant_type) or not isinstance(
                b, self.second_axis.variant_type
            ):
                raise ConfigurationIncompleteError(
                    f"{self.name}: cell ({a!r}, {b!r}) does not belong to this table"
                )
            if not isinstance(self.cells[(a, b)], bool):
                raise ConfigurationIncompleteError(
                    f"{self.name}: cell ({a}, {b}) must be True or False, got {self.cells[(a, b)]!r}"
                )
        missing = self.missing_cells()
        if missing:
            listed = ", ".join(f"({a}, {b})" for a, b in missing)
            raise ConfigurationIncompleteError(
                f"{self.name} is missing entries: {listed}", missing
            )
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    @property
    def name(self) -> str:
        return f"{self.first_axis.label} x {self.second_axis.label}"

    @property
    def axes(self) -> FrozenSet[Axis]:
        return frozenset((self.first_axis, self.second_axis))

    def missing_cells(self) -> List[Cell]:
        """Cells of the full cross product that have no explicit entry."""
        return [
            cell
            for cell in product(variants_of(self.first_axis), variants_of(self.second_axis))
            if cell not in self.cells
        ]

    def is_compatible(self, a: Variant, b: Variant) -> bool:
        """Look up a cell; the arguments may be given in either axis order."""
        if isinstance(a, self.second_axis.variant_type) and isinstance(
            b, self.first_axis.variant_type
        ):
            a, b = b, a
        try:
            return self.cells[(a, b)]
        except KeyError:
            raise ConfigurationIncompleteError(
                f"{self.name} has no entry for ({a}, {b})", [(a, b)]
            ) from None

    @classmethod
    def from_rows(
        cls,
        first_axis: Axis,
        second_axis: Axis,
        rows: Mapping[Variant, Mapping[Variant, bool]],
    ) -> "CompatibilityTable":
        """Build a table from ``{row_variant: {column_variant: legal}}``."""
        cells = {(a, b): legal for a, row in rows.items() for b, legal in row.items()}
        return cls(first_axis, second_axis, cells)


class CompatibilityMatrix:
    """
    The complete set of six pairwise tables.

    Construction fails unless exactly one table is supplied for every
    unordered pair of distinct axes.
    """

    def __init__(self, tables: Iterable[CompatibilityTable]):
        self._tables: Dict[FrozenSet[Axis], CompatibilityTable] = {}
        for table in tables:
            if table.axes in self._tables:
                raise ConfigurationIncompleteError(
                    f"Duplicate compatibility table for {table.name}"
                )
            self._tables[table.axes] = table

        missing = [pair for pair in AXIS_PAIRS if frozenset(pair) not in self._tables]
        if missing:
            listed = ", ".join(f"{a.label} x {b.label}" for a, b in missing)
            raise ConfigurationIncompleteError(
                f"Missing compatibility tables: {listed}", missing
            )

    def table(self, first: Axis, second: Axis) -> CompatibilityTable:
        return self._tables[frozenset((first, second))]

    def tables(self) -> List[CompatibilityTable]:
        """Tables in canonical axis-pair order."""
        return [self._tables[frozenset(pair)] for pair in AXIS_PAIRS]

    def is_compatible(self, a: Variant, b: Variant) -> bool:
        if a.axis is b.axis:
            raise ValueError(f"{a} and {b} belong to the same axis")
        return self.table(a.axis, b.axis).is_compatible(a, b)

    def compatible_variants(
        self, axis: Axis, chosen: Optional[Iterable[Variant]] = None
    ) -> Tuple[Variant, ...]:
        """
        Variants of ``axis`` that are compatible with every already chosen variant.

        Variants chosen on ``axis`` itself are ignored.
        """
        others = [v for v in (chosen or ()) if v.axis is not axis]
        return tuple(
            candidate
            for candidate in variants_of(axis)
            if all(self.is_compatible(candidate, other) for other in others)
        )


# ---------------------------------------------------------------------------
# Literal tables
# ---------------------------------------------------------------------------

E = EnvironmentVariant
A = AgentVariant
V = VisualiserVariant
X = ExitConditionVariant

ENVIRONMENT_AGENT = CompatibilityTable.from_rows(Axis.ENVIRONMENT, Axis.AGENT, {
    E.GYM_MOUNTAIN_CAR:               {A.RANDOM: True, A.INPUT: True},
    E.CODE_BULLET_AI_LEARNS_TO_DRIVE: {A.RANDOM: True, A.INPUT: True},
})

ENVIRONMENT_VISUALISER = CompatibilityTable.from_rows(Axis.ENVIRONMENT, Axis.VISUALISER, {
    E.GYM_MOUNTAIN_CAR:               {V.NONE: True, V.PISTON_IN_2D: True},
    E.CODE_BULLET_AI_LEARNS_TO_DRIVE: {V.NONE: True, V.PISTON_IN_2D: True},
})

ENVIRONMENT_EXIT_CONDITION = CompatibilityTable.from_rows(Axis.ENVIRONMENT, Axis.EXIT_CONDITION, {
    E.GYM_MOUNTAIN_CAR:               {X.EPISODES_SIMULATED: True, X.VISUALISER_CLOSED: True},
    E.CODE_BULLET_AI_LEARNS_TO_DRIVE: {X.EPISODES_SIMULATED: True, X.VISUALISER_CLOSED: True},
})

AGENT_VISUALISER = CompatibilityTable.from_rows(Axis.AGENT, Axis.VISUALISER, {
    A.RANDOM: {V.NONE: True, V.PISTON_IN_2D: True},
    # Input reads keys from the visualiser window
    A.INPUT:  {V.NONE: False, V.PISTON_IN_2D: True},
})

AGENT_EXIT_CONDITION = CompatibilityTable.from_rows(Axis.AGENT, Axis.EXIT_CONDITION, {
    A.RANDOM: {X.EPISODES_SIMULATED: True, X.VISUALISER_CLOSED: True},
    A.INPUT:  {X.EPISODES_SIMULATED: True, X.VISUALISER_CLOSED: True},
})

VISUALISER_EXIT_CONDITION = CompatibilityTable.from_rows(Axis.VISUALISER, Axis.EXIT_CONDITION, {
    # No window can ever be closed
    V.NONE:         {X.EPISODES_SIMULATED: True, X.VISUALISER_CLOSED: False},
    V.PISTON_IN_2D: {X.EPISODES_SIMULATED: True, X.VISUALISER_CLOSED: True},
})

DEFAULT_TABLES: Tuple[CompatibilityTable, ...] = (
    ENVIRONMENT_AGENT,
    ENVIRONMENT_VISUALISER,
    ENVIRONMENT_EXIT_CONDITION,
    AGENT_VISUALISER,
    AGENT_EXIT_CONDITION,
    VISUALISER_EXIT_CONDITION,
)

DEFAULT_MATRIX = CompatibilityMatrix(DEFAULT_TABLES)


def describe_matrix(matrix: CompatibilityMatrix = DEFAULT_MATRIX) -> str:
    """Render every table as a small text grid."""
    blocks = []
    for table in matrix.tables():
        columns = variants_of(table.second_axis)
        rows = variants_of(table.first_axis)
        width = max(len(r.label) for r in rows + (table.first_axis,))
        header = f"{table.first_axis.label:<{width}} | " + " | ".join(c.label for c in columns)
        lines = [header, "-" * len(header)]
        for row in rows:
            marks = " | ".join(
                f"{'yes' if table.is_compatible(row, c) else 'no':<{len(c.label)}}"
                for c in columns
            )
            lines.append(f"{row.label:<{width}} | {marks}")
        blocks.append(f"{table.name}\n" + "\n".join(lines))
    return "\n\n".join(blocks)
