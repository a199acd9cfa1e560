"""registry – ordered, read-only lookups over the variant enumerations."""

from __future__ import annotations

from typing import Any, Tuple

from ..errors import UnknownVariantError
from .variants import Axis, Variant


def all_axes() -> Tuple[Axis, ...]:
    """The four axes in their canonical order."""
    return tuple(Axis)


def variants_of(axis: Axis) -> Tuple[Variant, ...]:
    """Exhaustive, ordered variants of ``axis``."""
    return tuple(axis.variant_type)


def is_member(axis: Axis, value: Any) -> bool:
    """True when ``value`` is one of the variants registered for ``axis``."""
    return isinstance(value, axis.variant_type)


def axis_of(variant: Variant) -> Axis:
    """Axis a variant belongs to; raises TypeError for anything else."""
    for axis in Axis:
        if isinstance(variant, axis.variant_type):
            return axis
    raise TypeError(f"{variant!r} is not a registered variant")


def parse_variant(axis: Axis, text: str) -> Variant:
    """
    Resolve a user supplied name to a variant of ``axis``.

    Nice, long and short names are all accepted, case-insensitively.

    Raises:
        UnknownVariantError: if no variant of the axis matches.
    """
    for variant in variants_of(axis):
        if variant.matches(text):
            return variant
    raise UnknownVariantError(axis, text)
