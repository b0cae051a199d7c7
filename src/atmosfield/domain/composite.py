# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Field superposition and transient lifecycle.

FieldComposite owns every active field primitive. Per tick the caller
runs ``update(dt)`` first (advances temporal state, prunes expired
lightning) and then queries net vectors, which are side-effect free.
"""
import logging

import numpy as np

from atmosfield.domain.charged_body import ForceReceiver, lorentz_force
from atmosfield.domain.fields import FieldKind, FieldPrimitive, FieldType
from atmosfield.domain.vector import Vector2, vec_sum

logger = logging.getLogger(__name__)


class FieldComposite:
    """Ordered collection of field primitives with superposition queries.

    Args:
        fields: Initial primitives, kept in insertion order.
        rng: Random source handed to primitive updates (plasma
            fluctuation). None leaves plasma strength unperturbed.
    """

    def __init__(self, fields=(), rng: np.random.Generator | None = None) -> None:
        self._fields: list[FieldPrimitive] = list(fields)
        self.rng = rng

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self):
        return iter(tuple(self._fields))

    @property
    def fields(self) -> tuple[FieldPrimitive, ...]:
        return tuple(self._fields)

    def add_field(self, primitive: FieldPrimitive) -> None:
        """Append a primitive. Duplicates are kept."""
        self._fields.append(primitive)

    def fields_by_type(self, field_type: FieldType) -> tuple[FieldPrimitive, ...]:
        return tuple(f for f in self._fields if f.field_type is field_type)

    def fields_by_kind(self, kind: FieldKind) -> tuple[FieldPrimitive, ...]:
        return tuple(f for f in self._fields if f.kind is kind)

    def net_field_vector(self, position: Vector2, field_type: FieldType) -> Vector2:
        """Sum of field_vector_at(position) over primitives of one type."""
        return vec_sum(
            f.field_vector_at(position)
            for f in self._fields
            if f.field_type is field_type
        )

    def electric_field_at(self, position: Vector2) -> Vector2:
        return self.net_field_vector(position, FieldType.ELECTRIC)

    def magnetic_field_at(self, position: Vector2) -> Vector2:
        return self.net_field_vector(position, FieldType.MAGNETIC)

    def plasma_field_at(self, position: Vector2) -> Vector2:
        return self.net_field_vector(position, FieldType.PLASMA)

    def update(self, dt: float) -> None:
        """Advance every primitive by dt, then drop expired lightning."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        for primitive in self._fields:
            primitive.update(dt, self.rng)
        before = len(self._fields)
        self._fields = [
            f for f in self._fields
            if not (f.kind is FieldKind.LIGHTNING and not f.is_active)
        ]
        pruned = before - len(self._fields)
        if pruned:
            logger.debug("Pruned %d expired lightning field(s)", pruned)

    def apply_lorentz_force(self, body: ForceReceiver) -> Vector2:
        """Add F = qE + q(v × B) to a charged body's force accumulator.

        Bodies without the ``is_charged`` capability are left untouched.

        Returns:
            The force applied (zero for uncharged bodies).
        """
        if not body.is_charged:
            return (0.0, 0.0)
        force = lorentz_force(
            body.charge,
            body.velocity,
            self.electric_field_at(body.position),
            self.magnetic_field_at(body.position),
            body.magnetic_susceptibility,
        )
        body.apply_force(force)
        return force
