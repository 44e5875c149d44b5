"""Schema extension and composition."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping

from .errors import DuplicateFieldError, SchemaConflictError, UnknownFieldError
from .field_spec import FieldSpec
from .schema import RecordSchema, _coerce, validate_fields

logger = logging.getLogger(__name__)


def extend(
    base: RecordSchema,
    additional: Iterable[FieldSpec | str] = (),
    overrides: Mapping[str, FieldSpec] | None = None,
    **flags: bool,
) -> RecordSchema:
    """
    Derive a new schema from ``base``.

    The resulting field order is every base field in its original position
    (with overrides applied in place), followed by ``additional`` in
    declaration order. The combined field list is validated again, so an
    override that removes a default can make the schema invalid.

    Args:
        base: Schema to extend.
        additional: New fields appended after the base fields.
        overrides: Replacement specs keyed by base field name. The key wins
            over the spec's own ``name``.
        **flags: Schema-level flags to change; unspecified flags are inherited.

    Returns:
        The extended schema.

    Raises:
        UnknownFieldError: If an override names a field ``base`` does not have.
        DuplicateFieldError: If an additional field reuses a base field name.
        FieldOrderError: If the combined order puts a required field after a default.

    Example:
        located = extend(
            position,
            [FieldSpec(name="country", declared_type=str)],
            {"lat": FieldSpec(name="lat", declared_type=float, default=40.0)},
        )

    """
    overrides = dict(overrides or {})
    unknown = [name for name in overrides if name not in base]
    if unknown:
        raise UnknownFieldError(unknown[0])

    merged: list[FieldSpec] = []
    for spec in base.fields:
        replacement = overrides.get(spec.name)
        if replacement is None:
            merged.append(spec)
        else:
            merged.append(dataclasses.replace(replacement, name=spec.name))

    base_names = set(base.field_names)
    for spec in (_coerce(f) for f in additional):
        if spec.name in base_names:
            raise DuplicateFieldError(spec.name)
        merged.append(spec)

    options = base.flags()
    unexpected = set(flags) - set(options)
    if unexpected:
        msg = f"Unknown schema flag(s): {', '.join(sorted(unexpected))}"
        raise TypeError(msg)
    options.update(flags)
    if options["generate_order"] and not options["generate_eq"]:
        msg = "generate_order requires generate_eq"
        raise ValueError(msg)

    schema = RecordSchema(fields=validate_fields(merged), **options)
    logger.debug(
        "Extended schema: %d inherited, %d overridden, %d added",
        len(base),
        len(overrides),
        len(schema) - len(base),
    )
    return schema


def combine_schemas(*schemas: RecordSchema) -> RecordSchema:
    """
    Combine schemas left to right into one.

    Fields keep the order in which they are first seen. A field declared by
    more than one schema must be declared identically. Flags come from the
    first schema.

    Args:
        *schemas: Schemas to combine.

    Returns:
        The combined schema.

    Raises:
        SchemaConflictError: If two schemas declare the same field differently.
        ValueError: If no schemas are given.

    Example:
        UserOrders = combine_schemas(user_schema, order_schema)
        # or: user_schema + order_schema

    """
    if not schemas:
        msg = "combine_schemas requires at least one schema"
        raise ValueError(msg)

    merged: dict[str, FieldSpec] = {}
    for schema in schemas:
        for spec in schema.fields:
            existing = merged.get(spec.name)
            if existing is None:
                merged[spec.name] = spec
            elif existing != spec:
                raise SchemaConflictError(spec.name)

    return RecordSchema(fields=validate_fields(merged.values()), **schemas[0].flags())


__all__ = ["combine_schemas", "extend"]
