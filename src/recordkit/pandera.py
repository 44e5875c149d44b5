"""Pandera integration for recordkit schemas."""

from __future__ import annotations

import types
import typing
from typing import TYPE_CHECKING, Any

from .schema import RecordSchema

if TYPE_CHECKING:
    import pandera as pa

    from .synthesizer import Record


def _map_dtype(declared_type: Any) -> tuple[Any, bool]:
    """Map a declared field type to a pandera dtype and nullability.

    Args:
        declared_type: The ``declared_type`` of a FieldSpec.

    Returns:
        ``(dtype, nullable)``. The dtype is None when no type check should be applied.

    """
    if declared_type is Any:
        return None, True

    origin = typing.get_origin(declared_type)
    if origin is typing.Union or origin is types.UnionType:
        members = [a for a in typing.get_args(declared_type) if a is not type(None)]
        nullable = len(members) < len(typing.get_args(declared_type))
        if len(members) == 1:
            dtype, _ = _map_dtype(members[0])
            return dtype, nullable
        return None, nullable

    if origin is not None or not isinstance(declared_type, type):
        # parametrized generics such as list[int] cannot be checked column-wise
        return None, False
    return declared_type, False


def to_pandera_schema(record: type[Record] | RecordSchema, *, strict: bool = True) -> pa.DataFrameSchema:
    """Convert a record type or schema to a pandera DataFrameSchema.

    Each field becomes a pandera Column named after the field, so frames
    produced by ``to_pandas`` can be validated against the record definition.

    Args:
        record: A derived record type or a RecordSchema.
        strict: Reject columns that are not fields of the record.

    Returns:
        A pandera DataFrameSchema with one column per field.

    Raises:
        MissingDependencyError: If pandera is not installed.

    Example:
        Position = derive(define_schema([field("name", str), field("lat", float)]), "Position")

        pandera_schema = to_pandera_schema(Position)
        validated_df = pandera_schema.validate(to_pandas(positions))

    """
    try:
        import pandera as pa
    except ImportError:
        from .missing_dependency_error import MissingDependencyError

        package = "pandera"
        raise MissingDependencyError(package, "to_pandera_schema") from None

    schema = record if isinstance(record, RecordSchema) else record.__record_schema__

    columns: dict[str, pa.Column] = {}
    for spec in schema.fields:
        dtype, nullable = _map_dtype(spec.declared_type)
        columns[spec.name] = pa.Column(dtype=dtype, nullable=nullable)

    return pa.DataFrameSchema(columns=columns, strict=strict)
