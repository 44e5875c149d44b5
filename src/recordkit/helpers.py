"""Introspection and conversion helpers for records."""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any

from .field_spec import FieldSpec
from .synthesizer import Record


def is_record(obj: object) -> bool:
    """Return True if ``obj`` is a record instance or a derived record type."""
    if isinstance(obj, type):
        return issubclass(obj, Record) and obj is not Record
    return isinstance(obj, Record)


def fields(record_or_type: Record | type[Record]) -> tuple[FieldSpec, ...]:
    """
    Return the FieldSpecs of a record or record type in declaration order.

    Raises:
        TypeError: If the argument is not a record or record type.

    """
    if not is_record(record_or_type):
        msg = "fields() should be called on a record instance or type"
        raise TypeError(msg)
    cls = record_or_type if isinstance(record_or_type, type) else type(record_or_type)
    return cls.__record_schema__.fields


def _convert(value: Any, record_factory: Callable[[Record], Any]) -> Any:
    if isinstance(value, Record):
        return record_factory(value)
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        # namedtuple: rebuild positionally
        return type(value)(*[_convert(v, record_factory) for v in value])
    if isinstance(value, (list, tuple)):
        return type(value)(_convert(v, record_factory) for v in value)
    if isinstance(value, dict):
        return type(value)((_convert(k, record_factory), _convert(v, record_factory)) for k, v in value.items())
    return copy.deepcopy(value)


def asdict(record: Record, *, dict_factory: Callable[[list[tuple[str, Any]]], Any] = dict) -> dict[str, Any]:
    """
    Convert a record to a dictionary of its fields, recursing into nested values.

    Records, lists, tuples and dicts found in field values are converted
    recursively; every other value is deep-copied.

    Example:
        asdict(Position("Oslo", 10.8, 59.9))
        # {'name': 'Oslo', 'lon': 10.8, 'lat': 59.9}

    """
    if not is_record(record) or isinstance(record, type):
        msg = "asdict() should be called on record instances"
        raise TypeError(msg)

    def to_dict(value: Record) -> Any:
        return dict_factory([(f.name, _convert(getattr(value, f.name), to_dict)) for f in fields(value)])

    return to_dict(record)


def astuple(record: Record) -> tuple[Any, ...]:
    """Convert a record to a tuple of its field values, recursing into nested values."""
    if not is_record(record) or isinstance(record, type):
        msg = "astuple() should be called on record instances"
        raise TypeError(msg)

    def to_tuple(value: Record) -> tuple[Any, ...]:
        return tuple(_convert(getattr(value, f.name), to_tuple) for f in fields(value))

    return to_tuple(record)


def replace(record: Record, **changes: Any) -> Record:
    """
    Return a new record of the same type with some constructor fields changed.

    Works for frozen records. The new instance is built through the constructor,
    so default factories and the post-construction hook run again for it.

    Raises:
        ValueError: If a change targets a field excluded from the constructor.
        TypeError: If a change names an unknown field.

    """
    if not is_record(record) or isinstance(record, type):
        msg = "replace() should be called on record instances"
        raise TypeError(msg)

    for spec in fields(record):
        if spec.include_in_init:
            if spec.name not in changes:
                changes[spec.name] = getattr(record, spec.name)
        elif spec.name in changes:
            msg = f"field {spec.name!r} is declared with init=False, it cannot be specified with replace()"
            raise ValueError(msg)
    return type(record)(**changes)


__all__ = ["asdict", "astuple", "fields", "is_record", "replace"]
