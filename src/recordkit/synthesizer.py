"""Record type synthesis from a RecordSchema."""

from __future__ import annotations

import enum
import logging
import operator
import reprlib
import sys
from collections.abc import Callable
from typing import Any, ClassVar

from .errors import FrozenRecordError, IncomparableTypesError, UnhashableError, UninitializedFieldError
from .schema import RESERVED_PREFIX, RecordSchema

logger = logging.getLogger(__name__)

_SEALED = f"{RESERVED_PREFIX}sealed"


class Comparison(enum.Enum):
    """Tagged outcome of an equality check between two values."""

    EQUAL = "equal"
    NOT_EQUAL = "not_equal"
    INCOMPARABLE = "incomparable"


class Ordering(enum.IntEnum):
    """Outcome of ordering two records of the same type."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class Record:
    """
    Base class of every type produced by ``derive``.

    The behaviour of a derived type is driven by the schema stored in
    ``__record_schema__``; the generated methods installed by ``derive`` read
    field values through it. Subclass a derived type to add methods or to
    override ``__post_init__`` or ``__repr__``.
    """

    __slots__ = ()

    __record_schema__: ClassVar[RecordSchema]
    __record_post_init__: ClassVar[Callable[[Any], None] | None] = None

    def __post_init__(self) -> None:
        """Run the post-construction hook given to ``derive``, if any."""
        hook = type(self).__record_post_init__
        if hook is not None:
            hook(self)

    def __getattr__(self, name: str) -> Any:
        # only reached when normal lookup failed, i.e. the field slot is unbound
        if name in type(self).__record_schema__:
            raise UninitializedFieldError(type(self).__name__, name)
        msg = f"{type(self).__name__!r} object has no attribute {name!r}"
        raise AttributeError(msg)

    def __getstate__(self) -> dict[str, Any]:
        return dict(_bound_items(self))

    def __setstate__(self, state: dict[str, Any]) -> None:
        for name, value in state.items():
            object.__setattr__(self, name, value)
        _seal(self)


def _is_bound(record: Record, name: str) -> bool:
    try:
        object.__getattribute__(record, name)
    except AttributeError:
        return False
    return True


def _bound_items(record: Record) -> list[tuple[str, Any]]:
    """Return ``(name, value)`` pairs for every field that holds a value."""
    items = []
    for spec in type(record).__record_schema__.fields:
        if _is_bound(record, spec.name):
            items.append((spec.name, object.__getattribute__(record, spec.name)))
    return items


def _seal(record: Record) -> None:
    if type(record).__record_schema__.frozen:
        object.__setattr__(record, _SEALED, True)


def _compare_key(record: Record) -> tuple[Any, ...]:
    return tuple(getattr(record, f.name) for f in type(record).__record_schema__.compare_fields)


def _hash_key(record: Record) -> tuple[Any, ...]:
    return tuple(getattr(record, f.name) for f in type(record).__record_schema__.hash_fields)


# -- Generated methods ---------------------------------------------------------


def _bind_arguments(cls: type[Record], args: tuple[Any, ...], kwargs: dict[str, Any]) -> dict[str, Any]:
    """
    Resolve constructor arguments into field values.

    Every argument error is raised before any default factory runs.
    """
    schema = cls.__record_schema__
    params = schema.init_fields if schema.generate_init else ()
    names = [p.name for p in params]

    if len(args) > len(params):
        msg = f"{cls.__name__}() takes {len(params)} positional argument(s) but {len(args)} were given"
        raise TypeError(msg)

    supplied = dict(zip(names, args))
    for key, value in kwargs.items():
        if key in supplied:
            msg = f"{cls.__name__}() got multiple values for argument {key!r}"
            raise TypeError(msg)
        if key not in names:
            msg = f"{cls.__name__}() got an unexpected keyword argument {key!r}"
            raise TypeError(msg)
        supplied[key] = value

    missing = [p.name for p in params if p.name not in supplied and not p.has_default]
    if missing:
        msg = f"{cls.__name__}() missing required argument(s): {', '.join(map(repr, missing))}"
        raise TypeError(msg)

    values: dict[str, Any] = {}
    for spec in schema.fields:
        if spec.name in supplied:
            values[spec.name] = supplied[spec.name]
        elif spec.has_default:
            values[spec.name] = spec.initial_value()
    return values


def _record_init(self: Record, *args: Any, **kwargs: Any) -> None:
    for name, value in _bind_arguments(type(self), args, kwargs).items():
        object.__setattr__(self, name, value)
    self.__post_init__()
    _seal(self)


def _frozen_setattr(self: Record, name: str, value: Any) -> None:
    if getattr(self, _SEALED, False):
        raise FrozenRecordError(type(self).__name__, name)
    object.__setattr__(self, name, value)


def _frozen_delattr(self: Record, name: str) -> None:
    if getattr(self, _SEALED, False):
        raise FrozenRecordError(type(self).__name__, name)
    object.__delattr__(self, name)


@reprlib.recursive_repr()
def _record_repr(self: Record) -> str:
    schema = type(self).__record_schema__
    body = ", ".join(f"{f.name}={getattr(self, f.name)!r}" for f in schema.repr_fields)
    return f"{type(self).__name__}({body})"


def _record_eq(self: Record, other: object) -> bool:
    if type(other) is not type(self):
        return NotImplemented
    return _compare_key(self) == _compare_key(other)


def _make_order_method(name: str, op: Callable[[Any, Any], bool]) -> Callable[[Record, object], bool]:
    def method(self: Record, other: object) -> bool:
        if type(other) is not type(self):
            raise IncomparableTypesError(self, other)
        return op(_compare_key(self), _compare_key(other))

    method.__name__ = name
    return method


_ORDER_METHODS = {
    name: _make_order_method(name, op)
    for name, op in (
        ("__lt__", operator.lt),
        ("__le__", operator.le),
        ("__gt__", operator.gt),
        ("__ge__", operator.ge),
    )
}


def _record_hash(self: Record) -> int:
    return hash(_hash_key(self))


def _unhashable(self: Record) -> int:
    raise UnhashableError(type(self).__name__)


def compact_repr(record: Record) -> str:
    """
    Render a record using the user-facing ``str()`` of each shown field.

    Pass it as ``derive(..., repr=compact_repr)`` to replace the debug representation.

    Example:
        Card(Q, ♡) instead of Card(rank='Q', suit='♡')

    """
    schema = type(record).__record_schema__
    body = ", ".join(str(getattr(record, f.name)) for f in schema.repr_fields)
    return f"{type(record).__name__}({body})"


# -- Synthesis -----------------------------------------------------------------


def _caller_module(depth: int = 2) -> str | None:
    try:
        return sys._getframe(depth).f_globals.get("__name__", "__main__")
    except (AttributeError, ValueError):
        return None


def derive(
    schema: RecordSchema,
    name: str = "Record",
    *,
    post_init: Callable[[Any], None] | None = None,
    repr: Callable[[Any], str] | None = None,  # noqa: A002
    slots: bool = True,
    module: str | None = None,
) -> type[Record]:
    """
    Synthesize a record type from a schema.

    Args:
        schema: The validated schema.
        name: Name of the generated class, used by the representation.
        post_init: Hook called exactly once per instance after the constructor has
            bound every field. It may assign fields even on frozen records.
        repr: Replacement for the generated ``__repr__``.
        slots: Store field values in ``__slots__`` instead of a per-instance ``__dict__``.
        module: Value for the class ``__module__``; defaults to the caller's module.

    Returns:
        A new subclass of ``Record``.

    Raises:
        ValueError: If ``name`` is not a valid identifier.

    Example:
        Position = derive(position_schema, "Position")
        oslo = Position("Oslo", 10.8, 59.9)

    """
    if not name.isidentifier():
        msg = f"Record type name must be an identifier, got {name!r}"
        raise ValueError(msg)

    namespace: dict[str, Any] = {
        "__record_schema__": schema,
        "__record_post_init__": staticmethod(post_init) if post_init is not None else None,
        "__match_args__": tuple(f.name for f in schema.init_fields),
        "__module__": module or _caller_module() or __name__,
        "__init__": _record_init,
    }
    if slots:
        namespace["__slots__"] = schema.field_names + ((_SEALED,) if schema.frozen else ())

    if repr is not None:
        namespace["__repr__"] = repr
    elif schema.generate_repr:
        namespace["__repr__"] = _record_repr

    if schema.generate_eq:
        namespace["__eq__"] = _record_eq
    if schema.generate_order:
        namespace.update(_ORDER_METHODS)

    namespace["__hash__"] = _record_hash if schema.hashable else _unhashable

    if schema.frozen:
        namespace["__setattr__"] = _frozen_setattr
        namespace["__delattr__"] = _frozen_delattr

    record_type = type(name, (Record,), namespace)
    logger.debug(
        "Derived record type %s (fields=%s, frozen=%s, order=%s, hashable=%s)",
        name,
        ", ".join(schema.field_names) or "<none>",
        schema.frozen,
        schema.generate_order,
        schema.hashable,
    )
    return record_type


# -- Instance-level operations -------------------------------------------------


def _require_record(value: object) -> Record:
    if not isinstance(value, Record):
        msg = f"Expected a record instance, got {type(value).__name__}"
        raise TypeError(msg)
    return value


def construct(record_type: type[Record], *args: Any, **kwargs: Any) -> Record:
    """Create an instance of ``record_type``. Equivalent to calling the type."""
    return record_type(*args, **kwargs)


def equals_outcome(a: object, b: object) -> Comparison:
    """
    Compare two records for equality and return a tagged outcome.

    Returns:
        ``Comparison.INCOMPARABLE`` if the values are not records of the exact same
        type, otherwise ``EQUAL`` or ``NOT_EQUAL``. Types derived without equality
        compare by identity.

    """
    if not isinstance(a, Record) or type(a) is not type(b):
        return Comparison.INCOMPARABLE
    if a is b:
        return Comparison.EQUAL
    if not type(a).__record_schema__.generate_eq:
        return Comparison.NOT_EQUAL
    return Comparison.EQUAL if _compare_key(a) == _compare_key(b) else Comparison.NOT_EQUAL


def equals(a: object, b: object) -> bool:
    """Return True if ``a`` and ``b`` are equal records of the same type."""
    return equals_outcome(a, b) is Comparison.EQUAL


def compare(a: Record, b: Record) -> Ordering:
    """
    Order two records of the same type by their compared fields.

    Raises:
        IncomparableTypesError: If the types differ or the type was derived
            without ordering.

    """
    if not isinstance(a, Record) or type(a) is not type(b):
        raise IncomparableTypesError(a, b)
    if not type(a).__record_schema__.generate_order:
        raise IncomparableTypesError(a, b, "ordering was not generated")
    left, right = _compare_key(a), _compare_key(b)
    if left < right:
        return Ordering.LESS
    if left == right:
        return Ordering.EQUAL
    return Ordering.GREATER


def represent(record: Record) -> str:
    """Return the representation of a record."""
    return repr(_require_record(record))


def assign(record: Record, field_name: str, value: Any) -> None:
    """
    Assign a field of a record.

    Raises:
        AttributeError: If the record has no such field.
        FrozenRecordError: If the record is frozen.

    """
    _require_record(record)
    if field_name not in type(record).__record_schema__:
        msg = f"{type(record).__name__!r} record has no field {field_name!r}"
        raise AttributeError(msg)
    setattr(record, field_name, value)


def record_hash(record: Record) -> int:
    """
    Return the hash of a record.

    Raises:
        UnhashableError: If the record type is not eligible for hashing.

    """
    return hash(_require_record(record))


__all__ = [
    "Comparison",
    "Ordering",
    "Record",
    "assign",
    "compact_repr",
    "compare",
    "construct",
    "derive",
    "equals",
    "equals_outcome",
    "record_hash",
    "represent",
]
