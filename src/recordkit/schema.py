"""RecordSchema definition and validation."""

from __future__ import annotations

import dataclasses
import keyword
import logging
from collections.abc import Iterable, Iterator
from typing import Any

from .errors import (
    ConflictingDefaultError,
    DuplicateFieldError,
    FieldOrderError,
    InvalidFieldNameError,
    MutableDefaultError,
)
from .field_spec import FieldSpec
from .missing import MISSING
from .settings import get_settings

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class RecordSchema:
    """
    An ordered, validated collection of FieldSpecs plus generation flags.

    Instances are produced by ``define_schema`` or ``extend`` and are immutable.

    Attributes:
        fields: FieldSpecs in declaration order.
        generate_init: Synthesize a constructor.
        generate_repr: Synthesize ``TypeName(field=value, ...)`` representations.
        generate_eq: Synthesize value equality over compared fields.
        generate_order: Synthesize lexicographic ordering over compared fields.
        frozen: Reject field assignment once construction has completed.
        unsafe_hash: Force a field-based hash even for mutable records.

    """

    fields: tuple[FieldSpec, ...]
    generate_init: bool = True
    generate_repr: bool = True
    generate_eq: bool = True
    generate_order: bool = False
    frozen: bool = False
    unsafe_hash: bool = False

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __contains__(self, name: object) -> bool:
        return any(f.name == name for f in self.fields)

    def __add__(self, other: RecordSchema) -> RecordSchema:
        """Combine two schemas with the ``+`` operator."""
        if not isinstance(other, RecordSchema):
            return NotImplemented
        from .schema_algebra import combine_schemas

        return combine_schemas(self, other)

    @property
    def field_names(self) -> tuple[str, ...]:
        """Return field names in declaration order."""
        return tuple(f.name for f in self.fields)

    @property
    def init_fields(self) -> tuple[FieldSpec, ...]:
        """Return the fields accepted by the generated constructor."""
        return tuple(f for f in self.fields if f.include_in_init)

    @property
    def compare_fields(self) -> tuple[FieldSpec, ...]:
        """Return the fields participating in equality and ordering."""
        return tuple(f for f in self.fields if f.include_in_compare)

    @property
    def repr_fields(self) -> tuple[FieldSpec, ...]:
        """Return the fields shown by the generated representation."""
        return tuple(f for f in self.fields if f.include_in_repr)

    @property
    def hash_fields(self) -> tuple[FieldSpec, ...]:
        """Return the fields feeding the generated hash."""
        return tuple(f for f in self.fields if f.hashed)

    @property
    def hashable(self) -> bool:
        """
        Return True if records derived from this schema support hashing.

        A field-based hash is generated when ``unsafe_hash`` is set, or when the
        record is both frozen and equality-bearing. Every other combination is
        unhashable.
        """
        return self.unsafe_hash or (self.frozen and self.generate_eq)

    def get(self, name: str) -> FieldSpec:
        """
        Return the FieldSpec with the given name.

        Raises:
            KeyError: If the schema has no such field.

        """
        for f in self.fields:
            if f.name == name:
                return f
        raise KeyError(name)

    def flags(self) -> dict[str, bool]:
        """Return the schema-level flags as a dictionary."""
        return {
            "generate_init": self.generate_init,
            "generate_repr": self.generate_repr,
            "generate_eq": self.generate_eq,
            "generate_order": self.generate_order,
            "frozen": self.frozen,
            "unsafe_hash": self.unsafe_hash,
        }


def _coerce(spec: FieldSpec | str) -> FieldSpec:
    if isinstance(spec, FieldSpec):
        return spec
    if isinstance(spec, str):
        return FieldSpec(name=spec)
    msg = f"Expected FieldSpec or str, got {type(spec).__name__}"
    raise TypeError(msg)


# names starting with this prefix are reserved for slots the synthesizer adds
RESERVED_PREFIX = "_record_"


def _is_mutable_default(value: Any) -> bool:
    """
    Return True for literal defaults that would be shared between instances.

    Unhashable values are mutable, and so are instances of record types that
    are not hashable (mutable records install a ``__hash__`` that raises).
    """
    if value is MISSING:
        return False
    if type(value).__hash__ is None:
        return True
    record_schema = getattr(type(value), "__record_schema__", None)
    return isinstance(record_schema, RecordSchema) and not record_schema.hashable


def _is_valid_name(name: object) -> bool:
    return (
        isinstance(name, str)
        and name.isidentifier()
        and not keyword.iskeyword(name)
        and not name.startswith(("__", RESERVED_PREFIX))
    )


def validate_fields(fields: Iterable[FieldSpec]) -> tuple[FieldSpec, ...]:
    """
    Validate an ordered field list.

    Args:
        fields: FieldSpecs in construction order.

    Returns:
        The validated fields as a tuple.

    Raises:
        InvalidFieldNameError: If a name is not a usable identifier or uses a reserved prefix.
        DuplicateFieldError: If a name occurs twice.
        ConflictingDefaultError: If a field sets both default and default_factory.
        MutableDefaultError: If a literal default is mutable and the
            ``reject_mutable_defaults`` setting is enabled.
        FieldOrderError: If a constructor field without a default follows one with a default.

    """
    result = tuple(fields)
    reject_mutable = get_settings().reject_mutable_defaults
    seen: set[str] = set()
    first_default: str | None = None

    for spec in result:
        name = spec.name
        if not _is_valid_name(name):
            raise InvalidFieldNameError(name)
        if name in seen:
            raise DuplicateFieldError(name)
        seen.add(name)

        if spec.default is not MISSING and spec.default_factory is not MISSING:
            raise ConflictingDefaultError(name)
        if spec.default_factory is not MISSING and not callable(spec.default_factory):
            msg = f"default_factory for field {name!r} must be callable"
            raise TypeError(msg)
        if reject_mutable and _is_mutable_default(spec.default):
            raise MutableDefaultError(name, type(spec.default))

        if not spec.include_in_init:
            continue
        if spec.has_default:
            if first_default is None:
                first_default = name
        elif first_default is not None:
            raise FieldOrderError(name, first_default)

    return result


def define_schema(
    fields: Iterable[FieldSpec | str],
    *,
    generate_init: bool = True,
    generate_repr: bool = True,
    generate_eq: bool = True,
    generate_order: bool = False,
    frozen: bool = False,
    unsafe_hash: bool = False,
) -> RecordSchema:
    """
    Validate a field list and build an immutable RecordSchema.

    Args:
        fields: FieldSpecs (or bare names for required fields) in declaration order.
        generate_init: Synthesize a constructor.
        generate_repr: Synthesize a debug representation.
        generate_eq: Synthesize value equality.
        generate_order: Synthesize ordering. Requires ``generate_eq``.
        frozen: Make instances read-only after construction.
        unsafe_hash: Generate a hash even if the record is mutable.

    Returns:
        The validated schema.

    Raises:
        SchemaError: If any field fails validation (see ``validate_fields``).
        ValueError: If ordering is requested without equality.

    Example:
        schema = define_schema(
            [
                FieldSpec(name="name", declared_type=str),
                FieldSpec(name="lon", declared_type=float, default=0.0),
                FieldSpec(name="lat", declared_type=float, default=0.0),
            ],
            frozen=True,
        )

    """
    if generate_order and not generate_eq:
        msg = "generate_order requires generate_eq"
        raise ValueError(msg)

    validated = validate_fields(_coerce(f) for f in fields)
    schema = RecordSchema(
        fields=validated,
        generate_init=generate_init,
        generate_repr=generate_repr,
        generate_eq=generate_eq,
        generate_order=generate_order,
        frozen=frozen,
        unsafe_hash=unsafe_hash,
    )
    logger.debug("Defined schema with fields %s", ", ".join(schema.field_names) or "<none>")
    return schema


__all__ = ["RecordSchema", "define_schema", "validate_fields"]
