"""Error taxonomy for record schemas and record instances."""

from __future__ import annotations


class RecordError(Exception):
    """Base class for every error raised by recordkit."""


# -- Schema-time errors --------------------------------------------------------


class SchemaError(RecordError, ValueError):
    """Raised when a schema definition or extension is invalid."""


class DuplicateFieldError(SchemaError):
    """Raised when a field name occurs more than once in a schema."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Duplicate field name: {field_name!r}")


class FieldOrderError(SchemaError):
    """Raised when a required constructor field follows a field with a default."""

    def __init__(self, field_name: str, previous: str) -> None:
        self.field_name = field_name
        self.previous = previous
        super().__init__(
            f"Non-default field {field_name!r} follows default field {previous!r}",
        )


class ConflictingDefaultError(SchemaError):
    """Raised when a field sets both ``default`` and ``default_factory``."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Field {field_name!r} cannot specify both default and default_factory")


class MutableDefaultError(SchemaError):
    """Raised when a literal default is a mutable (unhashable) value."""

    def __init__(self, field_name: str, value_type: type) -> None:
        self.field_name = field_name
        self.value_type = value_type
        super().__init__(
            f"Mutable default {value_type.__name__} for field {field_name!r} is not allowed: "
            "use default_factory",
        )


class InvalidFieldNameError(SchemaError):
    """Raised when a field name is not a usable Python identifier."""

    def __init__(self, field_name: object) -> None:
        self.field_name = field_name
        super().__init__(f"Invalid field name: {field_name!r}")


class UnknownFieldError(SchemaError):
    """Raised when an extension overrides a field the base schema does not have."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Cannot override unknown field {field_name!r}")


class SchemaConflictError(SchemaError):
    """Raised when combined schemas declare the same field differently."""

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Conflicting definitions for field {field_name!r}")


# -- Instance-time errors ------------------------------------------------------


class UninitializedFieldError(RecordError, AttributeError):
    """Raised when a field without a bound value is read."""

    def __init__(self, type_name: str, field_name: str) -> None:
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"{type_name}.{field_name} was never initialized")


class FrozenRecordError(RecordError, AttributeError):
    """Raised when a field of a frozen record is assigned or deleted."""

    def __init__(self, type_name: str, field_name: str) -> None:
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"cannot assign to field {field_name!r} of frozen record {type_name}")


class IncomparableTypesError(RecordError, TypeError):
    """Raised when two records cannot be ordered against each other."""

    def __init__(self, left: object, right: object, reason: str = "") -> None:
        self.left_type = type(left)
        self.right_type = type(right)
        msg = f"cannot order {type(left).__name__} against {type(right).__name__}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)


class UnhashableError(RecordError, TypeError):
    """Raised when hashing a record type that is not eligible for hashing."""

    def __init__(self, type_name: str) -> None:
        self.type_name = type_name
        super().__init__(f"unhashable record type: {type_name!r}")
