"""
recordkit - Synthesized record types from declarative field schemas.

Provides a record synthesizer that, given an ordered list of field specs,
builds a class with:
- A constructor with per-instance default factories
- Value equality and optional lexicographic ordering
- A debug representation that can be replaced wholesale
- Optional shallow immutability and a hash consistent with equality

Core API:
    FieldSpec / field: Describe one field.
    define_schema: Validate fields and build a RecordSchema.
    extend / combine_schemas: Derive schemas from existing ones.
    derive: Synthesize a record type from a schema.

Optional integrations (separate imports):
    to_pandas / to_polars: ``from recordkit.frames import to_pandas``
    to_pandera_schema: ``from recordkit.pandera import to_pandera_schema``

Usage:
    from recordkit import define_schema, derive, extend, field

    position = define_schema(
        [field("name", str), field("lon", float, default=0.0), field("lat", float, default=0.0)],
        frozen=True,
    )
    Position = derive(position, "Position")

    oslo = Position("Oslo", 10.8, 59.9)
    oslo.name = "Stockholm"  # ✗ FrozenRecordError

    Capital = derive(extend(position, [field("country", str)], {"lat": field("lat", float, default=40.0)}), "Capital")
    Capital("Madrid", country="Spain")  # Capital(name='Madrid', lon=0.0, lat=40.0, country='Spain')
"""

__version__ = "0.1.0"

from .errors import ConflictingDefaultError as ConflictingDefaultError
from .errors import DuplicateFieldError as DuplicateFieldError
from .errors import FieldOrderError as FieldOrderError
from .errors import FrozenRecordError as FrozenRecordError
from .errors import IncomparableTypesError as IncomparableTypesError
from .errors import InvalidFieldNameError as InvalidFieldNameError
from .errors import MutableDefaultError as MutableDefaultError
from .errors import RecordError as RecordError
from .errors import SchemaConflictError as SchemaConflictError
from .errors import SchemaError as SchemaError
from .errors import UnhashableError as UnhashableError
from .errors import UninitializedFieldError as UninitializedFieldError
from .errors import UnknownFieldError as UnknownFieldError
from .field_spec import FieldSpec as FieldSpec
from .field_spec import field as field
from .helpers import asdict as asdict
from .helpers import astuple as astuple
from .helpers import fields as fields
from .helpers import is_record as is_record
from .helpers import replace as replace
from .missing import MISSING as MISSING
from .missing_dependency_error import MissingDependencyError as MissingDependencyError
from .schema import RecordSchema as RecordSchema
from .schema import define_schema as define_schema
from .schema_algebra import combine_schemas as combine_schemas
from .schema_algebra import extend as extend
from .synthesizer import Comparison as Comparison
from .synthesizer import Ordering as Ordering
from .synthesizer import Record as Record
from .synthesizer import assign as assign
from .synthesizer import compact_repr as compact_repr
from .synthesizer import compare as compare
from .synthesizer import construct as construct
from .synthesizer import derive as derive
from .synthesizer import equals as equals
from .synthesizer import equals_outcome as equals_outcome
from .synthesizer import record_hash as record_hash
from .synthesizer import represent as represent

__all__ = [
    "MISSING",
    "Comparison",
    "ConflictingDefaultError",
    "DuplicateFieldError",
    "FieldOrderError",
    "FieldSpec",
    "FrozenRecordError",
    "IncomparableTypesError",
    "InvalidFieldNameError",
    "MissingDependencyError",
    "MutableDefaultError",
    "Ordering",
    "Record",
    "RecordError",
    "RecordSchema",
    "SchemaConflictError",
    "SchemaError",
    "UnhashableError",
    "UninitializedFieldError",
    "UnknownFieldError",
    "asdict",
    "assign",
    "astuple",
    "combine_schemas",
    "compact_repr",
    "compare",
    "construct",
    "define_schema",
    "derive",
    "equals",
    "equals_outcome",
    "extend",
    "field",
    "fields",
    "is_record",
    "record_hash",
    "replace",
    "represent",
]
