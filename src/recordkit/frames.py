"""DataFrame export for sequences of records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .synthesizer import Record

if TYPE_CHECKING:
    import pandas as pd
    import polars as pl


def _columns(records: Sequence[Record], record_type: type[Record] | None) -> dict[str, list[Any]]:
    """
    Collect field values column by column.

    Args:
        records: Records of a single type.
        record_type: Required when ``records`` is empty; otherwise must match.

    Returns:
        Mapping of field name to values, in declaration order.

    Raises:
        TypeError: If the records are of mixed types or no type can be determined.

    """
    if record_type is None:
        if not records:
            msg = "record_type is required when exporting an empty sequence"
            raise TypeError(msg)
        record_type = type(records[0])

    for record in records:
        if type(record) is not record_type:
            msg = f"Expected only {record_type.__name__} records, got {type(record).__name__}"
            raise TypeError(msg)

    names = record_type.__record_schema__.field_names
    return {name: [getattr(r, name) for r in records] for name in names}


def to_pandas(records: Sequence[Record], record_type: type[Record] | None = None) -> pd.DataFrame:
    """
    Build a pandas DataFrame with one row per record and one column per field.

    Raises:
        MissingDependencyError: If pandas is not installed.

    Example:
        df = to_pandas([oslo, madrid])

    """
    try:
        import pandas as pd
    except ImportError:
        from .missing_dependency_error import MissingDependencyError

        package = "pandas"
        raise MissingDependencyError(package, "to_pandas") from None

    return pd.DataFrame(_columns(records, record_type))


def to_polars(records: Sequence[Record], record_type: type[Record] | None = None) -> pl.DataFrame:
    """
    Build a polars DataFrame with one row per record and one column per field.

    Raises:
        MissingDependencyError: If polars is not installed.

    Example:
        df = to_polars(deck.cards)

    """
    try:
        import polars as pl
    except ImportError:
        from .missing_dependency_error import MissingDependencyError

        package = "polars"
        raise MissingDependencyError(package, "to_polars") from None

    return pl.DataFrame(_columns(records, record_type))
