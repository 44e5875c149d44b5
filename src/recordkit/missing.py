"""Sentinel class for unbound field values."""


class MISSING:  # noqa: N801
    """
    Sentinel class indicating that no value was supplied.

    Use the class itself (not an instance) as a marker for a FieldSpec
    ``default`` or ``default_factory`` that was not given. ``None`` cannot be
    used for this because ``None`` is a perfectly valid default value.

    Example:
        FieldSpec(name="city")                    # default is MISSING
        FieldSpec(name="country", default=None)  # default is None

    """
