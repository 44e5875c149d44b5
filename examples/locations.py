"""Immutable positions and schema extension."""

from recordkit import FrozenRecordError, define_schema, derive, extend, field
from recordkit.frames import to_pandas

position_schema = define_schema(
    [
        field("name", str),
        field("lon", float, default=0.0),
        field("lat", float, default=0.0),
    ],
    frozen=True,
)
Position = derive(position_schema, "Position")

# Capital keeps name/lon/lat in place, moves the default latitude and adds a country
capital_schema = extend(
    position_schema,
    [field("country", str, default="Unknown Country")],
    {"lat": field("lat", float, default=40.0)},
)
Capital = derive(capital_schema, "Capital")


if __name__ == "__main__":
    oslo = Position("Oslo", 10.8, 59.9)
    print(oslo)
    try:
        oslo.name = "Stockholm"
    except FrozenRecordError as e:
        print(e)

    madrid = Capital("Madrid", country="Spain")
    print(madrid)
    print(to_pandas([Capital("Oslo", 10.8, 59.9, "Norway"), madrid]))
