"""Record types flowing through the Superstore pipeline.

Records are immutable ``NamedTuple`` values. A ``RawSalesRecord`` is what the
CSV stage produces; an ``EnrichedSalesRecord`` is derived from one raw record
that passed the filter predicate.
"""

import datetime
import math
from collections.abc import Mapping
from typing import NamedTuple, Optional

from superstore_pipeline.errors import SchemaMismatchError

NULL_MARKERS = ("", "null", "NULL", "None", "NaN", "nan")


class RawSalesRecord(NamedTuple):
    order_id: str
    order_date: str
    month_of_sale: str
    customer_id: str
    customer_name: str
    country: str
    region: str
    city: str
    category: str
    subcategory: str
    quantity: int
    discount: float
    sales: float
    profit: float


class EnrichedSalesRecord(NamedTuple):
    order_id: str
    order_date: datetime.date
    month_of_sale: str
    customer_id: str
    customer_name: str
    country: str
    region: str
    city: str
    category: str
    subcategory: str
    quantity: int
    discount: float
    sales: float
    profit: float
    profit_margin: float
    discounted_sales: float
    sale_year: int
    sale_month: int


class SalesRejection(NamedTuple):
    """A record dropped by the transformer, with the reason it was dropped."""

    reason: str
    record: RawSalesRecord
    detail: Optional[str] = None


RAW_FIELDS = RawSalesRecord._fields
ENRICHED_FIELDS = EnrichedSalesRecord._fields

_CONVERTERS = {
    "quantity": int,
    "discount": float,
    "sales": float,
    "profit": float,
}


def _convert(field_name, value):
    if value is None or (isinstance(value, str) and value.strip() in NULL_MARKERS):
        raise SchemaMismatchError("Missing value", field_name=field_name, value=value)

    converter = _CONVERTERS.get(field_name)
    if converter is None:
        return str(value).strip()

    if isinstance(value, bool):
        raise SchemaMismatchError(
            f"Expected {converter.__name__}", field_name=field_name, value=value
        )
    try:
        if converter is int and isinstance(value, (str, float)):
            # Some exports write integral quantities as "2.0"
            as_float = float(value)
            if not as_float.is_integer():
                raise ValueError(value)
            return int(as_float)
        converted = converter(value)
    except (TypeError, ValueError):
        raise SchemaMismatchError(
            f"Expected {converter.__name__}", field_name=field_name, value=value
        ) from None

    if not math.isfinite(converted):
        raise SchemaMismatchError("Non-finite number", field_name=field_name, value=value)
    return converted


def coerce_raw_record(item):
    """Build a RawSalesRecord from a record, a mapping or a positional sequence.

    Raises SchemaMismatchError when fields are missing, extra, null or of the
    wrong type.
    """
    if isinstance(item, RawSalesRecord):
        values = tuple(item)
    elif isinstance(item, Mapping):
        keys = set(item.keys())
        missing = [name for name in RAW_FIELDS if name not in keys]
        extra = sorted(str(key) for key in keys - set(RAW_FIELDS))
        if missing or extra:
            raise SchemaMismatchError(
                f"Record fields do not match schema (missing={missing}, extra={extra})"
            )
        values = tuple(item[name] for name in RAW_FIELDS)
    elif isinstance(item, (list, tuple)):
        if len(item) != len(RAW_FIELDS):
            raise SchemaMismatchError(
                f"Expected {len(RAW_FIELDS)} fields, got {len(item)}", value=item
            )
        values = tuple(item)
    else:
        raise SchemaMismatchError(
            f"Unsupported record type {type(item).__name__}", value=item
        )

    return RawSalesRecord(
        *(_convert(name, value) for name, value in zip(RAW_FIELDS, values))
    )
