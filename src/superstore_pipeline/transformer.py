"""
Record transformer for Superstore sales data.

Turns raw sales records into enriched records, one row at a time:
1. Parses order_date (YYYY-MM-DD) into a calendar date
2. Keeps only records with positive sales and positive profit
3. Derives profit_margin, discounted_sales, sale_year and sale_month

The functions here are pure. They do no I/O and keep no state between rows,
so the same code runs in a plain loop, a thread pool or a Beam DoFn.
"""

import datetime
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from enum import Enum

import pandas as pd
from pandas.errors import OutOfBoundsDatetime

from superstore_pipeline.errors import (
    ConfigurationError,
    DateParseError,
    DivisionByZeroError,
    SchemaMismatchError,
)
from superstore_pipeline.schemas.records import (
    EnrichedSalesRecord,
    SalesRejection,
    coerce_raw_record,
)

ORDER_DATE_FORMAT = "%Y-%m-%d"
ORDER_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

REJECT_FILTERED = "filtered"
REJECT_DATE_ERROR = "date_error"


class DateErrorPolicy(str, Enum):
    """What to do with a record whose order date does not parse."""

    SKIP = "skip"
    ABORT = "abort"

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(policy.value for policy in cls)
            raise ConfigurationError(
                f"Invalid on_date_error '{value}', expected one of: {choices}"
            ) from None


def parse_order_date(value, order_id=None):
    """Parse a YYYY-MM-DD order date into a ``datetime.date``."""
    if not isinstance(value, str):
        raise DateParseError(
            f"Order date must be text, got {type(value).__name__}",
            value=value,
            order_id=order_id,
        )
    value = value.strip()
    if not ORDER_DATE_PATTERN.match(value):
        raise DateParseError(
            f"Order date '{value}' does not match YYYY-MM-DD",
            value=value,
            order_id=order_id,
        )
    try:
        # Out-of-range days and months ("2024-02-30") fail here
        return pd.to_datetime(value, format=ORDER_DATE_FORMAT).date()
    except OutOfBoundsDatetime:
        pass
    except (ValueError, TypeError) as e:
        raise DateParseError(
            f"Order date '{value}' does not match YYYY-MM-DD: {e}",
            value=value,
            order_id=order_id,
        ) from e

    # Outside the nanosecond Timestamp range (before 1677 or after 2262)
    try:
        return datetime.date.fromisoformat(value)
    except ValueError as e:
        raise DateParseError(
            f"Order date '{value}' is not a calendar date: {e}",
            value=value,
            order_id=order_id,
        ) from e


def passes_filter(record):
    return record.sales > 0 and record.profit > 0


def enrich_record(record, order_date):
    """Derive the enriched record for a raw record and its parsed order date."""
    if record.sales == 0:
        raise DivisionByZeroError(
            f"Cannot derive profit_margin for order {record.order_id}: sales is 0",
            order_id=record.order_id,
        )

    fields = record._asdict()
    fields["order_date"] = order_date
    return EnrichedSalesRecord(
        **fields,
        profit_margin=record.profit / record.sales,
        discounted_sales=record.sales * (1 - record.discount),
        sale_year=order_date.year,
        sale_month=order_date.month,
    )


def _transform_one(item, policy):
    # Returns (enriched, rejection); exactly one of them is None
    try:
        record = coerce_raw_record(item)
    except SchemaMismatchError as e:
        logging.error(f"Aborting run on malformed record: {e}")
        raise

    try:
        order_date = parse_order_date(record.order_date, order_id=record.order_id)
    except DateParseError as e:
        if policy is DateErrorPolicy.ABORT:
            logging.error(f"Aborting run on order {record.order_id}: {e}")
            raise
        logging.warning(f"Skipping order {record.order_id}: {e}")
        return None, SalesRejection(REJECT_DATE_ERROR, record, str(e))

    if not passes_filter(record):
        return None, SalesRejection(
            REJECT_FILTERED, record, f"sales={record.sales}, profit={record.profit}"
        )

    return enrich_record(record, order_date), None


def transform_record(item, on_date_error=DateErrorPolicy.SKIP):
    """Transform one record; returns None when the record is dropped."""
    enriched, _ = _transform_one(item, DateErrorPolicy.parse(on_date_error))
    return enriched


def transform_records(records, on_date_error=DateErrorPolicy.SKIP, on_reject=None):
    """Lazily transform a sequence of raw records, preserving input order.

    ``on_reject`` is called with a SalesRejection for every dropped record.
    Dropped records are otherwise silent.
    """
    policy = DateErrorPolicy.parse(on_date_error)
    for item in records:
        enriched, rejection = _transform_one(item, policy)
        if enriched is not None:
            yield enriched
        elif on_reject is not None:
            on_reject(rejection)


def transform_all(records, on_date_error=DateErrorPolicy.SKIP, workers=1):
    """Transform every record and return the complete list.

    With ``workers > 1`` rows are spread over a thread pool and merged back
    in input order. Either the whole list is returned or an exception is
    raised; callers never see a partial result.
    """
    policy = DateErrorPolicy.parse(on_date_error)
    if workers <= 1:
        return list(transform_records(records, policy))

    with ThreadPoolExecutor(max_workers=workers) as executor:
        results = list(executor.map(lambda item: _transform_one(item, policy), records))

    enriched = [record for record, _ in results if record is not None]
    logging.info(
        f"Transformed {len(results)} records with {workers} workers, kept {len(enriched)}"
    )
    return enriched
