"""Public exports for Superstore pipeline record types and schema definitions."""

from .records import (
    RawSalesRecord,
    EnrichedSalesRecord,
    SalesRejection,
    RAW_FIELDS,
    ENRICHED_FIELDS,
    coerce_raw_record
)
from .schemas import (
    ENRICHED_PARQUET_SCHEMA,
    SNOWFLAKE_TABLE_SCHEMA,
    SUMMARY_FIELDS,
    ENRICHED_CSV_HEADERS,
    REJECTED_CSV_HEADERS,
    SUMMARY_CSV_HEADERS
)

__all__ = [
    'RawSalesRecord',
    'EnrichedSalesRecord',
    'SalesRejection',
    'RAW_FIELDS',
    'ENRICHED_FIELDS',
    'coerce_raw_record',
    'ENRICHED_PARQUET_SCHEMA',
    'SNOWFLAKE_TABLE_SCHEMA',
    'SUMMARY_FIELDS',
    'ENRICHED_CSV_HEADERS',
    'REJECTED_CSV_HEADERS',
    'SUMMARY_CSV_HEADERS'
]
