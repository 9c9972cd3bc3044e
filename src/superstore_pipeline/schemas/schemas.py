"""Schema definitions for Superstore pipeline data processing.

This module provides schema configurations and header definitions for the
enriched, rejected and summary outputs written by the Superstore pipeline.

Exports:
    ENRICHED_PARQUET_SCHEMA: pyarrow schema for enriched Parquet output
    SNOWFLAKE_TABLE_SCHEMA: Snowflake table definition for enriched data
    ENRICHED_CSV_HEADERS: Headers for enriched CSV files
    REJECTED_CSV_HEADERS: Headers for rejected-record CSV files
    SUMMARY_CSV_HEADERS: Headers for monthly summary CSV files
"""

import pyarrow as pa

from .records import ENRICHED_FIELDS, RAW_FIELDS

ENRICHED_PARQUET_SCHEMA = pa.schema([
    ('order_id', pa.string()),
    ('order_date', pa.date32()),
    ('month_of_sale', pa.string()),
    ('customer_id', pa.string()),
    ('customer_name', pa.string()),
    ('country', pa.string()),
    ('region', pa.string()),
    ('city', pa.string()),
    ('category', pa.string()),
    ('subcategory', pa.string()),
    ('quantity', pa.int64()),
    ('discount', pa.float64()),
    ('sales', pa.float64()),
    ('profit', pa.float64()),
    ('profit_margin', pa.float64()),
    ('discounted_sales', pa.float64()),
    ('sale_year', pa.int64()),
    ('sale_month', pa.int64())
])

_SNOWFLAKE_TYPES = {
    'string': 'varchar',
    'date32[day]': 'date',
    'int64': 'integer',
    'double': 'double',
}

SNOWFLAKE_TABLE_SCHEMA = {
    'schema': [
        {
            'dataType': {'type': _SNOWFLAKE_TYPES[str(field.type)]},
            'name': field.name.upper(),
            'nullable': False
        }
        for field in ENRICHED_PARQUET_SCHEMA
    ]
}

SUMMARY_FIELDS = (
    'sale_year',
    'sale_month',
    'region',
    'order_count',
    'total_sales',
    'total_profit',
    'profit_margin'
)

ENRICHED_CSV_HEADERS = ','.join(ENRICHED_FIELDS)
REJECTED_CSV_HEADERS = ','.join(('reason',) + RAW_FIELDS + ('detail',))
SUMMARY_CSV_HEADERS = ','.join(SUMMARY_FIELDS)
