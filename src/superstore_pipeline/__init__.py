"""Apache Beam pipeline enriching Superstore sales extracts for Snowflake reporting."""

from .errors import (
    SalesPipelineError,
    ConfigurationError,
    SchemaMismatchError,
    DateParseError,
    DivisionByZeroError,
    OutputValidationError
)
from .schemas import RawSalesRecord, EnrichedSalesRecord, SalesRejection
from .transformer import (
    DateErrorPolicy,
    parse_order_date,
    passes_filter,
    enrich_record,
    transform_record,
    transform_records,
    transform_all
)

__all__ = [
    'SalesPipelineError',
    'ConfigurationError',
    'SchemaMismatchError',
    'DateParseError',
    'DivisionByZeroError',
    'OutputValidationError',
    'RawSalesRecord',
    'EnrichedSalesRecord',
    'SalesRejection',
    'DateErrorPolicy',
    'parse_order_date',
    'passes_filter',
    'enrich_record',
    'transform_record',
    'transform_records',
    'transform_all'
]
