from .parse_transforms import ParseCSVTransform, parse_csv_line, iter_csv_records
from .enrich_transforms import EnrichSalesTransform
from .sales_transforms import MonthlySummaryTransform
from .io_transforms import WriteToCSVTransform, WriteToParquetTransform, WriteToSnowflakeTransform
from .utils import validate_output_paths, record_to_dict, rejection_to_dict

"""
Transform module for Superstore pipeline data processing.

This module provides various data transformation utilities including:
- Parsing transforms for the staged CSV extract
- Enrichment of raw records with derived columns
- Monthly summaries per region
- I/O operations for CSV, Parquet and Snowflake outputs
- Utility functions for output validation and formatting
"""

__all__ = [
    'ParseCSVTransform',
    'parse_csv_line',
    'iter_csv_records',
    'EnrichSalesTransform',
    'MonthlySummaryTransform',
    'WriteToCSVTransform',
    'WriteToParquetTransform',
    'WriteToSnowflakeTransform',
    'validate_output_paths',
    'record_to_dict',
    'rejection_to_dict'
]
