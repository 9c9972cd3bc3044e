import apache_beam as beam
from apache_beam.io.snowflake import CreateDisposition, WriteDisposition, WriteToSnowflake
import csv
import logging
from io import StringIO

from superstore_pipeline.schemas import ENRICHED_FIELDS, ENRICHED_PARQUET_SCHEMA, SNOWFLAKE_TABLE_SCHEMA
from .utils import record_to_dict


class WriteToCSVTransform(beam.PTransform):
    """A PTransform for writing records to a single CSV file with a header row.

    This transform takes a PCollection of dictionaries or record tuples, converts
    them to CSV lines in the order given by ``headers`` and writes them to a local
    path or Azure Blob Storage (azfs://)."""

    def __init__(self, output_path, headers):
        super().__init__()
        self.output_path = output_path
        self.headers = headers

    def expand(self, pcoll):
        fields = self.headers.split(',')
        return (
            pcoll
            | 'Convert to CSV' >> beam.Map(self.dict_to_csv, fields)
            | 'Write CSV' >> beam.io.WriteToText(
                self.output_path,
                header=self.headers,
                shard_name_template=''  # Single output file
            )
        )

    @staticmethod
    def dict_to_csv(row, fields):
        """Converts a record to a CSV line, quoting values that contain commas."""
        row = record_to_dict(row)
        buffer = StringIO()
        csv.writer(buffer, lineterminator='').writerow([row.get(field, '') for field in fields])
        return buffer.getvalue()


class WriteToParquetTransform(beam.PTransform):
    """A PTransform for writing enriched records to a single Parquet file."""

    def __init__(self, output_path):
        super().__init__()
        self.output_path = output_path

    def expand(self, pcoll):
        return (
            pcoll
            | 'To Dict' >> beam.Map(record_to_dict)
            | 'Write Parquet' >> beam.io.WriteToParquet(
                self.output_path,
                ENRICHED_PARQUET_SCHEMA,
                shard_name_template=''
            )
        )


class WriteToSnowflakeTransform(beam.PTransform):
    """A PTransform for loading enriched records into a Snowflake table.

    The table is created from the enriched schema when it does not exist and
    truncated before every load, so each run replaces the previous month."""

    def __init__(self, snowflake_config):
        super().__init__()
        self.config = snowflake_config

    def expand(self, pcoll):
        config = self.config
        logging.info(f"Writing enriched records to Snowflake table {config.qualified_table}")
        return (
            pcoll
            | 'Write to Snowflake' >> WriteToSnowflake(
                server_name=config.server_name,
                schema=config.schema,
                database=config.database,
                staging_bucket_name=config.staging_bucket_name,
                storage_integration_name=config.storage_integration_name,
                create_disposition=CreateDisposition.CREATE_IF_NEEDED,
                write_disposition=WriteDisposition.TRUNCATE,
                table_schema=SNOWFLAKE_TABLE_SCHEMA,
                user_data_mapper=self.to_row,
                table=config.table,
                role=config.role,
                warehouse=config.warehouse,
                username=config.username,
                password=config.password
            )
        )

    @staticmethod
    def to_row(record):
        """Map an enriched record to the column values Snowflake expects."""
        row = record_to_dict(record)
        return [
            row[field].isoformat() if field == 'order_date' else str(row[field])
            for field in ENRICHED_FIELDS
        ]
