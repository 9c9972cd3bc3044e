import apache_beam as beam
from apache_beam.options.pipeline_options import PipelineOptions, SetupOptions, StandardOptions
import argparse
import logging
import os

from superstore_pipeline.config import PipelineConfig, SnowflakeConfig
from superstore_pipeline.errors import ConfigurationError, OutputValidationError
from superstore_pipeline.schemas import ENRICHED_CSV_HEADERS, REJECTED_CSV_HEADERS, SUMMARY_CSV_HEADERS
from superstore_pipeline.transforms.parse_transforms import ParseCSVTransform
from superstore_pipeline.transforms.enrich_transforms import EnrichSalesTransform
from superstore_pipeline.transforms.sales_transforms import MonthlySummaryTransform
from superstore_pipeline.transforms.io_transforms import (
    WriteToCSVTransform,
    WriteToParquetTransform,
    WriteToSnowflakeTransform,
)
from superstore_pipeline.transforms.utils import validate_output_paths, rejection_to_dict

SETUP_FILE = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..', 'setup.py'))
LOCAL_RUNNERS = ('DirectRunner', 'PrismRunner', 'InteractiveRunner')


def build_pipeline(p, config):
    """Attach the read, transform and write stages for ``config`` to pipeline ``p``."""

    # Stage 1: Data Ingestion
    # Read the staged extract and parse each line against the fixed schema
    raw_data = (
        p
        | 'Read CSV' >> beam.io.ReadFromText(config.input_path, skip_header_lines=1)
        | 'Parse CSV' >> ParseCSVTransform()
    )

    # Stage 2: Enrichment
    # Normalise dates, drop unprofitable rows and derive reporting columns
    results = raw_data | 'Enrich Sales' >> EnrichSalesTransform(config.date_error_policy)
    enriched = results.enriched

    # Stage 3: Data Output
    if config.output_format == 'parquet':
        _ = enriched | 'Write Enriched Parquet' >> WriteToParquetTransform(config.enriched_output)
    else:
        _ = enriched | 'Write Enriched CSV' >> WriteToCSVTransform(
            config.enriched_output,
            ENRICHED_CSV_HEADERS
        )

    if config.snowflake is not None:
        _ = enriched | 'Load Snowflake' >> WriteToSnowflakeTransform(config.snowflake)

    # Stage 4: Optional audit and summary outputs
    if config.write_rejects:
        _ = (
            (results.filtered, results.date_errors)
            | 'Merge Rejections' >> beam.Flatten()
            | 'Flatten Rejections' >> beam.Map(rejection_to_dict)
            | 'Write Rejections' >> WriteToCSVTransform(config.rejects_output, REJECTED_CSV_HEADERS)
        )

    if config.write_summary:
        _ = (
            enriched
            | 'Summarise Sales' >> MonthlySummaryTransform()
            | 'Write Summary' >> WriteToCSVTransform(config.summary_output, SUMMARY_CSV_HEADERS)
        )

    return results


def run_pipeline(config=None, options=None):

    """
    Executes a Beam pipeline that processes the monthly Superstore sales extract.

    The pipeline performs the following operations:
    1. Reads and parses the staged CSV file
    2. Enriches each record with profit margin, discounted sales, year and month
    3. Writes enriched data to CSV or Parquet and, when configured, to Snowflake
    4. Optionally writes rejected rows and a monthly summary per region
    5. Validates that the output files exist
    """

    config = (config or PipelineConfig.from_env()).validate()

    if options is None:
        options = PipelineOptions(runner='DirectRunner')

    # Remote workers need the package installed from setup.py
    runner = options.view_as(StandardOptions).runner or 'DirectRunner'
    setup_options = options.view_as(SetupOptions)
    if runner not in LOCAL_RUNNERS and setup_options.setup_file is None and os.path.exists(SETUP_FILE):
        setup_options.setup_file = SETUP_FILE

    logging.info(
        f"Running Superstore pipeline on {runner}: input={config.input_path}, "
        f"output={config.output_dir}, on_date_error={config.date_error_policy.value}"
    )

    p = beam.Pipeline(options=options)
    build_pipeline(p, config)
    result = p.run()
    result.wait_until_finish()

    # Stage 5: Output Validation
    validation_result = validate_output_paths(config.expected_outputs)
    logging.info(f"Output validation result: {validation_result}")
    if not validation_result:
        raise OutputValidationError(
            f"Pipeline finished but outputs are missing under {config.output_dir}",
            paths=config.expected_outputs,
        )

    return result


def parse_args(argv=None):
    """Split command line flags into a PipelineConfig and Beam pipeline options."""
    parser = argparse.ArgumentParser(description='Enrich a Superstore sales extract for reporting.')
    parser.add_argument('--input', dest='input_path', help='CSV file to read, e.g. azfs://account/container/sales.csv')
    parser.add_argument('--output_dir', help='Directory or blob prefix for output files')
    parser.add_argument('--on_date_error', choices=['skip', 'abort'])
    parser.add_argument('--output_format', choices=['csv', 'parquet'])
    parser.add_argument('--write_rejects', action='store_true', help='Write dropped rows with the reason')
    parser.add_argument('--write_summary', action='store_true', help='Write totals per month and region')
    parser.add_argument('--load_snowflake', action='store_true', help='Load enriched rows using SNOWFLAKE_* settings')
    known_args, pipeline_args = parser.parse_known_args(argv)

    try:
        config = PipelineConfig.from_env()
        for name in ('input_path', 'output_dir', 'on_date_error', 'output_format'):
            value = getattr(known_args, name)
            if value:
                setattr(config, name, value)
        config.write_rejects = config.write_rejects or known_args.write_rejects
        config.write_summary = config.write_summary or known_args.write_summary
        if known_args.load_snowflake and config.snowflake is None:
            config.snowflake = SnowflakeConfig.from_env()
        config.validate()
    except ConfigurationError as e:
        parser.error(str(e))

    return config, PipelineOptions(pipeline_args)


def main(argv=None):
    logging.getLogger().setLevel(logging.INFO)
    config, options = parse_args(argv)
    return run_pipeline(config, options)


if __name__ == '__main__':
    main()
