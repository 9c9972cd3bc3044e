import apache_beam as beam
import logging
import csv
from io import StringIO

from superstore_pipeline.errors import SchemaMismatchError
from superstore_pipeline.schemas.records import RAW_FIELDS, coerce_raw_record


def parse_csv_line(line):
    """Parse one comma-separated Superstore line into a RawSalesRecord."""
    try:
        fields = next(csv.reader(StringIO(line)))
    except (StopIteration, csv.Error) as e:
        raise SchemaMismatchError(f"Unreadable CSV line: {e}", line=line) from None

    if len(fields) != len(RAW_FIELDS):
        raise SchemaMismatchError(
            f"Expected {len(RAW_FIELDS)} fields, got {len(fields)}", line=line
        )
    return coerce_raw_record(fields)


def iter_csv_records(lines, skip_header=True):
    """Lazily parse an iterable of CSV lines, skipping the header and blank lines."""
    for number, line in enumerate(lines):
        if skip_header and number == 0:
            continue
        line = line.rstrip('\r\n')
        if not line.strip():
            continue
        yield parse_csv_line(line)


class ParseCSVTransform(beam.PTransform):

    """Apache Beam transform for parsing Superstore sales CSV data.
    - Parses raw CSV lines into RawSalesRecord values
    - Converts quantity to int and discount, sales and profit to float
    - Fails the run on lines that do not fit the 14-field schema
    """

    def expand(self, pcoll):
        return pcoll | beam.ParDo(ParseCSVDoFn())


class ParseCSVDoFn(beam.DoFn):

    def process(self, line):
        if not line.strip():
            return
        try:
            yield parse_csv_line(line)
        except SchemaMismatchError as e:
            logging.error(f"Error parsing row: {line}. Error: {e}")
            raise
