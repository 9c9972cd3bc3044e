import apache_beam as beam
from apache_beam.metrics import Metrics

from superstore_pipeline.transformer import (
    DateErrorPolicy,
    REJECT_DATE_ERROR,
    transform_records,
)

FILTERED_TAG = 'filtered'
DATE_ERRORS_TAG = 'date_errors'
ENRICHED_TAG = 'enriched'


class EnrichSalesTransform(beam.PTransform):

    """Apache Beam PTransform that runs the record transformer over each element.

    Records with an unparsable order date are skipped or fail the job,
    depending on ``on_date_error``. Records without positive sales and profit
    are dropped. Dropped records are emitted on the ``filtered`` and
    ``date_errors`` side outputs, which the pipeline only writes on request.
    """

    def __init__(self, on_date_error=DateErrorPolicy.SKIP):
        super().__init__()
        self.on_date_error = DateErrorPolicy.parse(on_date_error)

    def expand(self, pcoll):
        return (
            pcoll
            | 'Enrich Records' >> beam.ParDo(EnrichSalesDoFn(self.on_date_error)).with_outputs(
                FILTERED_TAG, DATE_ERRORS_TAG, main=ENRICHED_TAG
            )
        )


class EnrichSalesDoFn(beam.DoFn):

    def __init__(self, on_date_error):
        self.on_date_error = DateErrorPolicy.parse(on_date_error)
        self.enriched_counter = Metrics.counter(self.__class__, 'enriched_records')
        self.filtered_counter = Metrics.counter(self.__class__, 'filtered_records')
        self.date_error_counter = Metrics.counter(self.__class__, 'date_errors')

    def process(self, record):
        rejections = []
        for enriched in transform_records([record], self.on_date_error, rejections.append):
            self.enriched_counter.inc()
            yield enriched

        for rejection in rejections:
            if rejection.reason == REJECT_DATE_ERROR:
                self.date_error_counter.inc()
                yield beam.pvalue.TaggedOutput(DATE_ERRORS_TAG, rejection)
            else:
                self.filtered_counter.inc()
                yield beam.pvalue.TaggedOutput(FILTERED_TAG, rejection)
