import datetime

import apache_beam as beam
from apache_beam.testing.test_pipeline import TestPipeline
from apache_beam.testing.util import assert_that, equal_to
import pytest

from superstore_pipeline.transformer import DateErrorPolicy, transform_record
from superstore_pipeline.transforms.enrich_transforms import EnrichSalesTransform
from tests.conftest import make_raw_record


def input_records():
    return [
        make_raw_record(order_id="O1"),
        make_raw_record(order_id="O2", sales=50.0, profit=-5.0),
        make_raw_record(order_id="O3", order_date="15-03-2024"),
        make_raw_record(order_id="O4", order_date="2024-04-02", discount=0.25, sales=200.0, profit=50.0),
    ]


class TestEnrichTransforms:
    def test_enriched_output(self):
        records = input_records()

        with TestPipeline() as p:
            results = p | beam.Create(records) | EnrichSalesTransform()

            expected_output = [transform_record(records[0]), transform_record(records[3])]
            assert_that(results.enriched, equal_to(expected_output))

        assert expected_output[1].order_date == datetime.date(2024, 4, 2)
        assert expected_output[1].discounted_sales == pytest.approx(150.0)

    def test_rejections_go_to_side_outputs(self):
        with TestPipeline() as p:
            results = p | beam.Create(input_records()) | EnrichSalesTransform(DateErrorPolicy.SKIP)

            filtered_ids = results.filtered | "Filtered Ids" >> beam.Map(lambda r: (r.reason, r.record.order_id))
            date_error_ids = results.date_errors | "Date Error Ids" >> beam.Map(lambda r: (r.reason, r.record.order_id))

            assert_that(filtered_ids, equal_to([("filtered", "O2")]), label="CheckFiltered")
            assert_that(date_error_ids, equal_to([("date_error", "O3")]), label="CheckDateErrors")

    def test_abort_policy_fails_the_run(self):
        with pytest.raises(Exception, match="15-03-2024"):
            with TestPipeline() as p:
                _ = p | beam.Create(input_records()) | EnrichSalesTransform("abort")
