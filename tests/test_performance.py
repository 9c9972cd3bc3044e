import pytest
import time
import apache_beam as beam
from apache_beam.testing.test_pipeline import TestPipeline
from apache_beam.testing.util import assert_that, equal_to

from superstore_pipeline.transformer import transform_all, transform_records
from superstore_pipeline.transforms.parse_transforms import iter_csv_records
from superstore_pipeline.transforms.enrich_transforms import EnrichSalesTransform
from tests.conftest import make_raw_record

HEADER = "Order ID,Order Date,Month of Sale,Customer ID,Customer Name,Country,Region,City,Category,Sub-Category,Quantity,Discount,Sales,Profit"


def generate_large_dataset(size=1000):
    """Generate a large test dataset."""
    return [HEADER] + [
        f"O{i},2024-03-{i % 28 + 1:02d},March,C{i},Customer {i},United States,West,Seattle,Technology,Phones,1,0.1,{i + 1}.0,{i % 5 - 1}.0"
        for i in range(size)
    ]


def test_transform_performance():
    """Test performance of the record transformer with a large dataset."""
    start_time = time.time()

    output = list(transform_records(iter_csv_records(generate_large_dataset(10000))))

    execution_time = time.time() - start_time
    # profit is positive for i % 5 in (2, 3, 4)
    assert len(output) == 6000
    assert (
        execution_time < 10.0
    ), f"Performance test failed: {execution_time:.2f} seconds"


def test_enrich_transform_on_pipeline():
    """Test the Beam enrichment transform with a large dataset."""
    records = [make_raw_record(order_id=f"O{i}", profit=float(i % 2)) for i in range(1000)]

    with TestPipeline() as p:
        output = (
            p
            | "Create" >> beam.Create(records)
            | "Enrich" >> EnrichSalesTransform()
        )
        counted = output.enriched | "Count" >> beam.combiners.Count.Globally()

        assert_that(counted, equal_to([500]))


def test_memory_usage():
    """Test memory usage during a parallel transformer run."""
    import psutil
    import os

    process = psutil.Process(os.getpid())
    initial_memory = process.memory_info().rss / 1024 / 1024

    records = list(iter_csv_records(generate_large_dataset(size=20000)))
    output = transform_all(records, workers=4)

    final_memory = process.memory_info().rss / 1024 / 1024
    memory_increase = final_memory - initial_memory
    assert len(output) == 12000
    assert memory_increase < 500, f"Memory usage too high: {memory_increase:.2f}MB"
