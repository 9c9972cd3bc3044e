import sys
from pathlib import Path

import pytest

# Get absolute paths
root_dir = Path(__file__).parent.parent
src_dir = root_dir / "src"

# Add paths to sys.path if they're not already there
if str(src_dir) not in sys.path:
    sys.path.insert(0, str(src_dir))
if str(root_dir) not in sys.path:
    sys.path.insert(0, str(root_dir))

from superstore_pipeline.schemas import RawSalesRecord  # noqa: E402


def make_raw_record(**overrides):
    """Build a RawSalesRecord with sensible defaults for the fields a test does not care about."""
    fields = {
        "order_id": "O1",
        "order_date": "2024-03-15",
        "month_of_sale": "March",
        "customer_id": "C001",
        "customer_name": "Alice Brown",
        "country": "United States",
        "region": "West",
        "city": "Seattle",
        "category": "Technology",
        "subcategory": "Phones",
        "quantity": 2,
        "discount": 0.1,
        "sales": 100.0,
        "profit": 20.0,
    }
    fields.update(overrides)
    return RawSalesRecord(**fields)


@pytest.fixture
def raw_record():
    return make_raw_record


@pytest.fixture
def clean_env(monkeypatch):
    """Remove pipeline settings from the environment so tests start from defaults."""
    for name in (
        "SUPERSTORE_INPUT_PATH",
        "SUPERSTORE_INPUT_BLOB",
        "SUPERSTORE_OUTPUT_DIR",
        "SUPERSTORE_ON_DATE_ERROR",
        "SUPERSTORE_OUTPUT_FORMAT",
        "SUPERSTORE_WRITE_REJECTS",
        "SUPERSTORE_WRITE_SUMMARY",
        "SUPERSTORE_LOAD_SNOWFLAKE",
        "AZURE_STORAGE_ACCOUNT",
        "AZURE_STORAGE_CONTAINER",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
